"""Immutable homogeneous transformation matrix."""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Optional

import jax
import jax.numpy as jnp
from flax import struct

from ..common.config import get_config
from ..common.errors import DimensionMismatchError, NullArgumentError
from . import se3, so3

Array = jax.Array


@struct.dataclass
class HomogeneousTM:
    """Rigid-body pose stored as a single (4, 4) homogeneous matrix.

    The top-left 3x3 block is the rotation, the top-right column the
    translation and the bottom row is always [0, 0, 0, 1]. Instances are frozen
    PyTrees, so they can be passed through ``jax.jit`` and ``jax.vmap``.

    Build instances with the ``from_*`` / ``identity`` constructors; calling
    ``HomogeneousTM(matrix)`` directly skips validation.

    Attributes:
        matrix: Array of shape (4, 4).
    """
    matrix: Array

    def __eq__(self, other):
        """Exact element-wise equality; use :meth:`allclose` for tolerances."""
        if not isinstance(other, HomogeneousTM):
            return NotImplemented
        return bool(jnp.array_equal(self.matrix, other.matrix))

    # jax.Array is unhashable, so instances are too
    __hash__ = None

    # Constructors
    @classmethod
    def identity(cls) -> "HomogeneousTM":
        return cls(se3.identity())

    @classmethod
    def from_dh(cls, a: so3.Scalar, alpha: so3.Scalar, d: so3.Scalar,
                theta: so3.Scalar) -> "HomogeneousTM":
        """Pose of link frame i in frame i-1 from standard DH parameters.

        Args:
            a: distance between z_{i-1} and z_i, along x_i
            alpha: angle between z_{i-1} and z_i, about x_i (radians)
            d: distance from o_{i-1} to the x_i / z_{i-1} intersection, along z_{i-1}
            theta: angle between x_{i-1} and x_i, about z_{i-1} (radians)
        """
        return cls(se3.from_dh(a, alpha, d, theta))

    @classmethod
    def from_rotation_translation(cls, rotation: Array, translation: Array) -> "HomogeneousTM":
        """Rotation followed by translation.

        Args:
            rotation: (3, 3) rotation matrix
            translation: (3, 1) translation column

        Raises:
            NullArgumentError: if either argument is None
            DimensionMismatchError: if the shapes are not exactly (3, 3) and (3, 1)
        """
        if rotation is None or translation is None:
            raise NullArgumentError("rotation and translation must not be None")

        rotation = jnp.asarray(rotation, dtype=float)
        translation = jnp.asarray(translation, dtype=float)
        if rotation.shape != (3, 3):
            raise DimensionMismatchError(
                f"rotation must be a 3x3 matrix, got shape {rotation.shape}")
        if translation.shape != (3, 1):
            raise DimensionMismatchError(
                f"translation must be a 3x1 matrix, got shape {translation.shape}")

        return cls(se3.from_rotation_translation(rotation, translation))

    @classmethod
    def from_matrix(cls, matrix: Array) -> "HomogeneousTM":
        """Wrap an existing (4, 4) homogeneous matrix after checking its last row.

        Needs concrete values, so it cannot be used inside ``jax.jit``.
        """
        if matrix is None:
            raise NullArgumentError("matrix must not be None")

        matrix = jnp.asarray(matrix, dtype=float)
        if matrix.shape != (4, 4):
            raise DimensionMismatchError(f"matrix must have shape (4, 4), got {matrix.shape}")
        if not jnp.allclose(matrix[3], jnp.array([0.0, 0.0, 0.0, 1.0]),
                            atol=get_config().rigid_atol):
            raise DimensionMismatchError(
                f"bottom row must be [0, 0, 0, 1], got {matrix[3].tolist()}")
        return cls(matrix)

    def copy(self) -> "HomogeneousTM":
        """Independent copy; no array storage is shared with ``self``."""
        return HomogeneousTM(jnp.array(self.matrix, copy=True))

    def __copy__(self) -> "HomogeneousTM":
        return self.copy()

    def __deepcopy__(self, memo) -> "HomogeneousTM":
        return self.copy()

    # Blocks
    @property
    def rotation(self) -> Array:
        return se3.get_rotation(self.matrix)

    @property
    def translation(self) -> Array:
        return se3.get_translation(self.matrix)

    @property
    def position(self) -> Array:
        return se3.get_position(self.matrix)

    # Basic operations
    @property
    def inverse(self) -> "HomogeneousTM":
        """Rigid inverse: rotation R^T and translation -R^T t."""
        return HomogeneousTM(se3.inverse(self.matrix))

    def compose(self, other: "HomogeneousTM") -> "HomogeneousTM":
        """Self ∘ other (apply *other* first, then self)."""
        return compose(self, other)

    def __matmul__(self, other):
        if not isinstance(other, HomogeneousTM):
            return NotImplemented
        return compose(self, other)

    # Point transformation
    def transform_point(self, point: Array) -> Array:
        """
        Map a single 3D point through this transform.

        The point is lifted to [x, y, z, 1], multiplied by ``matrix`` and the
        first three coordinates are returned.

        Args:
            point: (3,) or (3, 1) point

        Returns:
            (3,) transformed point
        """
        if point is None:
            raise NullArgumentError("point must not be None")

        point = jnp.asarray(point, dtype=self.matrix.dtype)
        if point.shape not in ((3,), (3, 1)):
            raise DimensionMismatchError(f"point must have shape (3,) or (3, 1), got {point.shape}")
        return se3.apply(self.matrix, point.reshape(3))

    def transform_points(self, points: Array) -> Array:
        """Map an (N, 3) array of points; returns (N, 3)."""
        if points is None:
            raise NullArgumentError("points must not be None")

        points = jnp.asarray(points, dtype=self.matrix.dtype)
        if points.ndim != 2 or points.shape[-1] != 3:
            raise DimensionMismatchError(f"points must have shape (N, 3), got {points.shape}")
        return se3.apply(self.matrix, points)

    # Checks
    def is_rigid(self, atol: Optional[float] = None) -> bool:
        """True when the bottom row is [0, 0, 0, 1] and the rotation is orthonormal."""
        atol = get_config().rigid_atol if atol is None else atol
        bottom_ok = jnp.allclose(self.matrix[3], jnp.array([0.0, 0.0, 0.0, 1.0]), atol=atol)
        return bool(bottom_ok) and so3.is_orthonormal(self.rotation, atol=atol)

    def allclose(self, other: "HomogeneousTM", atol: Optional[float] = None) -> bool:
        atol = get_config().rigid_atol if atol is None else atol
        return bool(jnp.allclose(self.matrix, other.matrix, rtol=0.0, atol=atol))

    # Static helpers
    translation_vector = staticmethod(se3.translation_vector)
    roll_z = staticmethod(so3.roll_z)
    pitch_y = staticmethod(so3.pitch_y)
    yaw_x = staticmethod(so3.yaw_x)
    rotation_matrix = staticmethod(so3.rotation_matrix)


def compose(hm1: HomogeneousTM, hm2: HomogeneousTM) -> HomogeneousTM:
    """``hm1.matrix @ hm2.matrix``: apply *hm2* first, then *hm1*."""
    if hm1 is None or hm2 is None:
        raise NullArgumentError("both transforms must be given")
    return HomogeneousTM(se3.multiply(hm1.matrix, hm2.matrix))


def compose_all(transforms: Iterable[HomogeneousTM]) -> HomogeneousTM:
    """Left-to-right product ``T0 @ T1 @ ...``; identity for an empty sequence."""
    return reduce(compose, transforms, HomogeneousTM.identity())
