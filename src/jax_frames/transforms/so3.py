"""SO(3) rotation matrices in JAX.

Elementary rotations about the principal axes and their roll-pitch-yaw
composition. Naming follows the planner convention: *roll* turns about z,
*pitch* about y and *yaw* about x. All functions are pure, JIT-able and
broadcast over leading batch dimensions of the angle arguments.
"""

import jax
import jax.numpy as jnp
from typing import Union

Array = jax.Array
Scalar = Union[float, Array]


def roll_z(angle: Scalar) -> Array:
    """
    Right-handed rotation about the z axis.

    Args:
        angle: (...,) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrix
    """
    angle = jnp.asarray(angle, dtype=float)
    c, s = jnp.cos(angle), jnp.sin(angle)
    zeros, ones = jnp.zeros_like(c), jnp.ones_like(c)

    return jnp.stack([
        jnp.stack([c, -s, zeros], axis=-1),
        jnp.stack([s, c, zeros], axis=-1),
        jnp.stack([zeros, zeros, ones], axis=-1)
    ], axis=-2)


def pitch_y(angle: Scalar) -> Array:
    """
    Right-handed rotation about the y axis.

    Args:
        angle: (...,) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrix
    """
    angle = jnp.asarray(angle, dtype=float)
    c, s = jnp.cos(angle), jnp.sin(angle)
    zeros, ones = jnp.zeros_like(c), jnp.ones_like(c)

    return jnp.stack([
        jnp.stack([c, zeros, s], axis=-1),
        jnp.stack([zeros, ones, zeros], axis=-1),
        jnp.stack([-s, zeros, c], axis=-1)
    ], axis=-2)


def yaw_x(angle: Scalar) -> Array:
    """
    Right-handed rotation about the x axis.

    Args:
        angle: (...,) rotation angle in radians

    Returns:
        (..., 3, 3) rotation matrix
    """
    angle = jnp.asarray(angle, dtype=float)
    c, s = jnp.cos(angle), jnp.sin(angle)
    zeros, ones = jnp.zeros_like(c), jnp.ones_like(c)

    return jnp.stack([
        jnp.stack([ones, zeros, zeros], axis=-1),
        jnp.stack([zeros, c, -s], axis=-1),
        jnp.stack([zeros, s, c], axis=-1)
    ], axis=-2)


def rotation_matrix(roll: Scalar, pitch: Scalar, yaw: Scalar) -> Array:
    """
    Compose roll, pitch and yaw into a single rotation.

    The product is ``roll_z(roll) @ pitch_y(pitch) @ yaw_x(yaw)``; the order is
    part of the contract since rotations do not commute.

    Args:
        roll: angle about z in radians
        pitch: angle about y in radians
        yaw: angle about x in radians

    Returns:
        (..., 3, 3) rotation matrix
    """
    return jnp.matmul(jnp.matmul(roll_z(roll), pitch_y(pitch)), yaw_x(yaw))


def multiply(R1: Array, R2: Array) -> Array:
    """
    Multiply two rotation matrices.

    Args:
        R1: (..., 3, 3) first rotation matrix
        R2: (..., 3, 3) second rotation matrix

    Returns:
        (..., 3, 3) result of R1 @ R2
    """
    return jnp.matmul(R1, R2)


def inverse(R: Array) -> Array:
    """
    Compute inverse of rotation matrix.

    For rotation matrices, the inverse is simply the transpose.

    Args:
        R: (..., 3, 3) rotation matrix

    Returns:
        (..., 3, 3) inverse rotation matrix
    """
    return jnp.swapaxes(R, -1, -2)


def apply(R: Array, v: Array) -> Array:
    """
    Apply rotation to vector(s).

    Args:
        R: (..., 3, 3) rotation matrix
        v: (..., 3) or (..., N, 3) vector(s) to rotate

    Returns:
        (..., 3) or (..., N, 3) rotated vector(s)
    """
    if v.ndim == R.ndim - 1:  # Single vector case
        return jnp.einsum('...ij,...j->...i', R, v)
    else:  # Multiple vectors case
        return jnp.einsum('...ij,...nj->...ni', R, v)


def is_orthonormal(R: Array, atol: float = 1e-9) -> bool:
    """Check ``R^T R == I`` within ``atol``. Not traceable under ``jax.jit``."""
    R = jnp.asarray(R)
    if R.shape[-2:] != (3, 3):
        return False
    gram = jnp.matmul(inverse(R), R)
    return bool(jnp.allclose(gram, jnp.eye(3, dtype=gram.dtype), atol=atol))
