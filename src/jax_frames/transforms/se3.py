"""SE(3) homogeneous transforms in JAX.

This module implements rigid body transforms as raw (..., 4, 4) homogeneous
matrices: Denavit-Hartenberg construction, rotation + translation assembly,
composition, block-structured inversion and point application. All functions
are pure, JIT-able, and operate on JAX arrays without validating shapes;
:class:`jax_frames.transforms.HomogeneousTM` is the checked interface.
"""


import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def translation_vector(x: so3.Scalar, y: so3.Scalar, z: so3.Scalar) -> Array:
    """
    Build a translation column.

    Args:
        x, y, z: translation components

    Returns:
        (..., 3, 1) column vector
    """
    x, y, z = jnp.broadcast_arrays(*(jnp.asarray(v, dtype=float) for v in (x, y, z)))
    return jnp.stack([x, y, z], axis=-1)[..., None]


def identity(dtype=float) -> Array:
    """(4, 4) identity transform."""
    return jnp.eye(4, dtype=dtype)


def from_rotation_translation(R: Array, t: Array) -> Array:
    """
    Construct SE(3) transform from rotation and translation.

    Args:
        R: (..., 3, 3) rotation matrix
        t: (..., 3, 1) translation column

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    p = t[..., 0]

    # Ensure consistent batch shapes
    batch_shape = jnp.broadcast_shapes(p.shape[:-1], R.shape[:-2])
    p = jnp.broadcast_to(p, batch_shape + (3,))
    R = jnp.broadcast_to(R, batch_shape + (3, 3))

    # Start from zeros so the homogeneous row is exactly [0, 0, 0, 1]
    T = jnp.zeros(batch_shape + (4, 4), dtype=jnp.result_type(p, R))
    T = T.at[..., :3, :3].set(R)
    T = T.at[..., :3, 3].set(p)
    T = T.at[..., 3, 3].set(1.0)

    return T


def from_dh(a: so3.Scalar, alpha: so3.Scalar, d: so3.Scalar, theta: so3.Scalar) -> Array:
    """
    Construct SE(3) transform from standard Denavit-Hartenberg parameters.

    The result is ``Rot_z(theta) Trans_z(d) Trans_x(a) Rot_x(alpha)``.

    Args:
        a: link length, distance between z_{i-1} and z_i along x_i
        alpha: link twist, angle from z_{i-1} to z_i about x_i (radians)
        d: link offset, distance along z_{i-1} to the x_i intersection
        theta: joint angle, angle from x_{i-1} to x_i about z_{i-1} (radians)

    Returns:
        (..., 4, 4) homogeneous transformation matrix
    """
    a, alpha, d, theta = jnp.broadcast_arrays(
        *(jnp.asarray(v, dtype=float) for v in (a, alpha, d, theta))
    )
    ct, st = jnp.cos(theta), jnp.sin(theta)
    ca, sa = jnp.cos(alpha), jnp.sin(alpha)
    zeros, ones = jnp.zeros_like(ct), jnp.ones_like(ct)

    return jnp.stack([
        jnp.stack([ct, -st * ca, st * sa, a * ct], axis=-1),
        jnp.stack([st, ct * ca, -ct * sa, a * st], axis=-1),
        jnp.stack([zeros, sa, ca, d], axis=-1),
        jnp.stack([zeros, zeros, zeros, ones], axis=-1)
    ], axis=-2)


def multiply(T1: Array, T2: Array) -> Array:
    """
    Multiply two SE(3) transformation matrices.

    Args:
        T1: (..., 4, 4) first transformation matrix
        T2: (..., 4, 4) second transformation matrix

    Returns:
        (..., 4, 4) result of T1 @ T2 (apply T2 first, then T1)
    """
    return jnp.matmul(T1, T2)


def inverse(T: Array) -> Array:
    """
    Compute inverse of SE(3) transformation matrix.

    Uses the block structure instead of a general matrix inverse:
    T^-1 = [[R^T, -R^T @ t], [0, 1]]. Only valid when R is orthonormal.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 4, 4) inverse transformation matrix
    """
    R = get_rotation(T)
    t = get_translation(T)

    # Rotation inverse (transpose)
    R_inv = so3.inverse(R)

    # Translation inverse
    t_inv = -jnp.matmul(R_inv, t)

    return from_rotation_translation(R_inv, t_inv)


def apply(T: Array, points: Array) -> Array:
    """
    Apply SE(3) transformation to points.

    Args:
        T: (..., 4, 4) transformation matrix
        points: (..., 3) or (..., N, 3) points to transform

    Returns:
        (..., 3) or (..., N, 3) transformed points
    """
    # Convert points to homogeneous coordinates
    ones = jnp.ones_like(points[..., 0:1])
    points_h = jnp.concatenate([points, ones], axis=-1)

    if points.ndim == T.ndim - 1:
        transformed_h = jnp.einsum("...ij,...j->...i", T, points_h)
    else:
        transformed_h = jnp.einsum("...ij,...nj->...ni", T, points_h)

    # Bottom row is [0, 0, 0, 1], so no perspective divide
    return transformed_h[..., :3]


def get_translation(T: Array) -> Array:
    """
    Extract translation column from SE(3) transformation matrix.

    Args:
        T: (..., 4, 4) transformation matrix

    Returns:
        (..., 3, 1) translation column
    """
    return T[..., :3, 3:4]


def get_position(T: Array) -> Array:
    """(..., 3) position vector of an SE(3) transformation matrix."""
    return T[..., :3, 3]


def get_rotation(T: Array) -> Array:
    """(..., 3, 3) rotation block of an SE(3) transformation matrix."""
    return T[..., :3, :3]
