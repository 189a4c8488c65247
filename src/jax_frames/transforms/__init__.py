"""
JAX-based transforms for reference-frame kinematics.

This module provides:
- SO(3) elementary rotations and roll-pitch-yaw composition (so3 module)
- SE(3) homogeneous matrices, DH construction and rigid inversion (se3 module)
- HomogeneousTM, the immutable transform object used by frame trees
"""

from . import so3
from . import se3
from .homogeneous import HomogeneousTM, compose, compose_all

__all__ = [
    "so3",
    "se3",
    "HomogeneousTM",
    "compose",
    "compose_all",
]
