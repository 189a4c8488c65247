"""
JAX Frames: reference-frame trees and homogeneous transforms for robotics.

This library provides a named tree of coordinate frames whose edges carry
rigid-body poses, together with JIT-compilable homogeneous transformation
matrices (Denavit-Hartenberg construction, composition and rigid inversion)
implemented with JAX.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import common
from . import transforms
from . import core
from . import chain
from . import io

from .common.errors import (
    DimensionMismatchError,
    DuplicateNameError,
    FrameNotFoundError,
    FramesError,
    FrameTreeError,
    NullArgumentError,
)
from .core import ReferenceFrame
from .transforms import HomogeneousTM, compose

__version__ = "0.1.0"
__all__ = [
    "common",
    "transforms",
    "core",
    "chain",
    "io",
    "ReferenceFrame",
    "HomogeneousTM",
    "compose",
    "FramesError",
    "DimensionMismatchError",
    "NullArgumentError",
    "FrameNotFoundError",
    "FrameTreeError",
    "DuplicateNameError",
]
