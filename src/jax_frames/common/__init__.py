"""Shared plumbing for JAX Frames: error types, logging and configuration."""

from .config import FramesConfig, get_config, load_config, set_config
from .errors import (
    DimensionMismatchError,
    DuplicateNameError,
    FrameNotFoundError,
    FramesError,
    FrameTreeError,
    NullArgumentError,
)
from .logging import get_logger, setup_logging

__all__ = [
    "FramesConfig",
    "get_config",
    "load_config",
    "set_config",
    "FramesError",
    "DimensionMismatchError",
    "NullArgumentError",
    "FrameNotFoundError",
    "FrameTreeError",
    "DuplicateNameError",
    "get_logger",
    "setup_logging",
]
