"""Exception types raised by JAX Frames.

Every error derives from :class:`FramesError` and from the builtin exception
that best describes it, so callers may catch either.
"""


class FramesError(Exception):
    """Base exception for all JAX Frames errors."""

    pass


class DimensionMismatchError(FramesError, ValueError):
    """An array argument does not have the required shape."""

    pass


class NullArgumentError(FramesError, TypeError):
    """A required argument was ``None``."""

    pass


class FrameNotFoundError(FramesError, LookupError):
    """No frame with the requested name exists in the tree."""

    pass


class FrameTreeError(FramesError, ValueError):
    """An operation would break the frame tree structure."""

    pass


class DuplicateNameError(FrameTreeError):
    """A parent already holds a different child with the same name."""

    pass


__all__ = [
    "FramesError",
    "DimensionMismatchError",
    "NullArgumentError",
    "FrameNotFoundError",
    "FrameTreeError",
    "DuplicateNameError",
]
