"""Core frame-tree data structures for JAX Frames."""

from .reference_frame import ReferenceFrame

__all__ = ["ReferenceFrame"]
