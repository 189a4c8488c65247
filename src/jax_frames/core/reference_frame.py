"""Named tree of coordinate reference frames.

Each frame stores the pose of itself expressed in its parent (the edge
transform), so points and poses can be resolved between any two frames of the
same tree. Lookups always walk the live tree; nothing is cached, so results
stay correct while the tree is being built.

The tree is not synchronized. Mutating a shared tree from several threads must
be serialized by the caller; reading a finished tree is safe.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Union

import jax

from ..common.errors import (
    DuplicateNameError,
    FrameNotFoundError,
    FrameTreeError,
    NullArgumentError,
)
from ..common.logging import get_logger
from ..transforms import HomogeneousTM, compose, compose_all

Array = jax.Array
EdgeTransform = Union[None, HomogeneousTM, Sequence[HomogeneousTM]]

logger = get_logger(__name__)


class ReferenceFrame:
    """A named node in a tree of coordinate frames.

    Attributes:
        name: Identifier of the frame. Read-only.
        parent: Frame this one is attached to, or None for a root.
        children: Child frames keyed by name, in ascending key order.
        transform: Pose of this frame in its parent. Maps coordinates expressed
                   in this frame to coordinates expressed in ``parent``.
                   Identity for a root.
    """

    def __init__(self, name: str):
        self._name = name
        self._parent: Optional[ReferenceFrame] = None
        self._children: Dict[str, ReferenceFrame] = {}
        self._transform = HomogeneousTM.identity()

    def __repr__(self) -> str:
        return f"ReferenceFrame({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional["ReferenceFrame"]:
        return self._parent

    @property
    def children(self) -> Dict[str, "ReferenceFrame"]:
        return {key: self._children[key] for key in sorted(self._children)}

    @property
    def transform(self) -> HomogeneousTM:
        return self._transform

    @property
    def root(self) -> "ReferenceFrame":
        frame = self
        while frame._parent is not None:
            frame = frame._parent
        return frame

    def path_from_root(self) -> List["ReferenceFrame"]:
        """Frames from the root down to and including ``self``."""
        path = [self]
        while path[-1]._parent is not None:
            path.append(path[-1]._parent)
        path.reverse()
        return path

    # Tree structure
    def add_child(self, child: "ReferenceFrame",
                  transform: EdgeTransform = None) -> "ReferenceFrame":
        """Attach ``child`` below this frame.

        Args:
            child: Frame to attach. Detached from its previous parent, if any.
            transform: Pose of ``child`` in this frame. A sequence of transforms
                       (for example one per DH link) is composed left to right.
                       None means identity.

        Returns:
            ``child``, so chains can be built fluently.

        Raises:
            NullArgumentError: if ``child`` is None.
            DuplicateNameError: if a different child with the same name is
                                already attached. Nothing is modified.
            FrameTreeError: if ``child`` is this frame or one of its ancestors.
        """
        if child is None:
            raise NullArgumentError("child frame must not be None")
        if any(frame is child for frame in self.path_from_root()):
            raise FrameTreeError(
                f"Attaching '{child.name}' under '{self._name}' would create a cycle")

        existing = self._children.get(child.name)
        if existing is not None and existing is not child:
            raise DuplicateNameError(
                f"Frame '{self._name}' already has a child named '{child.name}'")

        edge = _edge_transform(transform)

        if child._parent is not None and child._parent is not self:
            child.detach()

        child._parent = self
        child._transform = edge
        self._children[child.name] = child
        logger.debug("Attached frame '%s' to '%s'", child.name, self._name)
        return child

    def detach(self) -> "ReferenceFrame":
        """Remove this frame (and its subtree) from its parent; it becomes a root."""
        if self._parent is None:
            return self

        del self._parent._children[self._name]
        logger.debug("Detached frame '%s' from '%s'", self._name, self._parent.name)
        self._parent = None
        self._transform = HomogeneousTM.identity()
        return self

    # Lookup
    def iter_frames(self) -> Iterator["ReferenceFrame"]:
        """Depth-first pre-order walk of this subtree, children by ascending name."""
        stack = [self]
        while stack:
            frame = stack.pop()
            yield frame
            # Reverse order so the smallest name is popped first
            for key in sorted(frame._children, reverse=True):
                stack.append(frame._children[key])

    def search_child_frame(self, name: str) -> Optional["ReferenceFrame"]:
        """First frame called ``name`` in this subtree (self first), or None."""
        for frame in self.iter_frames():
            if frame._name == name:
                return frame
        return None

    def search_frame(self, name: str) -> Optional["ReferenceFrame"]:
        """Look ``name`` up in the whole tree, whichever node ``self`` is."""
        return self.root.search_child_frame(name)

    def get_frame(self, name: str) -> "ReferenceFrame":
        """Like :meth:`search_frame` but raises FrameNotFoundError when absent."""
        root = self.root
        found = root.search_child_frame(name)
        if found is None:
            raise FrameNotFoundError(f"Frame '{name}' not found in tree rooted at '{root.name}'")
        return found

    # Pose resolution
    def pose_in_root(self) -> HomogeneousTM:
        """Maps coordinates in this frame to coordinates in the tree root."""
        return compose_all(frame._transform for frame in self.path_from_root()[1:])

    def transform_to(self, target: Union["ReferenceFrame", str]) -> HomogeneousTM:
        """Transform taking coordinates in this frame to coordinates in ``target``.

        Args:
            target: A frame of the same tree, or its name.

        Raises:
            FrameNotFoundError: if ``target`` is a name that is not in the tree.
            FrameTreeError: if ``target`` belongs to a different tree.
        """
        if target is None:
            raise NullArgumentError("target frame must not be None")
        if isinstance(target, str):
            target = self.get_frame(target)
        if target.root is not self.root:
            raise FrameTreeError(
                f"Frames '{self._name}' and '{target.name}' are not in the same tree")

        return compose(target.pose_in_root().inverse, self.pose_in_root())

    def express_point(self, point: Array, target: Union["ReferenceFrame", str]) -> Array:
        """Coordinates in ``target`` of a point given in this frame."""
        return self.transform_to(target).transform_point(point)


def _edge_transform(transform: EdgeTransform) -> HomogeneousTM:
    if transform is None:
        return HomogeneousTM.identity()
    if isinstance(transform, HomogeneousTM):
        return transform

    transforms = list(transform)
    for item in transforms:
        if not isinstance(item, HomogeneousTM):
            raise TypeError(f"Expected HomogeneousTM, got {type(item).__name__}")
    return compose_all(transforms)
