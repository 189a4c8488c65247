"""Serial Denavit-Hartenberg chains.

Turns a table of DH links into per-link transforms, cumulative forward
kinematics poses, or a linear :class:`ReferenceFrame` chain whose edges carry
the DH poses.
"""

from typing import List, Optional, Sequence

import jax
import jax.numpy as jnp
from flax import struct

from .common.errors import DimensionMismatchError
from .common.logging import get_logger
from .core import ReferenceFrame
from .transforms import HomogeneousTM

Array = jax.Array

logger = get_logger(__name__)


@struct.dataclass
class DHParameters:
    """Standard Denavit-Hartenberg description of one link.

    Attributes:
        a: Link length along x_i.
        alpha: Link twist about x_i, radians.
        d: Link offset along z_{i-1}.
        theta: Joint angle offset about z_{i-1}, radians.
        revolute: True if the joint variable adds to ``theta``, False if it
                  adds to ``d`` (prismatic). Static for JIT compilation.
    """
    a: float
    alpha: float
    d: float
    theta: float
    revolute: bool = struct.field(pytree_node=False, default=True)


def dh_transforms(links: Sequence[DHParameters], q: Optional[Array] = None) -> List[HomogeneousTM]:
    """Pose of each link frame in the previous one.

    Args:
        links: DH table, base to tip
        q: Joint values of shape (len(links),); zeros when omitted

    Returns:
        One HomogeneousTM per link
    """
    links = tuple(links)
    if q is None:
        q = jnp.zeros(len(links))
    else:
        q = jnp.asarray(q, dtype=float)
        if q.shape != (len(links),):
            raise DimensionMismatchError(f"Expected q of shape ({len(links)},), got {q.shape}")

    transforms = []
    for link, q_i in zip(links, q):
        if link.revolute:
            theta, d = link.theta + q_i, link.d
        else:
            theta, d = link.theta, link.d + q_i
        transforms.append(HomogeneousTM.from_dh(link.a, link.alpha, d, theta))
    return transforms


def forward_kinematics(links: Sequence[DHParameters], q: Optional[Array] = None,
                       base: Optional[HomogeneousTM] = None) -> List[HomogeneousTM]:
    """Compute the pose of every link frame in the base frame.

    Args:
        links: DH table, base to tip
        q: Joint values of shape (len(links),); zeros when omitted
        base: Pose of the chain's first frame; identity when omitted

    Returns:
        len(links) + 1 poses, starting with ``base`` and ending with the tip
    """
    poses = [HomogeneousTM.identity() if base is None else base]
    for T_link in dh_transforms(links, q):
        poses.append(poses[-1] @ T_link)
    return poses


def build_frame_chain(names: Sequence[str], links: Sequence[DHParameters],
                      q: Optional[Array] = None,
                      root: Optional[ReferenceFrame] = None) -> ReferenceFrame:
    """Build a linear frame chain whose edge transforms are the DH link poses.

    Args:
        names: Frame names, base to tip. One more than ``links`` when a new
               root is created, exactly ``len(links)`` when extending ``root``.
        links: DH table, base to tip
        q: Joint values of shape (len(links),); zeros when omitted
        root: Existing frame to hang the chain from

    Returns:
        The root frame of the chain
    """
    names = list(names)
    links = tuple(links)
    expected = len(links) if root is not None else len(links) + 1
    if len(names) != expected:
        raise DimensionMismatchError(f"Expected {expected} frame names for {len(links)} links, got {len(names)}")

    if root is None:
        root, names = ReferenceFrame(names[0]), names[1:]

    current = root
    for name, T_link in zip(names, dh_transforms(links, q)):
        current = current.add_child(ReferenceFrame(name), T_link)

    logger.debug("Built %d-link chain under '%s'", len(links), root.name)
    return root
