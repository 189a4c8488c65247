"""URDF reader that builds a ReferenceFrame tree.

Every ``<link>`` becomes a frame named after the link, and every ``<joint>``
attaches its child link below its parent link with the joint ``<origin>`` as
the edge transform. Only the zero-configuration geometry is read.
"""

from collections import deque
from pathlib import Path
from typing import Dict, List, Union

from lxml import etree

from jax_frames.common.errors import FrameTreeError
from jax_frames.common.logging import get_logger
from jax_frames.core.reference_frame import ReferenceFrame
from jax_frames.transforms import HomogeneousTM, se3, so3

logger = get_logger(__name__)


def load_urdf(urdf_path: Union[str, Path]) -> ReferenceFrame:
    """Load a URDF file into a frame tree.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        ReferenceFrame: The root link's frame.

    Raises:
        FrameTreeError: if the links do not form a single tree.
    """
    # Parse the URDF XML file
    tree = etree.parse(str(urdf_path))
    root = tree.getroot()

    # Collect all links
    frames: Dict[str, ReferenceFrame] = {}
    for link in root.findall('.//link'):
        link_name = link.get('name')
        if link_name in frames:
            raise FrameTreeError(f"Link '{link_name}' is declared more than once")
        frames[link_name] = ReferenceFrame(link_name)

    # Collect joints and build parent-child relationships
    children_of: Dict[str, List[tuple]] = {}
    child_links = set()
    for joint in root.findall('.//joint'):
        parent_elem = joint.find('parent')
        child_elem = joint.find('child')
        if parent_elem is None or child_elem is None:
            continue

        parent_name = parent_elem.get('link')
        child_name = child_elem.get('link')
        for name in (parent_name, child_name):
            if name not in frames:
                raise FrameTreeError(f"Joint '{joint.get('name')}' references unknown link '{name}'")
        if child_name in child_links:
            raise FrameTreeError(f"Link '{child_name}' has more than one parent joint")

        child_links.add(child_name)
        children_of.setdefault(parent_name, []).append((child_name, _origin_transform(joint.find('origin'))))

    # Find root link (not a child of any joint)
    root_links = set(frames) - child_links
    if len(root_links) != 1:
        raise FrameTreeError(f"Expected exactly one root link, found: {sorted(root_links)}")
    root_link = root_links.pop()

    # Attach links breadth-first from the root
    queue = deque([root_link])
    attached = {root_link}
    while queue:
        current_link = queue.popleft()
        for child_name, transform in children_of.get(current_link, []):
            frames[current_link].add_child(frames[child_name], transform)
            attached.add(child_name)
            queue.append(child_name)

    if attached != set(frames):
        raise FrameTreeError(f"Links not reachable from '{root_link}': {sorted(set(frames) - attached)}")

    logger.debug("Loaded %d frames from %s", len(frames), urdf_path)
    return frames[root_link]


def _origin_transform(origin_elem) -> HomogeneousTM:
    """Convert a URDF ``<origin xyz rpy>`` element to a HomogeneousTM.

    URDF rpy means R = Rz(y) Ry(p) Rx(r), which is ``so3.rotation_matrix``
    with roll about z taken from the third rpy value and yaw about x from the
    first.
    """
    if origin_elem is None:
        return HomogeneousTM.identity()

    xyz = [float(x) for x in origin_elem.get('xyz', '0 0 0').split()]
    rpy = [float(x) for x in origin_elem.get('rpy', '0 0 0').split()]

    R = so3.rotation_matrix(rpy[2], rpy[1], rpy[0])
    t = se3.translation_vector(*xyz)
    return HomogeneousTM.from_rotation_translation(R, t)
