"""Tests for URDF loading into frame trees."""

from pathlib import Path

import jax.numpy as jnp
import numpy as np
import pytest

from jax_frames import FrameTreeError, ReferenceFrame
from jax_frames.io import load_urdf
from jax_frames.transforms import so3

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def arm():
    return load_urdf(FIXTURES / "two_link_arm.urdf")


def test_load_urdf_structure(arm):
    """Root is the only link without a parent joint; every link becomes a frame."""
    assert isinstance(arm, ReferenceFrame)
    assert arm.name == "base_link"
    assert sorted(arm.children) == ["camera", "shoulder"]
    assert [f.name for f in arm.iter_frames()] == ["base_link", "camera", "shoulder", "elbow", "tool"]
    assert arm.search_frame("tool").parent.name == "elbow"


def test_load_urdf_accepts_str_path():
    root = load_urdf(str(FIXTURES / "two_link_arm.urdf"))
    assert root.name == "base_link"


def test_origin_becomes_edge_transform(arm):
    elbow = arm.get_frame("elbow")
    np.testing.assert_allclose(elbow.transform.position, jnp.array([1.0, 0.0, 0.0]), atol=1e-12)
    np.testing.assert_allclose(elbow.transform.rotation, so3.roll_z(jnp.pi / 2), atol=1e-12)


def test_missing_origin_is_identity(tmp_path):
    urdf = tmp_path / "bare.urdf"
    urdf.write_text(
        '<robot name="bare"><link name="a"/><link name="b"/>'
        '<joint name="j" type="fixed"><parent link="a"/><child link="b"/></joint></robot>'
    )
    root = load_urdf(urdf)
    np.testing.assert_allclose(root.get_frame("b").transform.matrix, jnp.eye(4))


def test_unknown_link_rejected(tmp_path):
    urdf = tmp_path / "dangling.urdf"
    urdf.write_text(
        '<robot name="dangling"><link name="a"/>'
        '<joint name="j" type="fixed"><parent link="a"/><child link="ghost"/></joint></robot>'
    )
    with pytest.raises(FrameTreeError, match="ghost"):
        load_urdf(urdf)


def test_tool_position_in_base(arm):
    tool = arm.get_frame("tool")
    np.testing.assert_allclose(tool.express_point(jnp.zeros(3), arm), jnp.array([1.0, 0.5, 0.5]), atol=1e-12)


def test_rpy_roll_about_x(arm):
    """rpy="pi 0 0" flips the camera's y and z axes."""
    camera = arm.get_frame("camera")
    np.testing.assert_allclose(camera.express_point(jnp.array([0.0, 0.0, 1.0]), arm),
                               jnp.array([0.0, 1.0, 1.0]), atol=1e-12)
    np.testing.assert_allclose(arm.get_frame("tool").express_point(jnp.zeros(3), camera),
                               jnp.array([1.0, 0.5, 1.5]), atol=1e-12)


def test_multiple_roots_rejected():
    with pytest.raises(FrameTreeError, match="exactly one root"):
        load_urdf(FIXTURES / "two_roots.urdf")


def test_duplicate_link_rejected(tmp_path):
    urdf = tmp_path / "duplicate.urdf"
    urdf.write_text('<robot name="dup"><link name="a"/><link name="a"/></robot>')
    with pytest.raises(FrameTreeError, match="declared more than once"):
        load_urdf(urdf)
