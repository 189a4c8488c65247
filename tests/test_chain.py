"""Tests for DH serial chains."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from jax_frames import DimensionMismatchError, HomogeneousTM, ReferenceFrame
from jax_frames.chain import DHParameters, build_frame_chain, dh_transforms, forward_kinematics

PLANAR_2R = (
    DHParameters(a=1.0, alpha=0.0, d=0.0, theta=0.0),
    DHParameters(a=1.0, alpha=0.0, d=0.0, theta=0.0),
)


def test_planar_arm_fk():
    """Elbow-down planar 2R arm reaches (1, 1, 0)."""
    poses = forward_kinematics(PLANAR_2R, jnp.array([jnp.pi / 2, -jnp.pi / 2]))

    assert len(poses) == 3
    np.testing.assert_allclose(poses[0].matrix, jnp.eye(4))
    np.testing.assert_allclose(poses[1].position, jnp.array([0.0, 1.0, 0.0]), atol=1e-12)
    np.testing.assert_allclose(poses[2].position, jnp.array([1.0, 1.0, 0.0]), atol=1e-12)
    np.testing.assert_allclose(poses[2].rotation, jnp.eye(3), atol=1e-12)


def test_zero_configuration_default():
    poses = forward_kinematics(PLANAR_2R)
    np.testing.assert_allclose(poses[-1].position, jnp.array([2.0, 0.0, 0.0]), atol=1e-12)


def test_base_pose_is_prepended():
    base = HomogeneousTM.from_dh(0.0, 0.0, 0.5, 0.0)
    poses = forward_kinematics(PLANAR_2R, base=base)
    np.testing.assert_allclose(poses[-1].position, jnp.array([2.0, 0.0, 0.5]), atol=1e-12)


def test_prismatic_joint_adds_to_d():
    links = (DHParameters(a=0.0, alpha=0.0, d=0.2, theta=0.0, revolute=False),)
    (T,) = dh_transforms(links, jnp.array([0.3]))
    np.testing.assert_allclose(T.position, jnp.array([0.0, 0.0, 0.5]), atol=1e-12)


def test_joint_vector_length_checked():
    with pytest.raises(DimensionMismatchError):
        dh_transforms(PLANAR_2R, jnp.zeros(3))


@given(st.lists(st.floats(min_value=-np.pi, max_value=np.pi, allow_nan=False), min_size=2, max_size=2))
@settings(deadline=None)
def test_fk_poses_are_rigid(q):
    for pose in forward_kinematics(PLANAR_2R, jnp.array(q)):
        assert pose.is_rigid()


def test_fk_jit_compatibility():
    """Forward kinematics traces under jit when the DH table is closed over."""

    @jax.jit
    def tip_position(q):
        return forward_kinematics(PLANAR_2R, q)[-1].position

    np.testing.assert_allclose(tip_position(jnp.array([jnp.pi / 2, -jnp.pi / 2])),
                               jnp.array([1.0, 1.0, 0.0]), atol=1e-12)


def test_build_frame_chain():
    root = build_frame_chain(["base", "link1", "tool"], PLANAR_2R, jnp.array([jnp.pi / 2, -jnp.pi / 2]))

    assert root.name == "base"
    tool = root.search_frame("tool")
    assert tool.parent.name == "link1"
    np.testing.assert_allclose(tool.express_point(jnp.zeros(3), root), jnp.array([1.0, 1.0, 0.0]), atol=1e-12)
    np.testing.assert_allclose(tool.pose_in_root().matrix,
                               forward_kinematics(PLANAR_2R, jnp.array([jnp.pi / 2, -jnp.pi / 2]))[-1].matrix,
                               atol=1e-12)


def test_build_frame_chain_under_existing_root():
    world = ReferenceFrame("world")
    returned = build_frame_chain(["link1", "tool"], PLANAR_2R, root=world)

    assert returned is world
    assert [f.name for f in world.iter_frames()] == ["world", "link1", "tool"]


def test_build_frame_chain_name_count():
    with pytest.raises(DimensionMismatchError):
        build_frame_chain(["base", "tool"], PLANAR_2R)
    with pytest.raises(DimensionMismatchError):
        build_frame_chain(["a", "b", "c"], PLANAR_2R, root=ReferenceFrame("world"))
