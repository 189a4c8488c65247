"""Tests for configuration and logging helpers."""

import logging
import subprocess
import sys

import jax.numpy as jnp
import pytest

from jax_frames.common import FramesConfig, get_config, get_logger, load_config, set_config
from jax_frames.transforms import HomogeneousTM


@pytest.fixture
def restore_config():
    previous = get_config()
    yield
    set_config(previous)


def test_defaults():
    cfg = FramesConfig()
    assert cfg.rigid_atol == 1e-9
    assert cfg.log_level == "INFO"


def test_load_config(tmp_path):
    path = tmp_path / "frames.yaml"
    path.write_text("rigid_atol: 1.0e-6\nlog_level: DEBUG\n")

    cfg = load_config(path)
    assert cfg == FramesConfig(rigid_atol=1e-6, log_level="DEBUG")


def test_load_empty_config_keeps_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == FramesConfig()


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "frames.yaml"
    path.write_text("rigid_tol: 1.0\n")
    with pytest.raises(TypeError, match="rigid_tol"):
        load_config(path)


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "frames.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(TypeError, match="mapping"):
        load_config(path)


def test_rigid_tolerance_follows_config(restore_config):
    """A slightly skewed rotation passes only under a loose tolerance."""
    skewed = jnp.eye(4).at[0, 1].set(1e-5)
    T = HomogeneousTM(skewed)

    assert not T.is_rigid()
    set_config(FramesConfig(rigid_atol=1e-3))
    assert T.is_rigid()


def test_set_config_type_checked(restore_config):
    with pytest.raises(TypeError):
        set_config({"rigid_atol": 1e-3})


def test_get_logger():
    logger = get_logger("jax_frames.test", level="debug")
    assert isinstance(logger, logging.Logger)
    assert logger.level == logging.DEBUG


def test_get_logger_leaves_root_handlers_alone():
    before = list(logging.getLogger().handlers)
    get_logger("jax_frames.quiet")
    assert logging.getLogger().handlers == before


def test_import_installs_no_handlers():
    result = subprocess.run(
        [sys.executable, "-c",
         "import logging, jax_frames; print(len(logging.getLogger().handlers))"],
        capture_output=True, text=True, check=True,
    )
    assert result.stdout.strip() == "0"
