"""Process-wide numerical settings for JAX Frames."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml


@dataclass(frozen=True)
class FramesConfig:
    """Tunable tolerances and defaults.

    Attributes:
        rigid_atol: Absolute tolerance used when checking that a rotation block
                    is orthonormal and that the homogeneous row is [0, 0, 0, 1].
        log_level: Level passed to :func:`jax_frames.common.setup_logging`.
    """
    rigid_atol: float = 1e-9
    log_level: str = "INFO"


_ACTIVE = FramesConfig()


def get_config() -> FramesConfig:
    return _ACTIVE


def set_config(cfg: FramesConfig) -> FramesConfig:
    """Install ``cfg`` as the active configuration and return the previous one."""
    global _ACTIVE
    if not isinstance(cfg, FramesConfig):
        raise TypeError(f"Expected FramesConfig, got {type(cfg).__name__}")
    previous, _ACTIVE = _ACTIVE, cfg
    return previous


def load_config(path: Union[str, Path]) -> FramesConfig:
    """Read a YAML mapping of :class:`FramesConfig` fields.

    Missing keys keep their defaults.
    """
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError(f"Config must be a mapping: {path}")

    known = {f.name for f in dataclasses.fields(FramesConfig)}
    unknown = set(data) - known
    if unknown:
        raise TypeError(f"Unknown config keys in {path}: {sorted(unknown)}")

    kwargs: Dict[str, Any] = dict(data)
    if "rigid_atol" in kwargs:
        kwargs["rigid_atol"] = float(kwargs["rigid_atol"])
    return FramesConfig(**kwargs)
