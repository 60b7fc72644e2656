from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureConfig:
    """
    Caller-supplied settings for one gesture session.

    The first six fields are the host-facing flags; the rest are tuning knobs
    that rarely need to change.
    """

    pan_sensitivity: float = 25.0
    zoom_sensitivity: float = 10.0
    enabled: bool = True
    photo_selected: bool = False
    photo_locked: bool = False
    debug: bool = False

    min_pan_delta: float = 0.004
    min_zoom_delta: float = 0.0001
    pinch_cooldown: float = 0.3  # seconds
    pinch_move_threshold: float = 0.1
    momentum_gain: float = 0.1
    momentum_decay: float = 0.9
    scale_smoothing: float = 0.9  # weight of the previous smoothed hand scale
    steer_gain: float = 0.1  # auto-rotate speed per unit of hand offset from center
    steer_dead_zone: float = 0.01
    thumb_zoom_step: float = 0.0  # 0 disables thumb up/down zoom

    def __post_init__(self) -> None:
        for name in (
            "pan_sensitivity",
            "zoom_sensitivity",
            "min_pan_delta",
            "min_zoom_delta",
            "pinch_cooldown",
            "pinch_move_threshold",
            "momentum_gain",
            "steer_gain",
            "steer_dead_zone",
            "thumb_zoom_step",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)!r}")
        for name in ("momentum_decay", "scale_smoothing"):
            if not (0.0 <= getattr(self, name) <= 1.0):
                raise ValueError(f"{name} must be within [0, 1], got {getattr(self, name)!r}")

    def replace(self, **changes: Any) -> "GestureConfig":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GestureConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}. Available: {sorted(known)}")
        return cls(**data)


def load_config(path: Optional[str] = "config.json", **overrides: Any) -> GestureConfig:
    """
    Load a `GestureConfig` from a JSON object file, merged onto the defaults.

    A missing file is not an error: defaults (plus `overrides`) are used.
    """

    data: Dict[str, Any] = {}
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        logger.info("Loaded gesture config from %s", path)
    elif path:
        logger.info("Config %s not found, using defaults", path)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return GestureConfig.from_dict(data)
