from __future__ import annotations

import os
import sys
from typing import Dict, List, Tuple

import pytest

# Allow running without installing the package (repo-local usage).
SRC_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from treecard_hand.types import Landmark  # noqa: E402


# Hand-space layout: wrist at origin, fingers pointing up (-v), one unit is
# roughly the wrist-to-knuckle length.
_MCP = {
    "index": (-0.45, -1.0),
    "middle": (-0.15, -1.05),
    "ring": (0.15, -1.0),
    "pinky": (0.45, -0.9),
}

_THUMB_CMC = (-0.35, -0.25)
_THUMB_MCP = (-0.6, -0.45)

# (ip, tip) per thumb pose
_THUMB = {
    "out": ((-0.85, -0.65), (-1.15, -0.85)),
    "tucked": ((-0.3, -0.7), (0.0, -0.8)),
    "up": ((-0.65, -0.95), (-0.7, -1.4)),
    "down": ((-0.65, 0.05), (-0.7, 0.5)),
    "pinch": ((-0.8, -0.75), (-0.85, -1.1)),
}


def _finger(name: str, pose: str) -> List[Tuple[float, float]]:
    mx, my = _MCP[name]
    if pose == "extended":
        return [(mx, my), (mx, my - 0.45), (mx, my - 0.75), (mx, my - 1.0)]
    if pose == "curled":
        return [(mx, my), (mx, my - 0.35), (mx, my - 0.15), (mx, my + 0.1)]
    if pose == "pinch":
        # index bent over to meet the thumb tip
        return [(mx, my), (-0.6, -1.35), (-0.75, -1.3), (-0.85, -1.15)]
    raise ValueError(pose)


SHAPES: Dict[str, Tuple[str, Dict[str, str]]] = {
    "open_palm": ("out", dict(index="extended", middle="extended", ring="extended", pinky="extended")),
    "fist": ("tucked", dict(index="curled", middle="curled", ring="curled", pinky="curled")),
    "thumb_up": ("up", dict(index="curled", middle="curled", ring="curled", pinky="curled")),
    "thumb_down": ("down", dict(index="curled", middle="curled", ring="curled", pinky="curled")),
    "victory": ("tucked", dict(index="extended", middle="extended", ring="curled", pinky="curled")),
    "pointing": ("out", dict(index="extended", middle="curled", ring="curled", pinky="curled")),
    "pointing_tucked": ("tucked", dict(index="extended", middle="curled", ring="curled", pinky="curled")),
    "i_love_you": ("out", dict(index="extended", middle="curled", ring="curled", pinky="extended")),
    "pinch": ("pinch", dict(index="pinch", middle="extended", ring="extended", pinky="extended")),
    "middle_ring": ("down", dict(index="curled", middle="extended", ring="extended", pinky="curled")),
}


def make_hand(shape: str, cx: float = 0.5, cy: float = 0.7, scale: float = 0.1, z: float = 0.0):
    """21 landmarks for `shape` with the wrist at (cx, cy)."""
    thumb_pose, fingers = SHAPES[shape]
    ip, tip = _THUMB[thumb_pose]
    pts = [(0.0, 0.0), _THUMB_CMC, _THUMB_MCP, ip, tip]
    for name in ("index", "middle", "ring", "pinky"):
        pts.extend(_finger(name, fingers[name]))
    return tuple(Landmark(cx + u * scale, cy + v * scale, z) for u, v in pts)


@pytest.fixture
def hand():
    return make_hand
