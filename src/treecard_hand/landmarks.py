from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from .types import Landmark, LandmarkSet


NUM_LANDMARKS = 21

WRIST = 0
THUMB_CMC = 1
THUMB_MCP = 2
THUMB_IP = 3
THUMB_TIP = 4
INDEX_MCP = 5
INDEX_PIP = 6
INDEX_DIP = 7
INDEX_TIP = 8
MIDDLE_MCP = 9
MIDDLE_PIP = 10
MIDDLE_DIP = 11
MIDDLE_TIP = 12
RING_MCP = 13
RING_PIP = 14
RING_DIP = 15
RING_TIP = 16
PINKY_MCP = 17
PINKY_PIP = 18
PINKY_DIP = 19
PINKY_TIP = 20

# (tip, pip, mcp) per non-thumb finger
FINGER_JOINTS = {
    "index": (INDEX_TIP, INDEX_PIP, INDEX_MCP),
    "middle": (MIDDLE_TIP, MIDDLE_PIP, MIDDLE_MCP),
    "ring": (RING_TIP, RING_PIP, RING_MCP),
    "pinky": (PINKY_TIP, PINKY_PIP, PINKY_MCP),
}

HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (5, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (9, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (13, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # palm base
    (0, 17),
]


def _to_landmark(entry) -> Optional[Landmark]:
    if isinstance(entry, Landmark):
        return entry
    if hasattr(entry, "x") and hasattr(entry, "y"):
        x, y, z = entry.x, entry.y, getattr(entry, "z", 0.0)
    elif isinstance(entry, dict):
        if "x" not in entry or "y" not in entry:
            return None
        x, y, z = entry["x"], entry["y"], entry.get("z", 0.0)
    elif isinstance(entry, (list, tuple, np.ndarray)) and len(entry) >= 2:
        x, y = entry[0], entry[1]
        z = entry[2] if len(entry) >= 3 else 0.0
    else:
        return None

    try:
        x, y, z = float(x), float(y), float(z if z is not None else 0.0)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return None
    return Landmark(x=x, y=y, z=z)


def as_landmark_set(raw) -> Optional[LandmarkSet]:
    """
    Normalize one hand's detector output into a `LandmarkSet`.

    Accepts MediaPipe landmark lists (objects with x/y/z), `(x, y, z)` sequences,
    `{"x", "y", "z"}` dicts or a `(21, 3)` array. Anything absent, short or
    non-finite returns None, which the pipeline treats as "no hand".
    """

    if raw is None:
        return None
    # MediaPipe Solutions wraps the list in a NormalizedLandmarkList.
    if hasattr(raw, "landmark"):
        raw = raw.landmark
    try:
        entries = list(raw)
    except TypeError:
        return None
    if len(entries) != NUM_LANDMARKS:
        return None

    out: List[Landmark] = []
    for entry in entries:
        lm = _to_landmark(entry)
        if lm is None:
            return None
        out.append(lm)
    return tuple(out)
