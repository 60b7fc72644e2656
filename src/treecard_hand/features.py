"""
Per-frame finger/pose features.

All functions take a `LandmarkSet` (21 points, normalized image space) and are
pure: the same landmarks always produce the same features.
"""

from __future__ import annotations

from typing import Optional

from . import landmarks as lm
from .geometry import centroid, distance, distance_2d, midpoint
from .types import FingerState, HandFeatures, LandmarkSet, Point2, ThumbDirection


# Tip must be this much farther from the wrist than the knuckle.
EXTENSION_SLACK = 1.2
# Tip closer to its own MCP than the PIP-MCP segment means the finger is folded.
CURL_RATIO = 1.0

THUMB_SPREAD_RATIO = 0.9
THUMB_CURL_RATIO = 0.3
THUMB_DEAD_ZONE = 0.05


def palm_width(landmarks: LandmarkSet) -> float:
    return distance(landmarks[lm.INDEX_MCP], landmarks[lm.PINKY_MCP])


def hand_scale(landmarks: LandmarkSet) -> float:
    return distance(landmarks[lm.WRIST], landmarks[lm.MIDDLE_MCP])


def palm_center(landmarks: LandmarkSet) -> Point2:
    """Centroid of wrist, index MCP and pinky MCP; unaffected by finger motion."""
    return centroid((landmarks[lm.WRIST], landmarks[lm.INDEX_MCP], landmarks[lm.PINKY_MCP]))


def pinch_distance(landmarks: LandmarkSet) -> float:
    return distance_2d(landmarks[lm.THUMB_TIP], landmarks[lm.INDEX_TIP])


def is_finger_curled(landmarks: LandmarkSet, tip: int, pip: int, mcp: int) -> bool:
    segment = distance(landmarks[pip], landmarks[mcp])
    return distance(landmarks[tip], landmarks[mcp]) < segment * CURL_RATIO


def is_finger_extended(landmarks: LandmarkSet, tip: int, pip: int, mcp: int) -> bool:
    wrist = landmarks[lm.WRIST]
    if distance(landmarks[tip], wrist) <= distance(landmarks[mcp], wrist) * EXTENSION_SLACK:
        return False
    # Partially flexed fingers can pass the ratio test.
    return not is_finger_curled(landmarks, tip, pip, mcp)


def is_thumb_extended(landmarks: LandmarkSet, width: Optional[float] = None) -> bool:
    if width is None:
        width = palm_width(landmarks)
    tip = landmarks[lm.THUMB_TIP]
    spread = distance(tip, landmarks[lm.PINKY_MCP]) > width * THUMB_SPREAD_RATIO
    curled = distance(tip, landmarks[lm.THUMB_IP]) < width * THUMB_CURL_RATIO
    return spread and not curled


def thumb_direction(landmarks: LandmarkSet) -> ThumbDirection:
    # Image y grows downward.
    dy = landmarks[lm.THUMB_TIP].y - landmarks[lm.THUMB_MCP].y
    if dy < -THUMB_DEAD_ZONE:
        return ThumbDirection.UP
    if dy > THUMB_DEAD_ZONE:
        return ThumbDirection.DOWN
    return ThumbDirection.LEVEL


def finger_state(landmarks: LandmarkSet, width: Optional[float] = None) -> FingerState:
    ext = {name: is_finger_extended(landmarks, *joints) for name, joints in lm.FINGER_JOINTS.items()}
    return FingerState(
        thumb=is_thumb_extended(landmarks, width),
        index=ext["index"],
        middle=ext["middle"],
        ring=ext["ring"],
        pinky=ext["pinky"],
    )


def extract_features(landmarks: Optional[LandmarkSet]) -> Optional[HandFeatures]:
    """Feature vector for one frame, or None when there is no usable hand."""
    if not landmarks or len(landmarks) != lm.NUM_LANDMARKS:
        return None

    width = palm_width(landmarks)
    return HandFeatures(
        fingers=finger_state(landmarks, width),
        pinch_distance=pinch_distance(landmarks),
        palm_width=width,
        palm_center=palm_center(landmarks),
        hand_scale=hand_scale(landmarks),
        thumb_direction=thumb_direction(landmarks),
        pinch_point=midpoint(landmarks[lm.THUMB_TIP], landmarks[lm.INDEX_TIP]),
    )
