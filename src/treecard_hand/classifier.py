from __future__ import annotations

from typing import Dict, Optional

from .features import extract_features
from .types import FingerState, GestureLabel, HandFeatures, LandmarkSet, ThumbDirection


PINCH_THRESHOLD = 0.07

# Nominal confidence per label, shown on the debug status line.
GESTURE_CONFIDENCE: Dict[GestureLabel, float] = {
    GestureLabel.NONE: 0.0,
    GestureLabel.PINCH: 0.9,
    GestureLabel.OPEN_PALM: 0.9,
    GestureLabel.CLOSED_FIST: 0.9,
    GestureLabel.THUMB_UP: 0.85,
    GestureLabel.THUMB_DOWN: 0.85,
    GestureLabel.VICTORY: 0.85,
    GestureLabel.POINTING_UP: 0.85,
    GestureLabel.I_LOVE_YOU: 0.85,
}


def classify(fingers: FingerState, pinch_distance: float, thumb_direction: ThumbDirection) -> GestureLabel:
    """
    Simple decision list; the first matching rule wins.

    The order is the tie-break policy for ambiguous hand shapes and must not be
    rearranged.

    POINTING_UP deliberately does not look at the thumb. An index-only hand
    with the thumb tucked already matches the CLOSED_FIST rule above it, so
    requiring a curled thumb here would make POINTING_UP unreachable. As a
    result a thumb+index "L" shape also reads as POINTING_UP.
    """

    f = fingers

    if pinch_distance < PINCH_THRESHOLD and f.middle:
        return GestureLabel.PINCH

    # Strict rule: all five digits.
    if f.thumb and f.index and f.middle and f.ring and f.pinky:
        return GestureLabel.OPEN_PALM

    if f.extended_fingers <= 1 and not f.thumb:
        return GestureLabel.CLOSED_FIST

    if f.thumb and f.extended_fingers == 0:
        if thumb_direction is ThumbDirection.UP:
            return GestureLabel.THUMB_UP
        if thumb_direction is ThumbDirection.DOWN:
            return GestureLabel.THUMB_DOWN
        return GestureLabel.CLOSED_FIST

    if f.index and f.middle and not f.ring and not f.pinky:
        return GestureLabel.VICTORY

    if f.index and not f.middle and not f.ring and not f.pinky:
        return GestureLabel.POINTING_UP

    if f.thumb and f.index and f.pinky and not f.middle and not f.ring:
        return GestureLabel.I_LOVE_YOU

    return GestureLabel.NONE


def classify_features(features: Optional[HandFeatures]) -> GestureLabel:
    if features is None:
        return GestureLabel.NONE
    return classify(features.fingers, features.pinch_distance, features.thumb_direction)


def classify_landmarks(landmarks: Optional[LandmarkSet]) -> GestureLabel:
    return classify_features(extract_features(landmarks))
