from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class Landmark:
    """A single hand landmark in normalized image coordinates."""

    x: float
    y: float
    z: float = 0.0


# Exactly 21 landmarks, indexed as in `landmarks.py`.
LandmarkSet = Tuple[Landmark, ...]


class GestureLabel(str, Enum):
    """Discrete gestures; after NONE, members follow classification priority."""

    NONE = "None"
    PINCH = "Pinch"
    OPEN_PALM = "Open_Palm"
    CLOSED_FIST = "Closed_Fist"
    THUMB_UP = "Thumb_Up"
    THUMB_DOWN = "Thumb_Down"
    VICTORY = "Victory"
    POINTING_UP = "Pointing_Up"
    I_LOVE_YOU = "ILoveYou"


class ThumbDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    LEVEL = "level"


@dataclass(frozen=True)
class FingerState:
    """Extended (True) / curled (False) per digit for one frame."""

    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        return sum((self.thumb, self.index, self.middle, self.ring, self.pinky))

    @property
    def extended_fingers(self) -> int:
        """Extended count excluding the thumb."""
        return sum((self.index, self.middle, self.ring, self.pinky))


@dataclass(frozen=True)
class HandFeatures:
    """Per-frame feature vector derived from one `LandmarkSet`."""

    fingers: FingerState
    pinch_distance: float
    palm_width: float
    palm_center: Point2
    hand_scale: float
    thumb_direction: ThumbDirection
    pinch_point: Point2  # thumb/index tip midpoint, not mirrored
