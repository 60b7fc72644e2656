from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .types import GestureLabel


# Frames a label must repeat before it counts. Frequent control gestures get
# short windows; rare symbolic ones need longer confirmation.
STABILITY_THRESHOLDS: Dict[GestureLabel, int] = {
    GestureLabel.PINCH: 2,
    GestureLabel.OPEN_PALM: 2,
    GestureLabel.CLOSED_FIST: 2,
    GestureLabel.POINTING_UP: 3,
    GestureLabel.THUMB_UP: 4,
    GestureLabel.THUMB_DOWN: 4,
    GestureLabel.VICTORY: 4,
    GestureLabel.I_LOVE_YOU: 5,
}


@dataclass(frozen=True)
class StabilizationState:
    last_label: GestureLabel = GestureLabel.NONE
    streak: int = 0


@dataclass(frozen=True)
class StabilizerResult:
    label: GestureLabel
    streak: int
    stable: bool
    just_stabilized: bool  # true only on the frame the streak reaches its threshold


def stability_threshold(label: GestureLabel) -> int:
    """Required streak for `label`; 0 for NONE, which is never stable."""
    return STABILITY_THRESHOLDS.get(label, 0)


def reset() -> StabilizationState:
    return StabilizationState()


def stabilize(state: StabilizationState, label: GestureLabel):
    """Advance the debounce state machine by one classified frame."""
    if label == state.last_label:
        new_state = StabilizationState(label, state.streak + 1)
    else:
        new_state = StabilizationState(label, 1)

    threshold = stability_threshold(label)
    stable = threshold > 0 and new_state.streak >= threshold
    result = StabilizerResult(
        label=label,
        streak=new_state.streak,
        stable=stable,
        just_stabilized=stable and new_state.streak == threshold,
    )
    return new_state, result
