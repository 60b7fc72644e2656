"""
Per-frame gesture pipeline.

    landmarks -> features -> classifier -> stabilizer -> {dispatcher, motion} -> events

`step()` is the only entry point. It mutates and returns the `SessionState`
it is given, and returns the events for the frame instead of calling anything,
so the host decides how they are delivered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from . import stabilizer
from .classifier import GESTURE_CONFIDENCE, classify_features
from .config import GestureConfig
from .dispatcher import PinchGuardState, dispatch_gesture, dispatch_pinch, tick_cooldown
from .events import Event, StatusEvent
from .features import extract_features
from .landmarks import as_landmark_set
from .motion import MotionState, decay_motion, translate_motion
from .stabilizer import StabilizationState
from .types import LandmarkSet


logger = logging.getLogger(__name__)

STATUS_READY = "AI READY"


@dataclass(frozen=True)
class Frame:
    """One detector result. `landmarks=None` means no hand this frame."""

    landmarks: Optional[LandmarkSet]
    timestamp: float  # seconds, monotonic


@dataclass
class SessionState:
    stabilization: StabilizationState = field(default_factory=StabilizationState)
    motion: MotionState = field(default_factory=MotionState)
    pinch_guard: PinchGuardState = field(default_factory=PinchGuardState)
    last_timestamp: Optional[float] = None
    last_status: Optional[str] = None


def _elapsed(state: SessionState, timestamp: float) -> float:
    if state.last_timestamp is None:
        dt = 0.0
    else:
        dt = max(0.0, timestamp - state.last_timestamp)
    state.last_timestamp = timestamp
    return dt


def _status(state: SessionState, text: Optional[str]) -> List[Event]:
    if text is None or text == state.last_status:
        return []
    state.last_status = text
    return [StatusEvent(text)]


def step(frame: Frame, config: GestureConfig, state: Optional[SessionState] = None) -> Tuple[SessionState, List[Event]]:
    if state is None:
        state = SessionState()

    tick_cooldown(state.pinch_guard, _elapsed(state, frame.timestamp))

    landmarks = as_landmark_set(frame.landmarks)
    features = extract_features(landmarks)

    if features is None:
        state.stabilization = stabilizer.reset()
        state.pinch_guard.active = False
        events: List[Event] = decay_motion(state.motion, config)
        if not config.debug:
            events += _status(state, STATUS_READY)
        return state, events

    label = classify_features(features)
    state.stabilization, result = stabilizer.stabilize(state.stabilization, label)
    logger.debug("gesture=%s streak=%d stable=%s", label.value, result.streak, result.stable)

    events = []
    events += dispatch_pinch(state.pinch_guard, features, result, config)
    events += dispatch_gesture(result)
    events += translate_motion(state.motion, features, result, config)

    if config.debug:
        confidence = GESTURE_CONFIDENCE[label]
        events += _status(state, f"{label.value} ({confidence * 100:.0f}%)")

    return state, events
