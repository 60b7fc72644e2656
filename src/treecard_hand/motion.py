from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from .config import GestureConfig
from .events import Event, MoveEvent, PalmMoveEvent, ZoomEvent
from .geometry import mirror_x
from .stabilizer import StabilizerResult
from .types import GestureLabel, HandFeatures, Point2


HISTORY_LEN = 4
MOMENTUM_EPSILON = 1e-4

# The gesture that drives pan/zoom.
CONTROL_GESTURE = GestureLabel.OPEN_PALM


@dataclass
class MotionState:
    position_history: Deque[Point2] = field(default_factory=lambda: deque(maxlen=HISTORY_LEN))
    last_palm_position: Optional[Point2] = None
    last_hand_scale: Optional[float] = None
    rotation_momentum: float = 0.0


def average_position(history) -> Point2:
    n = len(history)
    if n == 0:
        return (0.0, 0.0)
    return (sum(p[0] for p in history) / n, sum(p[1] for p in history) / n)


def pan_delta(previous: Point2, current: Point2, min_delta: float) -> Optional[Point2]:
    """
    Frame-to-frame pan in screen space, or None when it is within `min_delta`.

    x is mirrored to match the selfie view; the threshold is exclusive.
    """

    dx = mirror_x(current)[0] - mirror_x(previous)[0]
    dy = current[1] - previous[1]
    if max(abs(dx), abs(dy)) > min_delta:
        return (dx, dy)
    return None


def steer_speed(position: Point2, config: GestureConfig) -> float:
    """
    Auto-rotate speed from where the hand is held: left of center turns one
    way, right the other. 0.0 inside the dead zone.
    """

    speed = (0.5 - position[0]) * config.steer_gain
    if abs(speed) > config.steer_dead_zone:
        return speed
    return 0.0


def _decay(momentum: float, factor: float) -> float:
    momentum *= factor
    if abs(momentum) < MOMENTUM_EPSILON:
        return 0.0
    return momentum


def translate_motion(
    state: MotionState,
    features: HandFeatures,
    result: StabilizerResult,
    config: GestureConfig,
) -> List[Event]:
    """Update `state` for a frame with a hand and return the continuous events."""

    events: List[Event] = []
    state.position_history.append(features.palm_center)
    position = average_position(state.position_history)

    control = result.stable and result.label is CONTROL_GESTURE
    emitted_dx: Optional[float] = None

    if control:
        if state.last_palm_position is not None:
            delta = pan_delta(state.last_palm_position, position, config.min_pan_delta)
            if delta is not None and not config.photo_locked:
                move = PalmMoveEvent(delta[0] * config.pan_sensitivity, delta[1] * config.pan_sensitivity)
                events.append(move)
                emitted_dx = move.dx
        state.last_palm_position = position

        previous_scale = state.last_hand_scale
        if previous_scale is None:
            # First control frame only sets the baseline.
            state.last_hand_scale = features.hand_scale
        else:
            a = config.scale_smoothing
            smoothed = a * previous_scale + (1.0 - a) * features.hand_scale
            state.last_hand_scale = smoothed
            scale_delta = smoothed - previous_scale
            if abs(scale_delta) > config.min_zoom_delta and not config.photo_locked:
                events.append(ZoomEvent(scale_delta * config.zoom_sensitivity))
    else:
        state.last_palm_position = None
        state.last_hand_scale = None
        if result.stable and config.thumb_zoom_step > 0 and not config.photo_locked:
            if result.label is GestureLabel.THUMB_UP:
                events.append(ZoomEvent(-config.thumb_zoom_step))
            elif result.label is GestureLabel.THUMB_DOWN:
                events.append(ZoomEvent(config.thumb_zoom_step))

    steer = 0.0
    if result.label is not CONTROL_GESTURE:
        steer = steer_speed(position, config)

    if config.photo_selected or result.label is GestureLabel.PINCH:
        state.rotation_momentum = 0.0
    elif emitted_dx is not None:
        state.rotation_momentum = emitted_dx * config.momentum_gain
    elif steer != 0.0:
        state.rotation_momentum = steer
    else:
        state.rotation_momentum = _decay(state.rotation_momentum, config.momentum_decay)

    events.append(MoveEvent(0.0 if control else state.rotation_momentum))
    return events


def decay_motion(state: MotionState, config: GestureConfig) -> List[Event]:
    """No hand this frame: drop baselines, let momentum fade out."""
    state.position_history.clear()
    state.last_palm_position = None
    state.last_hand_scale = None
    if config.photo_selected:
        state.rotation_momentum = 0.0
    else:
        state.rotation_momentum = _decay(state.rotation_momentum, config.momentum_decay)
    return [MoveEvent(state.rotation_momentum)]
