from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .config import GestureConfig
from .events import Event, GestureEvent, PinchEvent
from .geometry import mirror_x, point_distance
from .stabilizer import StabilizerResult
from .types import GestureLabel, HandFeatures, Point2


@dataclass
class PinchGuardState:
    cooldown_remaining: float = 0.0
    active: bool = False
    last_fire_position: Optional[Point2] = None


def tick_cooldown(guard: PinchGuardState, dt: float) -> None:
    if dt > 0:
        guard.cooldown_remaining = max(0.0, guard.cooldown_remaining - dt)


def dispatch_pinch(
    guard: PinchGuardState,
    features: HandFeatures,
    result: StabilizerResult,
    config: GestureConfig,
) -> List[Event]:
    """
    Fire at most one pinch selection for this frame.

    A held pinch fires once; it can fire again after the cooldown only if the
    hand is released or moved at least `pinch_move_threshold` away.
    """

    if result.label is not GestureLabel.PINCH:
        guard.active = False
        return []
    if not result.stable or guard.cooldown_remaining > 0:
        return []

    position = mirror_x(features.pinch_point)
    if guard.active and guard.last_fire_position is not None:
        if point_distance(position, guard.last_fire_position) < config.pinch_move_threshold:
            return []

    guard.cooldown_remaining = config.pinch_cooldown
    guard.last_fire_position = position
    guard.active = True
    return [PinchEvent(position[0], position[1])]


def dispatch_gesture(result: StabilizerResult) -> List[Event]:
    """Discrete gestures fire once per stabilization streak."""
    if result.label in (GestureLabel.NONE, GestureLabel.PINCH):
        return []
    if not result.just_stabilized:
        return []
    return [GestureEvent(result.label.value)]
