from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class GestureEvent:
    label: str


@dataclass(frozen=True)
class PinchEvent:
    """Screen-space (mirrored) pinch point."""

    x: float
    y: float


@dataclass(frozen=True)
class PalmMoveEvent:
    dx: float
    dy: float


@dataclass(frozen=True)
class ZoomEvent:
    delta: float


@dataclass(frozen=True)
class MoveEvent:
    """Residual auto-rotate speed; emitted every frame, including 0.0."""

    speed: float


@dataclass(frozen=True)
class StatusEvent:
    text: str


Event = Union[GestureEvent, PinchEvent, PalmMoveEvent, ZoomEvent, MoveEvent, StatusEvent]


@dataclass
class GestureCallbacks:
    """Host-side handlers. Any of them may be left unset."""

    on_gesture: Optional[Callable[[str], None]] = None
    on_pinch: Optional[Callable[[float, float], None]] = None
    on_palm_move: Optional[Callable[[float, float], None]] = None
    on_zoom: Optional[Callable[[float], None]] = None
    on_move: Optional[Callable[[float], None]] = None
    on_status: Optional[Callable[[str], None]] = None


def deliver(event: Event, callbacks: GestureCallbacks) -> None:
    """Invoke the matching callback for `event`; return values are ignored."""
    if isinstance(event, GestureEvent):
        if callbacks.on_gesture is not None:
            callbacks.on_gesture(event.label)
    elif isinstance(event, PinchEvent):
        if callbacks.on_pinch is not None:
            callbacks.on_pinch(event.x, event.y)
    elif isinstance(event, PalmMoveEvent):
        if callbacks.on_palm_move is not None:
            callbacks.on_palm_move(event.dx, event.dy)
    elif isinstance(event, ZoomEvent):
        if callbacks.on_zoom is not None:
            callbacks.on_zoom(event.delta)
    elif isinstance(event, MoveEvent):
        if callbacks.on_move is not None:
            callbacks.on_move(event.speed)
    elif isinstance(event, StatusEvent):
        if callbacks.on_status is not None:
            callbacks.on_status(event.text)
    else:
        raise TypeError(f"Unknown event type: {type(event).__name__}")
