from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .config import GestureConfig
from .events import Event, GestureCallbacks, StatusEvent, deliver
from .pipeline import Frame, SessionState, step


logger = logging.getLogger(__name__)

STATUS_DISABLED = "AI DISABLED"


def _release_all(releases: List[Callable[[], Any]]) -> None:
    # Every hook runs even if an earlier one raises.
    if not releases:
        return
    try:
        releases[0]()
    finally:
        _release_all(releases[1:])


class GestureSession:
    """
    One hand-tracking lifetime: owns the pipeline state and delivers events.

    Not thread-safe; `process()` must be driven by a single frame loop.
    `close()` may be called at any time, including from inside a callback.
    """

    def __init__(
        self,
        callbacks: Optional[GestureCallbacks] = None,
        config: Optional[GestureConfig] = None,
    ) -> None:
        self.callbacks = callbacks or GestureCallbacks()
        self._config = config or GestureConfig()
        self._state = SessionState()
        self._closed = False
        self._resources: List[Callable[[], Any]] = []
        if not self._config.enabled:
            self._report(STATUS_DISABLED)

    @property
    def config(self) -> GestureConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def alive(self) -> bool:
        return not self._closed and self._config.enabled

    def attach(self, release: Callable[[], Any]) -> None:
        """Register a resource release hook run (once) by `close()`."""
        if self._closed:
            release()
            return
        self._resources.append(release)

    def update_config(self, **changes: Any) -> GestureConfig:
        was_enabled = self._config.enabled
        self._config = self._config.replace(**changes)
        if was_enabled and not self._config.enabled:
            self._state = SessionState()
            self._report(STATUS_DISABLED)
        return self._config

    def report_status(self, text: str) -> None:
        """Forward an acquisition status (e.g. "LOADING AI...") to the host."""
        self._report(text)

    def process(self, landmarks, timestamp: float) -> List[Event]:
        """Run one frame and deliver its events. No-op once closed or disabled."""
        if not self.alive:
            return []
        self._state, events = step(Frame(landmarks, timestamp), self._config, self._state)
        for event in events:
            # A callback may have torn the session down.
            if not self.alive:
                break
            deliver(event, self.callbacks)
        return events

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.info("Closing gesture session")
        resources, self._resources = self._resources, []
        try:
            _release_all(list(reversed(resources)))
        finally:
            self._state = SessionState()
            deliver(StatusEvent(STATUS_DISABLED), self.callbacks)

    def _report(self, text: str) -> None:
        self._state.last_status = text
        deliver(StatusEvent(text), self.callbacks)

    def __enter__(self) -> "GestureSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
