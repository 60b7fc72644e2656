from __future__ import annotations

import logging
import platform
import time
from typing import Callable, Optional

import cv2

from .session import GestureSession
from .types import LandmarkSet


logger = logging.getLogger(__name__)

FrameHook = Callable[[object, Optional[LandmarkSet]], None]


def open_camera(index: int = 0, width: int = 640, height: int = 480):
    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(index, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise RuntimeError(
            f"Could not open camera index {index}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return cap


class CameraLoop:
    """
    Frame driver: capture -> detector -> gesture session, one frame at a time.

    Camera and detector are attached to the session, so `stop()` (or closing
    the session directly) tears all three down together. Teardown is idempotent
    and safe to call from a session callback or a frame hook mid-frame.
    """

    def __init__(
        self,
        session: GestureSession,
        source,
        capture,
        on_frame: Optional[FrameHook] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self._source = source
        self._capture = capture
        self._on_frame = on_frame
        self._clock = clock
        self._running = True
        self.frames = 0
        # Released in reverse: capture first, then the detector.
        session.attach(source.close)
        session.attach(capture.release)

    @property
    def running(self) -> bool:
        return self._running and self.session.alive

    def run_once(self) -> bool:
        """Process one frame. Returns False when the loop should end."""
        if not self.running:
            return False

        ok, frame = self._capture.read()
        if not ok:
            logger.info("Camera returned no frame, stopping")
            return False

        timestamp = self._clock()
        landmarks = self._source.detect(frame, timestamp)

        # Teardown may have happened while the detector ran.
        if not self.running:
            return False
        self.session.process(landmarks, timestamp)
        self.frames += 1

        if self._on_frame is not None and self.running:
            self._on_frame(frame, landmarks)
        return self.running

    def run(self, max_frames: Optional[int] = None) -> int:
        try:
            while max_frames is None or self.frames < max_frames:
                if not self.run_once():
                    break
        finally:
            self.stop()
        return self.frames

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info("Stopping camera loop after %d frames", self.frames)
        self.session.close()

    def __enter__(self) -> "CameraLoop":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
