from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import cv2

from .landmarks import as_landmark_set
from .model_assets import DEFAULT_MODEL_PATH, resolve_model_asset
from .types import LandmarkSet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SolutionsBackend:
    mp: object
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object
    delegate: str


def _try_create_solutions_backend(
    max_num_hands: int,
    model_complexity: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=False,
        max_num_hands=max_num_hands,
        model_complexity=model_complexity,
        min_detection_confidence=min_detection_confidence,
        min_tracking_confidence=min_tracking_confidence,
    )
    return _SolutionsBackend(mp=mp, hands=hands)


def _try_create_tasks_backend(
    model_path: str,
    max_num_hands: int,
    min_detection_confidence: float,
    min_tracking_confidence: float,
    delegates: Sequence[str],
) -> _TasksBackend:
    """
    Fallback for MediaPipe distributions that do not include `mp.solutions`.

    Uses the Tasks HandLandmarker API in VIDEO mode, trying each delegate in order
    (GPU is unavailable on many machines, CPU always works).
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    last_error: Optional[Exception] = None
    for delegate in delegates:
        options = HandLandmarkerOptions(
            base_options=BaseOptions(
                model_asset_path=model_path,
                delegate=getattr(BaseOptions.Delegate, delegate),
            ),
            running_mode=RunningMode.VIDEO,
            num_hands=max_num_hands,
            min_hand_detection_confidence=min_detection_confidence,
            min_hand_presence_confidence=0.5,
            min_tracking_confidence=min_tracking_confidence,
        )
        try:
            landmarker = HandLandmarker.create_from_options(options)
        except Exception as e:  # delegate not supported on this machine
            logger.warning("HandLandmarker %s delegate failed: %s", delegate, e)
            last_error = e
            continue
        return _TasksBackend(mp=mp, landmarker=landmarker, delegate=delegate)

    raise RuntimeError(f"No usable HandLandmarker delegate among {list(delegates)}") from last_error


class HandLandmarkSource:
    """
    Adapter around MediaPipe hand tracking that yields one `LandmarkSet` per frame.

    Input frames are expected as **BGR** images (OpenCV default). Only the first
    detected hand is reported; None means no hand.
    """

    def __init__(
        self,
        max_num_hands: int = 1,
        model_complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
        tasks_model_path: str = DEFAULT_MODEL_PATH,
        model_candidates: Optional[Sequence[str]] = None,
        delegates: Sequence[str] = ("GPU", "CPU"),
    ) -> None:
        self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self._tasks: Optional[_TasksBackend] = None
        self._last_timestamp_ms = -1
        self._closed = False

        if self._solutions is not None:
            logger.info("Using MediaPipe Solutions hands backend")
            return

        try:
            model_path = resolve_model_asset(tasks_model_path, model_candidates)
            self._tasks = _try_create_tasks_backend(
                model_path=model_path,
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
                delegates=delegates,
            )
        except RuntimeError as e:
            raise RuntimeError(
                "Could not initialize MediaPipe hand tracking.\n"
                "Your installed `mediapipe` package does not expose `mp.solutions`, and the Tasks\n"
                f"HandLandmarker fallback could not be initialized from {tasks_model_path}.\n\n"
                f"{e}"
            ) from e
        logger.info("Using MediaPipe Tasks HandLandmarker (%s delegate)", self._tasks.delegate)

    @property
    def ready(self) -> bool:
        return not self._closed and (self._solutions is not None or self._tasks is not None)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandLandmarkSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr, timestamp_s: float) -> Optional[LandmarkSet]:
        if not self.ready:
            return None

        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return None
            return as_landmark_set(results.multi_hand_landmarks[0])

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # Tasks VIDEO mode requires strictly increasing timestamps.
        ts = max(int(timestamp_s * 1000), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = ts
        result = self._tasks.landmarker.detect_for_video(mp_image, ts)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        if not hand_landmarks_list:
            return None
        return as_landmark_set(hand_landmarks_list[0])
