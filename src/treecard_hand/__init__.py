from .classifier import classify, classify_landmarks
from .config import GestureConfig, load_config
from .events import GestureCallbacks
from .pipeline import Frame, SessionState, step
from .session import GestureSession
from .types import FingerState, GestureLabel, HandFeatures, Landmark, LandmarkSet

__all__ = [
    "classify",
    "classify_landmarks",
    "GestureConfig",
    "load_config",
    "GestureCallbacks",
    "Frame",
    "SessionState",
    "step",
    "GestureSession",
    "FingerState",
    "GestureLabel",
    "HandFeatures",
    "Landmark",
    "LandmarkSet",
]
