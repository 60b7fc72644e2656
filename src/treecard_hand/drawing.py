from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import cv2
import numpy as np

from .geometry import bbox_from_points, clamp_int, mirror_x
from .landmarks import HAND_CONNECTIONS
from .types import Landmark, LandmarkSet, Point2


def to_pixels(landmarks: LandmarkSet, w: int, h: int) -> List[Tuple[int, int]]:
    return [
        (clamp_int(int(round(lm.x * w)), 0, w - 1), clamp_int(int(round(lm.y * h)), 0, h - 1))
        for lm in landmarks
    ]


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Tuple[int, int]], color=(255, 255, 0), thickness=2, closed=False):
    pts = np.array([(int(x), int(y)) for x, y in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness)
    return frame


def draw_hand(frame, landmarks: LandmarkSet):
    h, w = frame.shape[:2]
    pts = to_pixels(landmarks, w, h)
    for a, b in HAND_CONNECTIONS:
        cv2.line(frame, pts[a], pts[b], (0, 215, 255), 2, cv2.LINE_AA)
    for pt in pts:
        cv2.circle(frame, pt, 3, (0, 0, 255), -1, lineType=cv2.LINE_AA)
    x0, y0, x1, y1 = bbox_from_points(pts)
    cv2.rectangle(frame, (x0, y0), (x1, y1), (0, 255, 0), 1)
    return frame


def draw_overlay(
    frame,
    landmarks: Optional[LandmarkSet],
    status: str = "",
    palm_trail: Iterable[Point2] = (),
    mirror: bool = True,
):
    """
    Debug view: skeleton, smoothed palm trail and the session status line.

    With `mirror`, returns a flipped copy (selfie view) with the overlay mapped
    onto it so the text stays readable.
    """

    if mirror:
        frame = cv2.flip(frame, 1)
        if landmarks is not None:
            landmarks = tuple(Landmark(1.0 - lm.x, lm.y, lm.z) for lm in landmarks)
        palm_trail = [mirror_x(p) for p in palm_trail]

    h, w = frame.shape[:2]
    if landmarks is not None:
        draw_hand(frame, landmarks)
    trail = [(clamp_int(int(x * w), 0, w - 1), clamp_int(int(y * h), 0, h - 1)) for x, y in palm_trail]
    draw_polyline(frame, trail, color=(255, 0, 255))
    if status:
        draw_text(frame, status, (12, 28))
    return frame
