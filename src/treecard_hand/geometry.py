from __future__ import annotations

import math
from typing import Iterable, Tuple

from .types import Landmark, Point2


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def distance(a: Landmark, b: Landmark) -> float:
    """3-D Euclidean distance in normalized coordinates."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)


def distance_2d(a: Landmark, b: Landmark) -> float:
    """Distance in the image plane, ignoring depth."""
    return math.hypot(a.x - b.x, a.y - b.y)


def point_distance(a: Point2, b: Point2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def centroid(points: Iterable[Landmark]) -> Point2:
    xs = []
    ys = []
    for p in points:
        xs.append(p.x)
        ys.append(p.y)
    if not xs:
        return (0.0, 0.0)
    return (sum(xs) / len(xs), sum(ys) / len(ys))


def midpoint(a: Landmark, b: Landmark) -> Point2:
    return ((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def mirror_x(p: Point2) -> Point2:
    """Flip a normalized point horizontally (the camera feed is mirrored)."""
    return (1.0 - p[0], p[1])


def bbox_from_points(points: Iterable[Tuple[int, int]]) -> Tuple[int, int, int, int]:
    xs = []
    ys = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        return (0, 0, 0, 0)
    return (min(xs), min(ys), max(xs), max(ys))
