# app/domain/common/scoring.py
from __future__ import annotations

from typing import Iterable

# (max distance inclusive, points), checked in order
SCORE_BUCKETS: tuple[tuple[float, int], ...] = (
    (4, 4),    # bulls-eye
    (10, 3),   # close
    (18, 2),   # edge
)

TARGET_MIN = 10
TARGET_MAX = 90
DIAL_MIN = 0.0
DIAL_MAX = 100.0
DIAL_CENTER = 50.0


def points_for_distance(distance: float) -> int:
    for limit, points in SCORE_BUCKETS:
        if distance <= limit:
            return points
    return 0


def clamp_dial(position: float) -> float:
    return max(DIAL_MIN, min(DIAL_MAX, float(position)))


def average_position(positions: Iterable[float]) -> float:
    """Arithmetic mean of dial positions; the dial center when there are none."""
    values = list(positions)
    if not values:
        return DIAL_CENTER
    return sum(values) / len(values)
