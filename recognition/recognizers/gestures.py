"""Ink gesture classification for finished strokes.

A stroke is an ordered sequence of 2-D samples in screen coordinates (``y``
grows downward). Detectors run in a fixed order and the first match wins:
cross-out, then checkmark, then chevron. The thresholds below are the
acceptance boundaries of the planner canvas and are kept exactly as tuned.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence, Tuple

from recognition.recognizers.types import (
    Bounds,
    GestureKind,
    Point,
    PointLike,
    RecognizedGesture,
    as_points,
)

logger = logging.getLogger(__name__)

CROSS_OUT_MIN_WIDTH_RATIO = 0.3
CROSS_OUT_VERTICAL_RATIO_CUTOFF = 2.0
CROSS_OUT_MIN_CONFIDENCE = 0.6
MIN_SEGMENT_ANGLE = 30.0
MAX_SEGMENT_ANGLE = 150.0
CHECKMARK_IDEAL_ANGLE = 90.0
CHECKMARK_MIN_CONFIDENCE = 0.5
CHEVRON_IDEAL_ANGLE = 75.0
CHEVRON_MIN_SIZE = 20.0
CHEVRON_MIN_CONFIDENCE = 0.5

Delta = Tuple[float, float]


def classify_gesture(points: Iterable[PointLike]) -> Optional[RecognizedGesture]:
    """Classify one finished stroke, or return ``None`` when nothing matches."""

    samples = as_points(points)
    if len(samples) < 2:
        return None
    bounds = Bounds.around(samples)

    for detector in (match_cross_out, match_checkmark, match_chevron):
        gesture = detector(samples, bounds)
        if gesture is not None:
            logger.debug("Stroke of %d points classified as %s (%.2f)", len(samples), gesture.kind.value, gesture.confidence)
            return gesture
    return None


def classify_strokes(strokes: Iterable[Iterable[PointLike]]) -> Optional[RecognizedGesture]:
    """Flatten a multi-stroke drawing in stroke order and classify it as one stroke."""

    flattened = [point for stroke in strokes for point in as_points(stroke)]
    if not flattened:
        return None
    return classify_gesture(flattened)


def match_cross_out(points: Sequence[Point], bounds: Bounds) -> Optional[RecognizedGesture]:
    if len(points) < 2:
        return None
    dx, dy = delta(points[0], points[-1])
    horizontal = abs(dx)
    vertical = abs(dy)

    if not horizontal > bounds.width * CROSS_OUT_MIN_WIDTH_RATIO:
        return None

    horizontal_score = min(1.0, horizontal / bounds.width)
    vertical_ratio = vertical / horizontal if horizontal > 0 else 1.0
    if vertical_ratio < CROSS_OUT_VERTICAL_RATIO_CUTOFF:
        line_quality = 1.0
    else:
        line_quality = max(0.5, 1.0 - (vertical_ratio - CROSS_OUT_VERTICAL_RATIO_CUTOFF) / 2.0)

    confidence = _clamp(horizontal_score * 0.7 + line_quality * 0.3, CROSS_OUT_MIN_CONFIDENCE, 1.0)
    return RecognizedGesture(kind=GestureKind.CROSS_OUT, confidence=confidence, bounds=bounds)


    # WHAT: detect a "V"/"✓" stroke split at its lowest sample.
    # WHY: an endpoint valley is a single slanted line, not a tick.
    # HOW: the valley must be interior; the left arm goes down, the right arm goes up and right.
def match_checkmark(points: Sequence[Point], bounds: Bounds) -> Optional[RecognizedGesture]:
    if len(points) < 3:
        return None
    lowest = lowest_point_index(points)
    if not 0 < lowest < len(points) - 1:
        return None

    first = delta(points[0], points[lowest])
    second = delta(points[lowest], points[-1])
    first_goes_down = first[1] > 0
    second_goes_up = second[1] < 0
    second_goes_right = second[0] > 0

    angle = angle_between(first, second)
    if not (first_goes_down and second_goes_up and second_goes_right and _within_segment_band(angle)):
        return None

    confidence = checkmark_confidence(first, second, angle)
    if confidence <= CHECKMARK_MIN_CONFIDENCE:
        return None
    return RecognizedGesture(kind=GestureKind.CHECKMARK, confidence=confidence, bounds=bounds)


def checkmark_confidence(first: Delta, second: Delta, angle: float) -> float:
    confidence = (1.0 - abs(angle - CHECKMARK_IDEAL_ANGLE) / CHECKMARK_IDEAL_ANGLE) * 0.4
    if first[1] > 0:
        confidence += 0.2
    if second[1] < 0:
        confidence += 0.2
    if second[0] > abs(second[1]):
        confidence += 0.2
    return _clamp(confidence, 0.0, 1.0)


def match_chevron(points: Sequence[Point], bounds: Bounds) -> Optional[RecognizedGesture]:
    """Detect ``>`` / ``<`` strokes by their apex, the interior sample farthest from center."""

    if len(points) < 3:
        return None
    center_x = bounds.center_x
    apex = _apex_index(points, center_x)
    if apex is None:
        return None

    first = delta(points[0], points[apex])
    second = delta(points[apex], points[-1])
    angle = angle_between(first, second)
    if not _within_segment_band(angle):
        return None

    apex_x = points[apex].x
    if apex_x > center_x and first[0] > 0 and second[0] < 0:
        kind = GestureKind.CHEVRON_RIGHT
    elif apex_x < center_x and first[0] < 0 and second[0] > 0:
        kind = GestureKind.CHEVRON_LEFT
    else:
        return None
    return RecognizedGesture(kind=kind, confidence=chevron_confidence(angle, bounds), bounds=bounds)


def chevron_confidence(angle: float, bounds: Bounds) -> float:
    angle_score = 1.0 - abs(angle - CHEVRON_IDEAL_ANGLE) / CHEVRON_IDEAL_ANGLE
    size_score = min(1.0, min(bounds.width, bounds.height) / CHEVRON_MIN_SIZE)
    return _clamp(angle_score * 0.6 + size_score * 0.4, CHEVRON_MIN_CONFIDENCE, 1.0)


def _apex_index(points: Sequence[Point], center_x: float) -> Optional[int]:
    apex: Optional[int] = None
    farthest = 0.0
    for index in range(1, len(points) - 1):
        distance = abs(points[index].x - center_x)
        if distance > farthest:
            farthest = distance
            apex = index
    return apex


# ---------------------------------------------------------------------------
# Geometry helpers
# ---------------------------------------------------------------------------
def lowest_point_index(points: Sequence[Point]) -> int:
    """Index of the first sample with the largest ``y`` (lowest on screen)."""

    lowest = 0
    max_y = points[0].y
    for index, point in enumerate(points):
        if point.y > max_y:
            max_y = point.y
            lowest = index
    return lowest


def delta(start: Point, end: Point) -> Delta:
    return (end.x - start.x, end.y - start.y)


def angle_between(first: Delta, second: Delta) -> float:
    """Angle in degrees between two displacement vectors; 0 when either is zero-length."""

    magnitude_first = math.hypot(*first)
    magnitude_second = math.hypot(*second)
    if magnitude_first <= 0 or magnitude_second <= 0:
        return 0.0
    cosine = (first[0] * second[0] + first[1] * second[1]) / (magnitude_first * magnitude_second)
    return math.degrees(math.acos(max(-1.0, min(1.0, cosine))))


def _within_segment_band(angle: float) -> bool:
    return MIN_SEGMENT_ANGLE < angle < MAX_SEGMENT_ANGLE


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


__all__ = [
    "angle_between",
    "checkmark_confidence",
    "chevron_confidence",
    "classify_gesture",
    "classify_strokes",
    "delta",
    "lowest_point_index",
    "match_checkmark",
    "match_chevron",
    "match_cross_out",
]
