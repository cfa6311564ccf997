"""Recognition engine for the Momentum planner: dates, times and ink gestures."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from .engine import RecognitionEngine
from .recognizers.types import (
    Bounds,
    DateKind,
    GestureKind,
    Point,
    PointLike,
    RecognizedDate,
    RecognizedGesture,
    RecognizedTime,
    Span,
    TimeFormat,
)

_DEFAULT_ENGINE = RecognitionEngine()


def recognize_dates(text: str, now: Optional[datetime] = None) -> List[RecognizedDate]:
    return _DEFAULT_ENGINE.recognize_dates(text, now=now)


def recognize_times(text: str, now: Optional[datetime] = None) -> List[RecognizedTime]:
    return _DEFAULT_ENGINE.recognize_times(text, now=now)


def classify_gesture(points: Iterable[PointLike]) -> Optional[RecognizedGesture]:
    return _DEFAULT_ENGINE.classify_gesture(points)


def classify_strokes(strokes: Iterable[Iterable[PointLike]]) -> Optional[RecognizedGesture]:
    return _DEFAULT_ENGINE.classify_strokes(strokes)


__all__ = [
    "Bounds",
    "DateKind",
    "GestureKind",
    "Point",
    "RecognitionEngine",
    "RecognizedDate",
    "RecognizedGesture",
    "RecognizedTime",
    "Span",
    "TimeFormat",
    "classify_gesture",
    "classify_strokes",
    "recognize_dates",
    "recognize_times",
]
