"""Stateless date, time and gesture recognizers."""

from . import dates, gestures, times
from .types import (
    Bounds,
    DateKind,
    GestureKind,
    Point,
    RecognizedDate,
    RecognizedGesture,
    RecognizedTime,
    Span,
    TimeFormat,
)

__all__ = [
    "Bounds",
    "DateKind",
    "GestureKind",
    "Point",
    "RecognizedDate",
    "RecognizedGesture",
    "RecognizedTime",
    "Span",
    "TimeFormat",
    "dates",
    "gestures",
    "times",
]
