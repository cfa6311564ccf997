"""Shared dataclasses for recognizer outputs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Sequence, Tuple, Union


class DateKind(str, Enum):
    NUMERIC = "numeric"
    TEXT_MONTH = "text_month"
    ISO = "iso"
    RELATIVE = "relative"
    RANGE = "range"
    NLP = "nlp"


class TimeFormat(str, Enum):
    TWELVE_HOUR = "twelve_hour"
    TWENTY_FOUR_HOUR = "twenty_four_hour"
    CONTEXTUAL = "contextual"


class GestureKind(str, Enum):
    CHECKMARK = "checkmark"
    CROSS_OUT = "cross_out"
    CHEVRON_LEFT = "chevron_left"
    CHEVRON_RIGHT = "chevron_right"


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` inside the source text."""

    start: int
    end: int

    def extract(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True)
class Point:
    """A single ink sample. ``y`` grows downward, as on screen."""

    x: float
    y: float


PointLike = Union[Point, Tuple[float, float], Sequence[float]]


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value[0], value[1]
    return Point(float(x), float(y))


def as_points(values: Iterable[PointLike]) -> Tuple[Point, ...]:
    return tuple(as_point(value) for value in values)


@dataclass(frozen=True)
class Bounds:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def around(cls, points: Sequence[Point]) -> "Bounds":
        """Return the axis-aligned box enclosing ``points`` (zero box when empty)."""

        if not points:
            return cls(0.0, 0.0, 0.0, 0.0)
        xs = [point.x for point in points]
        ys = [point.y for point in points]
        min_x, min_y = min(xs), min(ys)
        return cls(min_x, min_y, max(xs) - min_x, max(ys) - min_y)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2


@dataclass(frozen=True)
class RecognizedDate:
    date: datetime
    span: Span
    confidence: float
    kind: DateKind


@dataclass(frozen=True)
class RecognizedTime:
    time: datetime
    span: Span
    confidence: float
    format: TimeFormat


@dataclass(frozen=True)
class RecognizedGesture:
    kind: GestureKind
    confidence: float
    bounds: Bounds


__all__ = [
    "Bounds",
    "DateKind",
    "GestureKind",
    "Point",
    "PointLike",
    "RecognizedDate",
    "RecognizedGesture",
    "RecognizedTime",
    "Span",
    "TimeFormat",
    "as_point",
    "as_points",
]
