"""Time-of-day recognition over free-form planner text."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional, Tuple

from recognition.recognizers.types import RecognizedTime, Span, TimeFormat
from recognition.text_utils import find_keyword, to_int

logger = logging.getLogger(__name__)

EXPLICIT_CONFIDENCE = 0.95
INFERRED_CONFIDENCE = 0.85
CONTEXTUAL_CONFIDENCE = 0.85

_TWELVE_HOUR_PATTERN = re.compile(
    r"(\d{1,2})(?::(\d{2}))?\s*(am|pm|a\.m\.|p\.m\.|a|p|o'clock)?",
    re.IGNORECASE,
)
_TWENTY_FOUR_HOUR_PATTERN = re.compile(r"(\d{2}):?(\d{2})")

CONTEXTUAL_TIMES: Tuple[Tuple[str, int, int], ...] = (
    ("morning", 9, 0),
    ("afternoon", 14, 0),
    ("evening", 18, 0),
    ("noon", 12, 0),
    ("midnight", 0, 0),
)
_AM_HINTS: Tuple[str, ...] = ("morning", "breakfast")
_PM_HINTS: Tuple[str, ...] = ("evening", "dinner", "night")


def recognize_times(text: str, now: Optional[datetime] = None) -> List[RecognizedTime]:
    """Run the 12-hour, 24-hour and contextual passes against one reference day."""

    if not text or not text.strip():
        return []
    reference = now if now is not None else datetime.now()

    results: List[RecognizedTime] = []
    results.extend(recognize_twelve_hour_times(text, reference))
    results.extend(recognize_twenty_four_hour_times(text, reference))
    results.extend(recognize_contextual_times(text, reference))
    return results


def recognize_twelve_hour_times(text: str, reference: datetime) -> List[RecognizedTime]:
    """Match ``2pm``, ``2:30 PM``, ``7 o'clock`` and bare hours like ``2``.

    Without a period marker the half of the day is inferred from the hour and
    from meal/part-of-day words anywhere in ``text``.
    """

    results: List[RecognizedTime] = []
    for match in _TWELVE_HOUR_PATTERN.finditer(text):
        hour = to_int(match.group(1))
        minute = to_int(match.group(2)) if match.group(2) else 0
        if hour is None or minute is None:
            continue

        period = match.group(3)
        if period:
            is_pm = "p" in period.lower()
        else:
            is_pm = infer_pm(hour, text)

        if is_pm and hour != 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0

        value = anchor_time(reference, hour, minute)
        if value is None:
            logger.debug("Dropping out-of-range 12-hour candidate %r", match.group(0))
            continue
        results.append(
            RecognizedTime(
                time=value,
                span=Span(match.start(), match.end()),
                confidence=EXPLICIT_CONFIDENCE if period else INFERRED_CONFIDENCE,
                format=TimeFormat.TWELVE_HOUR,
            )
        )
    return results


def recognize_twenty_four_hour_times(text: str, reference: datetime) -> List[RecognizedTime]:
    results: List[RecognizedTime] = []
    for match in _TWENTY_FOUR_HOUR_PATTERN.finditer(text):
        hour = to_int(match.group(1))
        minute = to_int(match.group(2))
        if hour is None or minute is None:
            continue
        value = anchor_time(reference, hour, minute)
        if value is None:
            continue
        results.append(
            RecognizedTime(
                time=value,
                span=Span(match.start(), match.end()),
                confidence=EXPLICIT_CONFIDENCE,
                format=TimeFormat.TWENTY_FOUR_HOUR,
            )
        )
    return results


def recognize_contextual_times(text: str, reference: datetime) -> List[RecognizedTime]:
    results: List[RecognizedTime] = []
    for keyword, hour, minute in CONTEXTUAL_TIMES:
        span = find_keyword(text, keyword)
        if span is None:
            continue
        value = anchor_time(reference, hour, minute)
        if value is None:
            continue
        results.append(
            RecognizedTime(
                time=value,
                span=span,
                confidence=CONTEXTUAL_CONFIDENCE,
                format=TimeFormat.CONTEXTUAL,
            )
        )
    return results


def infer_pm(hour: int, context: str) -> bool:
    """Guess whether a bare hour means PM.

    7-11 read as morning, 12 as noon; anything else is PM unless the context
    mentions the morning or breakfast.
    """

    if 7 <= hour <= 11:
        return False
    if hour == 12:
        return True
    lowered = (context or "").lower()
    if any(hint in lowered for hint in _AM_HINTS):
        return False
    if any(hint in lowered for hint in _PM_HINTS):
        return True
    return True


def anchor_time(reference: datetime, hour: int, minute: int) -> Optional[datetime]:
    """Bind ``hour:minute`` to the reference day, or ``None`` when out of range."""

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return reference.replace(hour=hour, minute=minute, second=0, microsecond=0)


__all__ = [
    "CONTEXTUAL_TIMES",
    "anchor_time",
    "infer_pm",
    "recognize_contextual_times",
    "recognize_times",
    "recognize_twelve_hour_times",
    "recognize_twenty_four_hour_times",
]
