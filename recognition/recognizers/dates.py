"""Date recognition over free-form planner text.

Every strategy runs on every call and the results are concatenated in strategy
order. Candidates are deliberately *not* deduplicated: "3/20/2025" yields a
numeric candidate while "2025-03-20" yields an ISO candidate (plus nothing from
the numeric scan, because "25-03-20" is not a valid month/day). Callers pick
between overlapping spans using ``kind`` and ``confidence``.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from dateutil.relativedelta import relativedelta

from recognition.recognizers.types import DateKind, RecognizedDate, Span
from recognition.taggers import DateTagger
from recognition.text_utils import find_keyword, to_int

logger = logging.getLogger(__name__)

ABSOLUTE_CONFIDENCE = 0.95
NAMED_DAY_CONFIDENCE = 1.0
WEEKDAY_CONFIDENCE = 0.95
OFFSET_CONFIDENCE = 0.9
NLP_CONFIDENCE = 0.7

_NUMERIC_PATTERN = re.compile(r"(\d{1,2})[/\-.](\d{1,2})(?:[/\-.](\d{2,4}))?")
_TEXT_MONTH_PATTERN = re.compile(
    r"(Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|Aug(?:ust)?"
    r"|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\s+(\d{1,2})(?:st|nd|rd|th)?(?:,?\s+(\d{4}))?",
    re.IGNORECASE,
)
_ISO_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_OFFSET_PATTERN = re.compile(r"in\s+(\d+)\s+(day|week|month)s?", re.IGNORECASE)
_RANGE_PATTERN = re.compile(r"(\w+\s+\d{1,2}|\d{1,2}/\d{1,2})\s*[-–]\s*(\d{1,2}/\d{1,2}|\d{1,2})")

MONTH_ABBREVIATIONS: Mapping[str, int] = MappingProxyType(
    {
        "jan": 1,
        "feb": 2,
        "mar": 3,
        "apr": 4,
        "may": 5,
        "jun": 6,
        "jul": 7,
        "aug": 8,
        "sep": 9,
        "oct": 10,
        "nov": 11,
        "dec": 12,
    }
)
NAMED_DAY_OFFSETS: Tuple[Tuple[str, int], ...] = (("today", 0), ("tomorrow", 1), ("yesterday", -1))
WEEKDAY_NAMES: Tuple[str, ...] = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
WEEKDAY_MODIFIERS: Tuple[str, ...] = ("next", "this", "last")


def recognize_dates(
    text: str,
    now: Optional[datetime] = None,
    *,
    tagger: Optional[DateTagger] = None,
) -> List[RecognizedDate]:
    """Run every date strategy over ``text`` against one reference moment."""

    if not text or not text.strip():
        return []
    reference = now if now is not None else datetime.now()

    results: List[RecognizedDate] = []
    results.extend(recognize_absolute_dates(text, reference))
    results.extend(recognize_relative_dates(text, reference))
    results.extend(recognize_date_ranges(text, reference))
    results.extend(recognize_tagged_dates(text, reference, tagger))
    return results


# ---------------------------------------------------------------------------
# Absolute dates
# ---------------------------------------------------------------------------
def recognize_absolute_dates(text: str, reference: datetime) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    results.extend(_scan(_NUMERIC_PATTERN, text, reference, DateKind.NUMERIC, _parse_numeric))
    results.extend(_scan(_TEXT_MONTH_PATTERN, text, reference, DateKind.TEXT_MONTH, _parse_text_month))
    results.extend(_scan(_ISO_PATTERN, text, reference, DateKind.ISO, _parse_iso))
    return results


def _scan(
    pattern: re.Pattern[str],
    text: str,
    reference: datetime,
    kind: DateKind,
    parse: Callable[[re.Match[str], datetime], Optional[datetime]],
) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    for match in pattern.finditer(text):
        value = parse(match, reference)
        if value is None:
            logger.debug("Skipping %s candidate %r", kind.value, match.group(0))
            continue
        results.append(
            RecognizedDate(
                date=value,
                span=Span(match.start(), match.end()),
                confidence=ABSOLUTE_CONFIDENCE,
                kind=kind,
            )
        )
    return results


def _parse_numeric(match: re.Match[str], reference: datetime) -> Optional[datetime]:
    month = to_int(match.group(1))
    day = to_int(match.group(2))
    year = to_int(match.group(3)) if match.group(3) else reference.year
    if month is None or day is None or year is None:
        return None
    if year < 100:
        year += 2000
    return _build_date(year, month, day, reference)


def _parse_text_month(match: re.Match[str], reference: datetime) -> Optional[datetime]:
    month = month_from_name(match.group(1))
    day = to_int(match.group(2))
    year = to_int(match.group(3)) if match.group(3) else reference.year
    if month is None or day is None or year is None:
        return None
    return _build_date(year, month, day, reference)


def _parse_iso(match: re.Match[str], reference: datetime) -> Optional[datetime]:
    year = to_int(match.group(1))
    month = to_int(match.group(2))
    day = to_int(match.group(3))
    if year is None or month is None or day is None:
        return None
    return _build_date(year, month, day, reference)


def month_from_name(name: str) -> Optional[int]:
    """Map a month name or abbreviation to its number via its first three letters."""

    return MONTH_ABBREVIATIONS.get((name or "")[:3].lower())


# ---------------------------------------------------------------------------
# Relative dates
# ---------------------------------------------------------------------------
def recognize_relative_dates(text: str, reference: datetime) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    results.extend(_recognize_named_days(text, reference))
    results.extend(_recognize_weekday_references(text, reference))
    results.extend(_recognize_offsets(text, reference))
    return results


    # WHAT: report today/tomorrow/yesterday at most once each.
    # WHY: repeated mentions of the same day add no new candidate.
    # HOW: a case-insensitive search keeps the span aligned with the original text.
def _recognize_named_days(text: str, reference: datetime) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    for keyword, days in NAMED_DAY_OFFSETS:
        span = find_keyword(text, keyword)
        if span is None:
            continue
        results.append(
            RecognizedDate(
                date=reference + timedelta(days=days),
                span=span,
                confidence=NAMED_DAY_CONFIDENCE,
                kind=DateKind.RELATIVE,
            )
        )
    return results


def _recognize_weekday_references(text: str, reference: datetime) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    for modifier in WEEKDAY_MODIFIERS:
        for index, weekday in enumerate(WEEKDAY_NAMES):
            match = re.search(rf"{modifier}\s+{weekday}", text, re.IGNORECASE)
            if not match:
                continue
            offset = weekday_offset(reference.weekday(), index, modifier)
            results.append(
                RecognizedDate(
                    date=reference + timedelta(days=offset),
                    span=Span(match.start(), match.end()),
                    confidence=WEEKDAY_CONFIDENCE,
                    kind=DateKind.RELATIVE,
                )
            )
    return results


def weekday_offset(current: int, target: int, modifier: str) -> int:
    """Return the day offset from ``current`` to ``target`` (Monday == 0).

    ``next`` never resolves to today, ``this`` may, and ``last`` uses a
    truncated remainder so the offset always lands in ``[-6, 0]``.
    """

    if modifier == "next":
        days = (target - current + 7) % 7
        return days or 7
    if modifier == "this":
        return (target - current + 7) % 7
    if modifier == "last":
        return int(math.fmod(target - current - 7, 7))
    raise ValueError(f"Unsupported weekday modifier: {modifier}")


def _recognize_offsets(text: str, reference: datetime) -> List[RecognizedDate]:
    results: List[RecognizedDate] = []
    for match in _OFFSET_PATTERN.finditer(text):
        amount = to_int(match.group(1))
        if amount is None:
            continue
        unit = match.group(2).lower()
        if unit == "day":
            delta = relativedelta(days=amount)
        elif unit == "week":
            delta = relativedelta(weeks=amount)
        else:
            delta = relativedelta(months=amount)
        try:
            value = reference + delta
        except (OverflowError, ValueError):
            logger.debug("Offset %r falls outside the supported calendar range", match.group(0))
            continue
        results.append(
            RecognizedDate(
                date=value,
                span=Span(match.start(), match.end()),
                confidence=OFFSET_CONFIDENCE,
                kind=DateKind.RELATIVE,
            )
        )
    return results


# ---------------------------------------------------------------------------
# Ranges and tagger pass
# ---------------------------------------------------------------------------
def recognize_date_ranges(text: str, reference: datetime) -> List[RecognizedDate]:
    """Scan for "March 20-25" / "3/20-3/25" shapes without emitting candidates.

    Ranges are an extension point: they are detected so the shape is known, but
    resolving start and end dates is left undone and the pass returns nothing.
    """

    for match in _RANGE_PATTERN.finditer(text):
        logger.debug("Date range %r detected but not resolved", match.group(0))
    return []


def recognize_tagged_dates(
    text: str,
    reference: datetime,
    tagger: Optional[DateTagger],
) -> List[RecognizedDate]:
    if tagger is None:
        return []
    try:
        tagged = list(tagger.tag(text, reference))
    except Exception:  # noqa: BLE001 - taggers are best-effort
        logger.warning("Date tagger %s failed; skipping the NLP pass.", type(tagger).__name__, exc_info=True)
        return []
    return [
        RecognizedDate(date=value, span=span, confidence=NLP_CONFIDENCE, kind=DateKind.NLP)
        for span, value in _anchor_fragments(text, tagged)
    ]


def _anchor_fragments(text: str, tagged: Iterable[Tuple[str, datetime]]) -> List[Tuple[Span, datetime]]:
    """Locate each tagged fragment in ``text``, walking forward through repeats."""

    anchored: List[Tuple[Span, datetime]] = []
    cursor = 0
    for fragment, value in tagged:
        if not fragment or not isinstance(value, datetime):
            continue
        start = text.find(fragment, cursor)
        if start < 0:
            start = text.find(fragment)
        if start < 0:
            logger.debug("Tagged fragment %r not found in source text", fragment)
            continue
        end = start + len(fragment)
        anchored.append((Span(start, end), value))
        cursor = end
    return anchored


def _build_date(year: int, month: int, day: int, reference: datetime) -> Optional[datetime]:
    try:
        return datetime(year, month, day, tzinfo=reference.tzinfo)
    except ValueError:
        return None


__all__ = [
    "MONTH_ABBREVIATIONS",
    "WEEKDAY_NAMES",
    "month_from_name",
    "recognize_absolute_dates",
    "recognize_date_ranges",
    "recognize_dates",
    "recognize_relative_dates",
    "recognize_tagged_dates",
    "weekday_offset",
]
