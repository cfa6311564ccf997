from datetime import datetime

import pytest

from recognition.recognizers.times import infer_pm, recognize_times
from recognition.recognizers.types import Span, TimeFormat

NOW = datetime(2025, 3, 19, 10, 30)


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 3, 19, hour, minute)


def test_explicit_pm_period():
    results = recognize_times("2pm", NOW)

    assert len(results) == 1
    assert results[0].time == _at(14)
    assert results[0].confidence == 0.95
    assert results[0].format == TimeFormat.TWELVE_HOUR
    assert results[0].span == Span(0, 3)


def test_bare_hour_defaults_to_pm():
    text = "call at 2"
    results = recognize_times(text, NOW)

    assert len(results) == 1
    assert results[0].time == _at(14)
    assert results[0].confidence == 0.85
    assert results[0].span.extract(text) == "2"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("breakfast at 8", _at(8)),
        ("breakfast at 5", _at(5)),
        ("dinner at 6", _at(18)),
        ("standup at 9:15", _at(9, 15)),
        ("lunch at 12", _at(12)),
    ],
)
def test_inferred_period(text, expected):
    results = [item for item in recognize_times(text, NOW) if item.format == TimeFormat.TWELVE_HOUR]

    assert [item.time for item in results] == [expected]
    assert results[0].confidence == 0.85


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12am", _at(0)),
        ("12pm", _at(12)),
        ("7 a.m.", _at(7)),
        ("9:45 PM", _at(21, 45)),
        ("4p", _at(16)),
        ("11 P.M.", _at(23)),
    ],
)
def test_explicit_period_variants(text, expected):
    results = recognize_times(text, NOW)

    assert [item.time for item in results] == [expected]
    assert results[0].confidence == 0.95
    assert results[0].span.extract(text) == text


def test_oclock_counts_as_explicit_and_reads_as_am():
    results = recognize_times("3 o'clock", NOW)

    assert [item.time for item in results] == [_at(3)]
    assert results[0].confidence == 0.95


def test_morning_context_yields_both_twelve_hour_and_contextual_candidates():
    text = "morning run at 6"
    results = recognize_times(text, NOW)

    assert [(item.format, item.time) for item in results] == [
        (TimeFormat.TWELVE_HOUR, _at(6)),
        (TimeFormat.CONTEXTUAL, _at(9)),
    ]


@pytest.mark.parametrize("text", ["14:30", "1430"])
def test_twenty_four_hour_with_optional_colon(text):
    results = recognize_times(text, NOW)

    assert len(results) == 1
    assert results[0].format == TimeFormat.TWENTY_FOUR_HOUR
    assert results[0].time == _at(14, 30)
    assert results[0].confidence == 0.95
    assert results[0].span == Span(0, 4 if ":" not in text else 5)


def test_out_of_range_times_are_dropped():
    assert recognize_times("25:00", NOW) == []
    assert recognize_times("10:75", NOW) == []


def test_contextual_keywords_are_not_deduplicated():
    text = "Afternoon tea"
    results = recognize_times(text, NOW)

    assert [(item.span.extract(text), item.time) for item in results] == [
        ("Afternoon", _at(14)),
        ("noon", _at(12)),
    ]
    assert all(item.confidence == 0.85 for item in results)


def test_contextual_first_occurrence_per_keyword():
    text = "midnight snack, MIDNIGHT again"
    results = recognize_times(text, NOW)

    assert len(results) == 1
    assert results[0].span == Span(0, 8)
    assert results[0].time == _at(0)


def test_times_are_anchored_to_reference_day():
    reference = datetime(2024, 12, 31, 23, 59, 45, 123456)
    results = recognize_times("evening", reference)

    assert [item.time for item in results] == [datetime(2024, 12, 31, 18, 0)]


def test_empty_input_returns_nothing():
    assert recognize_times("", NOW) == []
    assert recognize_times("  ", NOW) == []
    assert recognize_times("no times here", NOW) == []


def test_infer_pm_rules():
    assert infer_pm(9, "") is False
    assert infer_pm(12, "breakfast") is True
    assert infer_pm(3, "") is True
    assert infer_pm(3, "Morning jog") is False
    assert infer_pm(3, "late night") is True


def test_recognition_is_idempotent_for_fixed_reference():
    text = "2pm, 14:30, 9 a.m. or evening"

    assert recognize_times(text, NOW) == recognize_times(text, NOW)


def test_unicode_text_keeps_spans_aligned():
    text = "réunion ☕ à 2pm"
    results = recognize_times(text, NOW)

    assert [item.time for item in results] == [_at(14)]
    assert results[0].span == Span(12, 15)
    assert results[0].span.extract(text) == "2pm"
