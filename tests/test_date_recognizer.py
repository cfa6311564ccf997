from datetime import date, datetime, timedelta, timezone
from typing import List, Tuple

import pytest

from recognition.recognizers.dates import month_from_name, recognize_dates, weekday_offset
from recognition.recognizers.types import DateKind, Span

# Wednesday
NOW = datetime(2025, 3, 19, 10, 30)


def _of_kind(results, kind: DateKind):
    return [item for item in results if item.kind == kind]


def test_numeric_month_day_defaults_to_reference_year():
    text = "Dentist 3/20"
    results = recognize_dates(text, NOW)

    numeric = _of_kind(results, DateKind.NUMERIC)
    assert len(numeric) == 1
    assert numeric[0].date.date() == date(2025, 3, 20)
    assert numeric[0].confidence == 0.95
    assert numeric[0].span == Span(8, 12)
    assert numeric[0].span.extract(text) == "3/20"


def test_numeric_two_digit_year_is_normalized():
    results = recognize_dates("Party 12/25/24", NOW)

    numeric = _of_kind(results, DateKind.NUMERIC)
    assert [item.date.date() for item in numeric] == [date(2024, 12, 25)]


def test_numeric_accepts_dash_and_dot_separators():
    results = recognize_dates("due 4-1 or 4.2.2026", NOW)

    assert [item.date.date() for item in _of_kind(results, DateKind.NUMERIC)] == [
        date(2025, 4, 1),
        date(2026, 4, 2),
    ]


def test_invalid_calendar_dates_are_dropped():
    assert recognize_dates("2/30", NOW) == []
    assert recognize_dates("Feb 30", NOW) == []
    assert recognize_dates("13/01", NOW) == []


def test_iso_date_is_parsed_exactly():
    text = "Launch on 2025-03-20"
    results = recognize_dates(text, NOW)

    iso = _of_kind(results, DateKind.ISO)
    assert len(iso) == 1
    assert iso[0].date.date() == date(2025, 3, 20)
    assert iso[0].confidence == 0.95
    assert iso[0].span.extract(text) == "2025-03-20"


def test_text_month_with_suffix_and_year():
    text = "Offsite March 20th, 2026"
    results = recognize_dates(text, NOW)

    months = _of_kind(results, DateKind.TEXT_MONTH)
    assert len(months) == 1
    assert months[0].date.date() == date(2026, 3, 20)
    assert months[0].span.extract(text) == "March 20th, 2026"


def test_text_month_abbreviation_without_year():
    results = recognize_dates("pay rent SEP 1", NOW)

    months = _of_kind(results, DateKind.TEXT_MONTH)
    assert [item.date.date() for item in months] == [date(2025, 9, 1)]


def test_month_table_uses_first_three_letters():
    assert month_from_name("September") == 9
    assert month_from_name("dec") == 12
    assert month_from_name("Smarch") is None


def test_named_relative_days_report_first_occurrence_only():
    text = "today, tomorrow, and today again; not yesterday"
    results = _of_kind(recognize_dates(text, NOW), DateKind.RELATIVE)

    assert [(item.span.extract(text), item.date) for item in results] == [
        ("today", NOW),
        ("tomorrow", NOW + timedelta(days=1)),
        ("yesterday", NOW - timedelta(days=1)),
    ]
    assert all(item.confidence == 1.0 for item in results)
    assert results[0].span == Span(0, 5)


def test_named_relative_days_are_case_insensitive():
    text = "Call mom TOMORROW"
    results = recognize_dates(text, NOW)

    assert len(results) == 1
    assert results[0].span.extract(text) == "TOMORROW"
    assert results[0].date.date() == date(2025, 3, 20)


def test_next_monday_from_wednesday_is_five_days_ahead():
    results = recognize_dates("review next monday", NOW)

    assert len(results) == 1
    assert results[0].date.date() == date(2025, 3, 24)
    assert results[0].confidence == 0.95
    assert results[0].kind == DateKind.RELATIVE


@pytest.mark.parametrize(
    "phrase, expected",
    [
        ("next wednesday", date(2025, 3, 26)),
        ("this wednesday", date(2025, 3, 19)),
        ("this friday", date(2025, 3, 21)),
        ("last monday", date(2025, 3, 17)),
        ("last friday", date(2025, 3, 14)),
        ("last wednesday", date(2025, 3, 19)),
        ("Next   Sunday", date(2025, 3, 23)),
    ],
)
def test_weekday_modifiers(phrase, expected):
    results = recognize_dates(phrase, NOW)

    assert [item.date.date() for item in results] == [expected]


def test_weekday_offsets_respect_direction_for_every_combination():
    for current in range(7):
        for target in range(7):
            assert 1 <= weekday_offset(current, target, "next") <= 7
            assert 0 <= weekday_offset(current, target, "this") <= 6
            assert -6 <= weekday_offset(current, target, "last") <= 0


def test_last_weekday_is_never_in_the_future():
    start = datetime(2025, 3, 17, 8, 0)
    for day in range(7):
        reference = start + timedelta(days=day)
        for result in recognize_dates("last monday", reference):
            assert result.date <= reference


def test_offset_expressions():
    assert [item.date for item in recognize_dates("in 3 days", NOW)] == [datetime(2025, 3, 22, 10, 30)]
    assert [item.date for item in recognize_dates("In 2 Weeks", NOW)] == [datetime(2025, 4, 2, 10, 30)]
    results = recognize_dates("in 1 month", NOW)
    assert [item.date.date() for item in results] == [date(2025, 4, 19)]
    assert results[0].confidence == 0.9


def test_month_offset_clamps_to_month_end():
    results = recognize_dates("in 1 month", datetime(2025, 1, 31, 9, 0))

    assert [item.date.date() for item in results] == [date(2025, 2, 28)]


def test_absurd_offset_is_skipped_without_failing():
    assert recognize_dates("in 99999999 days", NOW) == []


def test_range_shaped_input_emits_no_range_candidates():
    results = recognize_dates("Vacation March 20-25", NOW)

    assert all(item.kind != DateKind.RANGE for item in results)
    assert [item.date.date() for item in _of_kind(results, DateKind.TEXT_MONTH)] == [date(2025, 3, 20)]


def test_empty_and_blank_text_return_nothing():
    assert recognize_dates("", NOW) == []
    assert recognize_dates("   \n", NOW) == []
    assert recognize_dates("no dates here", NOW) == []


def test_unicode_text_keeps_spans_aligned():
    text = "réunion ☕ 3/20"
    results = recognize_dates(text, NOW)

    assert len(results) == 1
    assert results[0].span.extract(text) == "3/20"
    assert results[0].span.start == text.index("3/20")


def test_timezone_of_reference_is_preserved():
    reference = NOW.replace(tzinfo=timezone.utc)
    results = recognize_dates("3/20 and tomorrow", reference)

    assert {item.date.tzinfo for item in results} == {timezone.utc}


class _StubTagger:
    def __init__(self, tagged: List[Tuple[str, datetime]]) -> None:
        self.tagged = tagged
        self.calls: List[Tuple[str, datetime]] = []

    def tag(self, text: str, reference: datetime):
        self.calls.append((text, reference))
        return list(self.tagged)


class _BrokenTagger:
    def tag(self, text: str, reference: datetime):
        raise RuntimeError("tagger offline")


def test_tagger_candidates_overlap_without_deduplication():
    text = "Dentist 3/20"
    tagger = _StubTagger([("3/20", datetime(2025, 3, 20))])
    results = recognize_dates(text, NOW, tagger=tagger)

    assert [item.kind for item in results] == [DateKind.NUMERIC, DateKind.NLP]
    assert results[0].span == results[1].span
    assert results[1].confidence == 0.7
    assert tagger.calls == [(text, NOW)]


def test_tagger_fragments_missing_from_text_are_ignored():
    text = "lunch next week, then next week again"
    tagger = _StubTagger(
        [
            ("next week", datetime(2025, 3, 26)),
            ("next week", datetime(2025, 3, 26)),
            ("fortnight", datetime(2025, 4, 2)),
        ]
    )
    results = recognize_dates(text, NOW, tagger=tagger)

    assert [item.span.start for item in results] == [6, text.rindex("next week")]


def test_failing_tagger_does_not_abort_other_strategies():
    results = recognize_dates("3/20", NOW, tagger=_BrokenTagger())

    assert [item.kind for item in results] == [DateKind.NUMERIC]


def test_recognition_is_idempotent_for_fixed_reference():
    text = "3/20, 2025-03-21, March 22, today, next friday, in 2 weeks"

    assert recognize_dates(text, NOW) == recognize_dates(text, NOW)
