"""Facade bundling the three recognizers behind one configured object.

The planner's input-capture layer holds a single ``RecognitionEngine`` and
feeds it committed text or finished strokes. The engine only stores fixed
configuration (the clock and the optional date tagger), so one instance can be
shared freely across threads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from recognition.clock import Clock, clock_for_timezone, resolve_now, system_clock
from recognition.recognizers import dates, gestures, times
from recognition.recognizers.types import PointLike, RecognizedDate, RecognizedGesture, RecognizedTime
from recognition.settings import RecognitionSettings
from recognition.taggers import DateTagger, build_tagger


class RecognitionEngine:
    """Entry point for date, time and gesture recognition."""

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        tagger: Optional[DateTagger] = None,
    ) -> None:
        self._clock = clock or system_clock()
        self._tagger = tagger

    @classmethod
    def from_settings(cls, settings: RecognitionSettings, *, clock: Optional[Clock] = None) -> "RecognitionEngine":
        """Build an engine from loaded settings; an explicit ``clock`` wins over the timezone."""

        tagger = build_tagger(settings.date_tagger, languages=settings.tagger_languages)
        return cls(clock=clock or clock_for_timezone(settings.timezone), tagger=tagger)

    @property
    def tagger(self) -> Optional[DateTagger]:
        return self._tagger

    def now(self) -> datetime:
        return self._clock()

    def recognize_dates(self, text: str, *, now: Optional[datetime] = None) -> List[RecognizedDate]:
        return dates.recognize_dates(text, resolve_now(self._clock, now), tagger=self._tagger)

    def recognize_times(self, text: str, *, now: Optional[datetime] = None) -> List[RecognizedTime]:
        return times.recognize_times(text, resolve_now(self._clock, now))

    def classify_gesture(self, points: Iterable[PointLike]) -> Optional[RecognizedGesture]:
        return gestures.classify_gesture(points)

    def classify_strokes(self, strokes: Iterable[Iterable[PointLike]]) -> Optional[RecognizedGesture]:
        return gestures.classify_strokes(strokes)


__all__ = ["RecognitionEngine"]
