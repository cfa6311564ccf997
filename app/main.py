"""Assemble the recognition engine and run the interactive probe loop."""

from __future__ import annotations

import logging
from typing import List, Optional

from app.config import get_log_level, get_recognition_settings
from recognition.clock import Clock
from recognition.engine import RecognitionEngine
from recognition.recognizers.types import RecognizedDate, RecognizedTime

logger = logging.getLogger(__name__)


# -- Engine construction -------------------------------------------------------
def build_engine(clock: Optional[Clock] = None) -> RecognitionEngine:
    """Wire settings, clock, and date tagger into a ``RecognitionEngine``.

    WHAT: load ``config/recognition.yml`` plus environment overrides.
    WHY: the probe and any embedding application must share identical wiring
    so recognition behaves the same everywhere.
    HOW: hand the merged ``RecognitionSettings`` to ``RecognitionEngine.from_settings``.
    """
    settings = get_recognition_settings()
    logger.debug("Recognition settings: %s", settings)
    return RecognitionEngine.from_settings(settings, clock=clock)


def describe(text: str, dates: List[RecognizedDate], times: List[RecognizedTime]) -> List[str]:
    """Render recognized candidates as one line each for the probe output."""

    lines: List[str] = []
    for item in dates:
        lines.append(
            f"date  {item.kind.value:<11} {item.confidence:.2f}  "
            f"{item.span.extract(text)!r} -> {item.date.date().isoformat()}"
        )
    for item in times:
        lines.append(
            f"time  {item.format.value:<11} {item.confidence:.2f}  "
            f"{item.span.extract(text)!r} -> {item.time.strftime('%H:%M')}"
        )
    if not lines:
        lines.append("(nothing recognized)")
    return lines


# -- Interactive probe loop ----------------------------------------------------
def main() -> None:
    """Read lines from stdin and print the dates and times recognized in each."""
    logging.basicConfig(level=get_log_level())
    engine = build_engine()
    print("Recognition probe ready. Type 'quit' or 'exit' to stop.")

    while True:
        try:
            message = input("Text: ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if message.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break

        now = engine.now()
        for line in describe(message, engine.recognize_dates(message, now=now), engine.recognize_times(message, now=now)):
            print(f"  {line}")
        print()


if __name__ == "__main__":
    main()
