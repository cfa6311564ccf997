"""Optional date taggers that back the supplementary NLP pass.

The date recognizer works without any tagger. When one is injected it is asked
for ``(matched_text, datetime)`` pairs which the recognizer then anchors to
spans in the source text. ``DateparserTagger`` wraps ``dateparser``'s search
helper and quietly yields nothing when the package is not installed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

try:
    from dateparser.search import search_dates  # type: ignore
except Exception:  # pragma: no cover - optional dependency at runtime
    search_dates = None  # type: ignore

from recognition.settings import RecognitionConfigError

logger = logging.getLogger(__name__)

TaggedDate = Tuple[str, datetime]


class DateTagger(Protocol):
    def tag(self, text: str, reference: datetime) -> Iterable[TaggedDate]:
        ...


class DateparserTagger:
    """Lazy wrapper around ``dateparser.search.search_dates``."""

    def __init__(self, languages: Optional[Sequence[str]] = None) -> None:
        self._languages: List[str] = list(languages or ["en"])

    @property
    def available(self) -> bool:
        return search_dates is not None

    @property
    def languages(self) -> List[str]:
        return list(self._languages)

    def tag(self, text: str, reference: datetime) -> List[TaggedDate]:
        if not text or not text.strip() or search_dates is None:
            return []
        settings = {
            "RELATIVE_BASE": reference.replace(tzinfo=None),
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        found = search_dates(text, languages=self._languages, settings=settings)
        if not found:
            return []
        results: List[TaggedDate] = []
        for matched, value in found:
            if value is None or not matched:
                continue
            if reference.tzinfo is not None and value.tzinfo is None:
                value = value.replace(tzinfo=reference.tzinfo)
            results.append((matched, value))
        logger.debug("dateparser tagged %d fragment(s)", len(results))
        return results


_KNOWN_TAGGERS = ("none", "dateparser")


def build_tagger(name: Optional[str], *, languages: Optional[Sequence[str]] = None) -> Optional[DateTagger]:
    """Instantiate a tagger from its configured name (``none`` disables the pass)."""

    normalized = (name or "none").strip().lower()
    if normalized == "none":
        return None
    if normalized == "dateparser":
        tagger = DateparserTagger(languages)
        if not tagger.available:
            logger.warning("dateparser is not installed; the NLP date pass will stay empty.")
        return tagger
    raise RecognitionConfigError(f"Unknown date tagger '{name}'. Expected one of: {', '.join(_KNOWN_TAGGERS)}.")


__all__ = ["DateTagger", "DateparserTagger", "TaggedDate", "build_tagger"]
