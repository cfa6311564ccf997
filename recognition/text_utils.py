"""Shared text helpers for the recognizers."""

from __future__ import annotations

import re
from typing import Optional

from recognition.recognizers.types import Span


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse a captured digit group, returning ``None`` instead of raising."""

    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def find_keyword(text: str, keyword: str) -> Optional[Span]:
    """Return the span of the first case-insensitive occurrence of ``keyword``."""

    if not text or not keyword:
        return None
    match = re.search(re.escape(keyword), text, re.IGNORECASE)
    if not match:
        return None
    return Span(match.start(), match.end())


__all__ = ["find_keyword", "to_int"]
