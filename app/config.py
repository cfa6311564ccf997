"""Centralize defaults and environment lookups for the recognition engine."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

try:
    from dotenv import load_dotenv  # type: ignore
except ImportError:  # pragma: no cover - optional dependency
    load_dotenv = None
else:
    load_dotenv()

from recognition.settings import RecognitionSettings, load_recognition_settings

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH = "config/recognition.yml"
_DEFAULT_LOG_LEVEL = "WARNING"

# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def get_config_path(env: Dict[str, str] | None = None) -> Path:
    """Return the YAML file holding recognition overrides."""

    source = env if env is not None else os.environ
    override = source.get("RECOGNITION_CONFIG_PATH")
    return Path(override) if override else Path(_DEFAULT_CONFIG_PATH)


def is_config_path_explicit(env: Dict[str, str] | None = None) -> bool:
    source = env if env is not None else os.environ
    return bool(source.get("RECOGNITION_CONFIG_PATH"))


def get_timezone(env: Dict[str, str] | None = None) -> Optional[str]:
    """Return the IANA zone used by the default clock, or ``None`` for naive local time."""

    source = env if env is not None else os.environ
    raw = source.get("RECOGNITION_TIMEZONE")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def get_date_tagger(env: Dict[str, str] | None = None) -> Optional[str]:
    """Return the configured NLP date tagger name when the environment sets one."""

    source = env if env is not None else os.environ
    raw = source.get("RECOGNITION_DATE_TAGGER")
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower()


def get_tagger_languages(env: Dict[str, str] | None = None) -> Optional[List[str]]:
    source = env if env is not None else os.environ
    raw = source.get("RECOGNITION_TAGGER_LANGUAGES")
    if raw is None:
        return None
    parts = [segment.strip().lower() for segment in raw.split(",") if segment.strip()]
    return parts or None


def get_log_level(env: Dict[str, str] | None = None) -> int:
    """Return the numeric logging level for the probe CLI."""

    source = env if env is not None else os.environ
    raw = (source.get("RECOGNITION_LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


def get_recognition_settings(env: Dict[str, str] | None = None) -> RecognitionSettings:
    """Load the YAML file, then let environment variables override it.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.

    Returns:
        The merged ``RecognitionSettings``.
    """

    settings = load_recognition_settings(get_config_path(env), required=is_config_path_explicit(env))
    return settings.merged(
        {
            "timezone": get_timezone(env),
            "date_tagger": get_date_tagger(env),
            "tagger_languages": get_tagger_languages(env),
        }
    )


__all__ = [
    "get_config_path",
    "get_date_tagger",
    "get_log_level",
    "get_recognition_settings",
    "get_tagger_languages",
    "get_timezone",
    "is_config_path_explicit",
]
