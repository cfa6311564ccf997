"""Load recognition settings from an optional YAML document plus the environment."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover - PyYAML is optional
    yaml = None  # type: ignore


DEFAULT_RECOGNITION_CONFIG = Path("config/recognition.yml")
_KNOWN_KEYS = {"timezone", "date_tagger", "tagger_languages"}


class RecognitionConfigError(ValueError):
    """Raised when a recognition config document has an invalid shape."""


@dataclass(frozen=True)
class RecognitionSettings:
    """Fixed construction-time configuration for ``RecognitionEngine``."""

    timezone: Optional[str] = None
    date_tagger: str = "none"
    tagger_languages: Tuple[str, ...] = field(default_factory=lambda: ("en",))

    def merged(self, overrides: Mapping[str, Any]) -> "RecognitionSettings":
        """Return a copy with any non-empty ``overrides`` applied."""

        values: Dict[str, Any] = {}
        if overrides.get("timezone"):
            values["timezone"] = str(overrides["timezone"]).strip()
        if overrides.get("date_tagger"):
            values["date_tagger"] = str(overrides["date_tagger"]).strip().lower()
        languages = overrides.get("tagger_languages")
        if languages:
            values["tagger_languages"] = _normalize_languages(languages)
        return replace(self, **values) if values else self


def load_recognition_settings(
    path: Path | str | None = None,
    *,
    required: bool = False,
) -> RecognitionSettings:
    """Read ``config/recognition.yml`` (or ``path``) into ``RecognitionSettings``.

    A missing default file yields the built-in defaults; a missing file that
    was asked for explicitly (``required=True``) raises ``FileNotFoundError``.
    """

    target = Path(path) if path else DEFAULT_RECOGNITION_CONFIG
    if not target.exists():
        if required:
            raise FileNotFoundError(f"Recognition config not found: {target}")
        return RecognitionSettings()

    raw = target.read_text(encoding="utf-8")
    if not raw.strip():
        return RecognitionSettings()
    data = _parse_yaml_or_json(raw, target)
    section = data.get("recognition", data)
    if not isinstance(section, dict):
        raise RecognitionConfigError(f"'recognition' in {target} must be a mapping.")
    unknown = set(section) - _KNOWN_KEYS
    if unknown:
        raise RecognitionConfigError(f"Unknown recognition settings in {target}: {', '.join(sorted(unknown))}")
    return RecognitionSettings().merged(section)


def _normalize_languages(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(item) for item in value]
    else:
        raise RecognitionConfigError("tagger_languages must be a string or a list of language codes.")
    languages = tuple(part.strip().lower() for part in parts if part and part.strip())
    return languages or ("en",)


def _parse_yaml_or_json(raw: str, source: Path) -> Dict[str, Any]:
    if yaml is not None:
        data = yaml.safe_load(raw)
        if isinstance(data, dict):
            return data
        raise RecognitionConfigError(f"Unsupported YAML document shape in {source}")

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:  # pragma: no cover - only hit if PyYAML missing
        raise RuntimeError(
            f"Unable to parse {source} without PyYAML installed. "
            "Install PyYAML or ensure the file is valid JSON."
        ) from exc

    if not isinstance(parsed, dict):
        raise RecognitionConfigError(f"Recognition config {source} must be a mapping at the top level.")
    return parsed


__all__ = [
    "DEFAULT_RECOGNITION_CONFIG",
    "RecognitionConfigError",
    "RecognitionSettings",
    "load_recognition_settings",
]
