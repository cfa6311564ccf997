"""Reference-moment helpers so relative dates and times stay deterministic."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from recognition.settings import RecognitionConfigError

Clock = Callable[[], datetime]


def system_clock(zone: Optional[tzinfo] = None) -> Clock:
    """Return a clock reading the system time, in ``zone`` when given."""

    def _now() -> datetime:
        return datetime.now(zone) if zone is not None else datetime.now()

    return _now


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock frozen at ``moment`` (used by tests and replays)."""

    return lambda: moment


def clock_for_timezone(name: Optional[str]) -> Clock:
    if not name:
        return system_clock()
    try:
        zone = ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise RecognitionConfigError(f"Unknown timezone '{name}'; expected an IANA name such as 'Europe/Copenhagen'") from exc
    return system_clock(zone)


def resolve_now(clock: Clock, now: Optional[datetime] = None) -> datetime:
    """Capture the reference moment once for a single recognition call."""

    return now if now is not None else clock()


__all__ = ["Clock", "clock_for_timezone", "fixed_clock", "resolve_now", "system_clock"]
