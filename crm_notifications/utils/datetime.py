"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Any, Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from crm_notifications.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)

Clock = Callable[[], datetime]


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` object). If the provided value cannot be resolved, ``UTC``
    is used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def as_wall_clock(value: datetime) -> datetime:
    """Return ``value`` unchanged when aware, else attach the app timezone.

    An aware value keeps its own offset so its hour and weekday stay the ones
    the caller observed.
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value


def parse_datetime(value: Any) -> datetime | None:
    """Coerce ``value`` into an aware datetime, or ``None`` when impossible.

    Accepts ``datetime`` and ``date`` instances as well as ISO 8601 strings
    (a trailing ``Z`` is understood as UTC). Date-only values resolve to
    midnight in the application timezone.
    """

    if isinstance(value, datetime):
        return ensure_app_timezone(value)
    if isinstance(value, date):
        return ensure_app_timezone(datetime.combine(value, time.min))
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    return ensure_app_timezone(parsed)


def minute_of_day(value: datetime) -> int:
    """Return the number of minutes elapsed since local midnight."""

    localized = as_wall_clock(value)
    return localized.hour * 60 + localized.minute


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
