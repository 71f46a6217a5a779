"""Domain entity describing a user's notification preferences."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Final

from .notification import NotificationType

logger = logging.getLogger(__name__)

_CLOCK_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})$")

DEFAULT_QUIET_HOURS_START: Final[str] = "22:00"
DEFAULT_QUIET_HOURS_END: Final[str] = "07:00"


class DigestFrequency(str, Enum):
    """How often a digest of notifications would be delivered."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"


def parse_clock(value: Any) -> int | None:
    """Return the minute-of-day for an ``HH:MM`` string, or ``None`` if invalid."""

    if not isinstance(value, str):
        return None
    match = _CLOCK_PATTERN.match(value.strip())
    if match is None:
        return None
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour > 23 or minute > 59:
        return None
    return hour * 60 + minute


@dataclass(frozen=True)
class ChannelPreference:
    """Delivery channels enabled for a single category."""

    email: bool = False
    push: bool = False
    sms: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {"email": self.email, "push": self.push, "sms": self.sms}

    @classmethod
    def from_mapping(cls, data: Any, *, default: "ChannelPreference") -> "ChannelPreference":
        if not isinstance(data, Mapping):
            return default
        values = {}
        for name in ("email", "push", "sms"):
            raw = data.get(name, getattr(default, name))
            values[name] = raw if isinstance(raw, bool) else getattr(default, name)
        return cls(**values)


def _default_channel_preferences() -> dict[str, ChannelPreference]:
    return {
        "deals": ChannelPreference(email=True, push=True, sms=False),
        "tasks": ChannelPreference(email=True, push=True, sms=False),
        "reports": ChannelPreference(email=True, push=False, sms=False),
    }


# Persisted (camelCase) key for every dataclass field.
_STORAGE_KEYS: Final[dict[str, str]] = {
    "email": "email",
    "push": "push",
    "sms": "sms",
    "deals": "deals",
    "tasks": "tasks",
    "reports": "reports",
    "quiet_hours": "quietHours",
    "quiet_hours_start": "quietHoursStart",
    "quiet_hours_end": "quietHoursEnd",
    "allow_critical": "allowCritical",
    "digest": "digest",
    "channel_preferences": "channelPreferences",
}

_BOOLEAN_FIELDS: Final[tuple[str, ...]] = (
    "email",
    "push",
    "sms",
    "deals",
    "tasks",
    "reports",
    "quiet_hours",
    "allow_critical",
)


@dataclass(frozen=True)
class NotificationPreferences:
    """Per-user switches controlling which notifications are derived."""

    email: bool = True
    push: bool = True
    sms: bool = False
    deals: bool = True
    tasks: bool = True
    reports: bool = True
    quiet_hours: bool = False
    quiet_hours_start: str = DEFAULT_QUIET_HOURS_START
    quiet_hours_end: str = DEFAULT_QUIET_HOURS_END
    allow_critical: bool = True
    digest: DigestFrequency = DigestFrequency.NONE
    channel_preferences: dict[str, ChannelPreference] = field(
        default_factory=_default_channel_preferences
    )

    def is_enabled(self, notification_type: NotificationType) -> bool:
        """Return whether ``notification_type`` is switched on."""

        if notification_type is NotificationType.TASK:
            return self.tasks
        if notification_type is NotificationType.DEAL:
            return self.deals
        if notification_type is NotificationType.REPORT:
            return self.reports
        if notification_type is NotificationType.SYSTEM:
            return True
        raise ValueError(f"Unsupported notification type: {notification_type!r}")

    @property
    def quiet_window(self) -> tuple[int, int]:
        """Return the quiet window as ``(start, end)`` minutes of the day."""

        start = parse_clock(self.quiet_hours_start)
        end = parse_clock(self.quiet_hours_end)
        return (
            start if start is not None else parse_clock(DEFAULT_QUIET_HOURS_START),
            end if end is not None else parse_clock(DEFAULT_QUIET_HOURS_END),
        )

    def is_quiet_time(self, current_minute: int) -> bool:
        """Return ``True`` when ``current_minute`` falls inside quiet hours."""

        if not self.quiet_hours:
            return False
        start, end = self.quiet_window
        if start > end:
            return current_minute >= start or current_minute <= end
        return start <= current_minute <= end

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable (camelCase) representation."""

        payload: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "digest":
                value = value.value
            elif item.name == "channel_preferences":
                value = {category: pref.to_dict() for category, pref in value.items()}
            payload[_STORAGE_KEYS[item.name]] = value
        return payload

    def merged(self, partial: Mapping[str, Any]) -> "NotificationPreferences":
        """Shallow-merge ``partial`` (camelCase keys) over these preferences.

        Invalid values in ``partial`` keep the current setting.
        """

        return NotificationPreferences.from_mapping(
            {**self.to_dict(), **dict(partial)}, fallback=self
        )

    @classmethod
    def from_mapping(
        cls, data: Any, *, fallback: "NotificationPreferences | None" = None
    ) -> "NotificationPreferences":
        """Build preferences from a stored document, defaulting bad values.

        A document that is not a mapping yields the defaults. Individual fields
        with the wrong type fall back to their own default so a single bad
        value does not discard the remaining choices. ``fallback`` replaces the
        defaults as the source of those values.
        """

        defaults = fallback if fallback is not None else cls()
        if data is None:
            return defaults
        if not isinstance(data, Mapping):
            logger.warning(
                "Ignoring malformed notification preferences of type %s",
                type(data).__name__,
            )
            return defaults

        values: dict[str, Any] = {}
        for name in _BOOLEAN_FIELDS:
            key = _STORAGE_KEYS[name]
            if key not in data:
                continue
            raw = data[key]
            if isinstance(raw, bool):
                values[name] = raw
            else:
                logger.warning("Invalid value for preference '%s': %r", key, raw)

        for name in ("quiet_hours_start", "quiet_hours_end"):
            key = _STORAGE_KEYS[name]
            if key not in data:
                continue
            raw = data[key]
            if parse_clock(raw) is not None:
                values[name] = raw.strip()
            else:
                logger.warning("Invalid value for preference '%s': %r", key, raw)

        if "digest" in data:
            try:
                values["digest"] = DigestFrequency(data["digest"])
            except ValueError:
                logger.warning("Invalid value for preference 'digest': %r", data["digest"])

        raw_channels = data.get("channelPreferences")
        if raw_channels is not None:
            if isinstance(raw_channels, Mapping):
                channels = _default_channel_preferences()
                for category, raw_pref in raw_channels.items():
                    default = channels.get(str(category), ChannelPreference())
                    channels[str(category)] = ChannelPreference.from_mapping(
                        raw_pref, default=default
                    )
                values["channel_preferences"] = channels
            else:
                logger.warning("Invalid value for preference 'channelPreferences': %r", raw_channels)

        return replace(defaults, **values)


__all__ = [
    "ChannelPreference",
    "DEFAULT_QUIET_HOURS_END",
    "DEFAULT_QUIET_HOURS_START",
    "DigestFrequency",
    "NotificationPreferences",
    "parse_clock",
]
