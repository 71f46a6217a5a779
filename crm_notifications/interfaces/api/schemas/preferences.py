"""Pydantic models describing notification preference payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from crm_notifications.domain.entities import DigestFrequency, NotificationPreferences

from .notification import CamelModel

_CLOCK_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"


class ChannelPreferenceSchema(BaseModel):
    email: bool = False
    push: bool = False
    sms: bool = False


class NotificationPreferencesRead(CamelModel):
    """Stored preferences of the authenticated user."""

    email: bool
    push: bool
    sms: bool
    deals: bool
    tasks: bool
    reports: bool
    quiet_hours: bool
    quiet_hours_start: str
    quiet_hours_end: str
    allow_critical: bool
    digest: DigestFrequency
    channel_preferences: dict[str, ChannelPreferenceSchema]

    @classmethod
    def from_entity(cls, preferences: NotificationPreferences) -> "NotificationPreferencesRead":
        return cls.model_validate(preferences.to_dict())


class NotificationPreferencesUpdate(CamelModel):
    """Partial preferences document; omitted fields keep their stored value."""

    email: bool | None = None
    push: bool | None = None
    sms: bool | None = None
    deals: bool | None = None
    tasks: bool | None = None
    reports: bool | None = None
    quiet_hours: bool | None = None
    quiet_hours_start: str | None = Field(default=None, pattern=_CLOCK_PATTERN)
    quiet_hours_end: str | None = Field(default=None, pattern=_CLOCK_PATTERN)
    allow_critical: bool | None = None
    digest: DigestFrequency | None = None
    channel_preferences: dict[str, ChannelPreferenceSchema] | None = None

    def to_partial(self) -> dict[str, Any]:
        """Return the camelCase mapping of the fields the client sent."""

        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, mode="json")


__all__ = [
    "ChannelPreferenceSchema",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
]
