"""Repository implementations for infrastructure layer."""

from .notification_preferences_repository import (
    NotificationPreferencesRepository,
    NotificationPreferencesStore,
)

__all__ = [
    "NotificationPreferencesRepository",
    "NotificationPreferencesStore",
]
