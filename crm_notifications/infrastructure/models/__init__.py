"""ORM models used by the application infrastructure."""

from .notification_preferences import NotificationPreferencesModel

__all__ = ["NotificationPreferencesModel"]
