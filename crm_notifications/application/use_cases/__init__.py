"""Aggregate application use cases."""

from .notifications import NotificationEngine, NotificationEngineRegistry, derive_notifications

__all__ = [
    "NotificationEngine",
    "NotificationEngineRegistry",
    "derive_notifications",
]
