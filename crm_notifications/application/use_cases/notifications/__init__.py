"""Public helpers for deriving and managing CRM notifications."""

from .derivation import derive_notifications, merge_read_state, should_show
from .engine import NotificationEngine, coerce_preferences
from .registry import NotificationEngineRegistry
from .rules import DerivationOptions, days_until
from .views import (
    NotificationFilter,
    NotificationSort,
    by_priority,
    by_type,
    filter_notifications,
    filtered_and_sorted,
    sort_notifications,
)

__all__ = [
    "DerivationOptions",
    "NotificationEngine",
    "NotificationEngineRegistry",
    "NotificationFilter",
    "NotificationSort",
    "by_priority",
    "by_type",
    "coerce_preferences",
    "days_until",
    "derive_notifications",
    "filter_notifications",
    "filtered_and_sorted",
    "merge_read_state",
    "should_show",
    "sort_notifications",
]
