"""Read-only views over a notification list."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from crm_notifications.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
)


class NotificationFilter(str, Enum):
    """Subsets a caller can ask for."""

    ALL = "all"
    UNREAD = "unread"
    TASK = "task"
    DEAL = "deal"
    SYSTEM = "system"
    REPORT = "report"


class NotificationSort(str, Enum):
    """Orderings a caller can ask for."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"


def by_type(
    notifications: Iterable[Notification], notification_type: NotificationType | str
) -> list[Notification]:
    wanted = NotificationType(notification_type)
    return [notification for notification in notifications if notification.type is wanted]


def by_priority(
    notifications: Iterable[Notification], priority: NotificationPriority | str
) -> list[Notification]:
    wanted = NotificationPriority(priority)
    return [notification for notification in notifications if notification.priority is wanted]


def filter_notifications(
    notifications: Iterable[Notification], notification_filter: NotificationFilter | str
) -> list[Notification]:
    """Return the notifications matching ``notification_filter``."""

    selected = NotificationFilter(notification_filter)
    if selected is NotificationFilter.ALL:
        return list(notifications)
    if selected is NotificationFilter.UNREAD:
        return [notification for notification in notifications if not notification.read]
    return by_type(notifications, selected.value)


def sort_notifications(
    notifications: Iterable[Notification], sort_by: NotificationSort | str
) -> list[Notification]:
    """Return a new list ordered by ``sort_by``; ties keep their input order."""

    selected = NotificationSort(sort_by)
    if selected is NotificationSort.NEWEST:
        return sorted(notifications, key=lambda item: item.timestamp, reverse=True)
    if selected is NotificationSort.OLDEST:
        return sorted(notifications, key=lambda item: item.timestamp)
    if selected is NotificationSort.PRIORITY:
        return sorted(notifications, key=lambda item: item.priority.rank, reverse=True)
    raise ValueError(f"Unsupported sort order: {sort_by!r}")  # pragma: no cover


def filtered_and_sorted(
    notifications: Iterable[Notification],
    notification_filter: NotificationFilter | str = NotificationFilter.ALL,
    sort_by: NotificationSort | str = NotificationSort.NEWEST,
) -> list[Notification]:
    return sort_notifications(filter_notifications(notifications, notification_filter), sort_by)


__all__ = [
    "NotificationFilter",
    "NotificationSort",
    "by_priority",
    "by_type",
    "filter_notifications",
    "filtered_and_sorted",
    "sort_notifications",
]
