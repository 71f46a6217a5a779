"""Pipeline deriving the notification feed from CRM snapshots."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import datetime

from crm_notifications.domain.entities import (
    Deal,
    Notification,
    NotificationPreferences,
    NotificationPriority,
    Task,
)
from crm_notifications.utils import as_wall_clock, minute_of_day

from .rules import (
    DerivationOptions,
    deal_notifications,
    task_notifications,
    weekly_report_notification,
    welcome_notification,
)
from .views import NotificationSort, sort_notifications

logger = logging.getLogger(__name__)


def should_show(
    priority: NotificationPriority, preferences: NotificationPreferences, now: datetime
) -> bool:
    """Return ``False`` when quiet hours suppress a notification of ``priority``."""

    if not preferences.is_quiet_time(minute_of_day(now)):
        return True
    return priority is NotificationPriority.HIGH and preferences.allow_critical


def _deduplicate(notifications: Iterable[Notification]) -> list[Notification]:
    unique: list[Notification] = []
    seen: set[str] = set()
    for notification in notifications:
        if notification.id in seen:
            continue
        seen.add(notification.id)
        unique.append(notification)
    return unique


def derive_notifications(
    tasks: Iterable[Task],
    deals: Iterable[Deal],
    preferences: NotificationPreferences,
    *,
    now: datetime,
    options: DerivationOptions | None = None,
) -> list[Notification]:
    """Return the candidate feed for the given snapshot, newest first.

    Every returned notification is unread; read state is layered on top by
    :func:`merge_read_state`.
    """

    options = options or DerivationOptions()
    now = as_wall_clock(now)

    candidates: list[Notification] = []
    if preferences.tasks:
        candidates.extend(task_notifications(tasks, now))
    if preferences.deals:
        candidates.extend(deal_notifications(deals, now, options))
    candidates.append(welcome_notification(now, options))
    if preferences.reports:
        report = weekly_report_notification(now, options)
        if report is not None:
            candidates.append(report)

    visible = [
        notification
        for notification in _deduplicate(candidates)
        if should_show(notification.priority, preferences, now)
    ]
    if len(visible) != len(candidates):
        logger.debug(
            "Quiet hours or duplicates removed %d of %d notifications",
            len(candidates) - len(visible),
            len(candidates),
        )
    return sort_notifications(visible, NotificationSort.NEWEST)


def merge_read_state(
    fresh: Sequence[Notification], previous: Iterable[Notification]
) -> list[Notification]:
    """Carry the ``read`` flag of ``previous`` onto ``fresh`` by identifier."""

    read_by_id = {notification.id: notification.read for notification in previous}
    return [
        replace(notification, read=read_by_id.get(notification.id, False))
        for notification in fresh
    ]


__all__ = ["derive_notifications", "merge_read_state", "should_show"]
