"""Stateful owner of a user's derived notification feed."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any, Protocol

from crm_notifications.domain.entities import (
    Deal,
    Notification,
    NotificationPreferences,
    NotificationPriority,
    NotificationType,
    Task,
)
from crm_notifications.utils import Clock, now_in_app_timezone

from .derivation import derive_notifications, merge_read_state
from .rules import DerivationOptions
from .views import (
    NotificationFilter,
    NotificationSort,
    by_priority,
    by_type,
    filtered_and_sorted,
)

logger = logging.getLogger(__name__)


class PreferencesStore(Protocol):
    def save(
        self, user_id: str, preferences: NotificationPreferences
    ) -> NotificationPreferences: ...


def coerce_preferences(value: Any) -> NotificationPreferences:
    """Return ``value`` as preferences, using defaults when it is unusable."""

    if isinstance(value, NotificationPreferences):
        return value
    return NotificationPreferences.from_mapping(value)


def _coerce_tasks(tasks: Iterable[Task | Mapping[str, Any]]) -> tuple[Task, ...]:
    return tuple(task if isinstance(task, Task) else Task.from_mapping(task) for task in tasks)


def _coerce_deals(deals: Iterable[Deal | Mapping[str, Any]]) -> tuple[Deal, ...]:
    return tuple(deal if isinstance(deal, Deal) else Deal.from_mapping(deal) for deal in deals)


class NotificationEngine:
    """Derive, hold and mutate the notification feed of a single user.

    The owner calls :meth:`recompute` whenever it observes a change in the
    tasks or deals snapshot. Preference updates recompute from the last
    snapshot on their own. Mutations only touch the in-memory feed: read
    flags survive the next recomputation, deletions do not. Recomputation and
    every mutation hold a per-engine lock, so one engine can serve concurrent
    requests.
    """

    def __init__(
        self,
        user_id: str,
        *,
        preferences: NotificationPreferences | Mapping[str, Any] | None = None,
        preferences_store: PreferencesStore | None = None,
        clock: Clock | None = None,
        options: DerivationOptions | None = None,
    ) -> None:
        self.user_id = user_id
        self._preferences = coerce_preferences(preferences)
        self._preferences_store = preferences_store
        self._clock = clock or now_in_app_timezone
        self._options = options or DerivationOptions()
        self._notifications: list[Notification] = []
        self._tasks: tuple[Task, ...] = ()
        self._deals: tuple[Deal, ...] = ()
        self._has_snapshot = False
        self._lock = threading.RLock()

    @property
    def preferences(self) -> NotificationPreferences:
        return self._preferences

    @property
    def notifications(self) -> list[Notification]:
        """Current feed, without categories the preferences switch off."""

        return [
            notification
            for notification in self._notifications
            if self._preferences.is_enabled(notification.type)
        ]

    @property
    def unread_count(self) -> int:
        return sum(1 for notification in self.notifications if not notification.read)

    def recompute(
        self,
        tasks: Iterable[Task | Mapping[str, Any]] | None = None,
        deals: Iterable[Deal | Mapping[str, Any]] | None = None,
        *,
        now: datetime | None = None,
    ) -> list[Notification]:
        """Rebuild the feed from a snapshot and return the visible notifications.

        ``None`` for ``tasks`` or ``deals`` reuses the previous snapshot.
        """

        with self._lock:
            if tasks is not None:
                self._tasks = _coerce_tasks(tasks)
            if deals is not None:
                self._deals = _coerce_deals(deals)
            self._has_snapshot = True

            evaluated_at = now or self._clock()
            fresh = derive_notifications(
                self._tasks,
                self._deals,
                self._preferences,
                now=evaluated_at,
                options=self._options,
            )
            self._notifications = merge_read_state(fresh, self._notifications)
            logger.debug(
                "Recomputed %d notifications for user %s (%d unread)",
                len(self._notifications),
                self.user_id,
                self.unread_count,
            )
            return self.notifications

    def mark_as_read(self, notification_id: str) -> None:
        with self._lock:
            self._notifications = [
                replace(notification, read=True)
                if notification.id == notification_id
                else notification
                for notification in self._notifications
            ]

    def mark_all_as_read(self) -> None:
        with self._lock:
            self._notifications = [
                replace(notification, read=True) for notification in self._notifications
            ]

    def delete(self, notification_id: str) -> None:
        """Drop ``notification_id`` until the next recomputation re-derives it."""

        with self._lock:
            self._notifications = [
                notification
                for notification in self._notifications
                if notification.id != notification_id
            ]

    def clear_all(self) -> None:
        with self._lock:
            self._notifications = []

    def update_preferences(self, partial: Mapping[str, Any]) -> NotificationPreferences:
        """Shallow-merge ``partial`` (camelCase keys), persist it and recompute."""

        with self._lock:
            self._preferences = self._preferences.merged(partial)
            if self._preferences_store is not None:
                self._preferences = self._preferences_store.save(
                    self.user_id, self._preferences
                )
            logger.info(
                "Updated notification preferences for user %s: %s",
                self.user_id,
                sorted(partial),
            )
            if self._has_snapshot:
                self.recompute()
        return self._preferences

    def by_type(self, notification_type: NotificationType | str) -> list[Notification]:
        return by_type(self.notifications, notification_type)

    def by_priority(self, priority: NotificationPriority | str) -> list[Notification]:
        return by_priority(self.notifications, priority)

    def filtered_and_sorted(
        self,
        notification_filter: NotificationFilter | str = NotificationFilter.ALL,
        sort_by: NotificationSort | str = NotificationSort.NEWEST,
    ) -> list[Notification]:
        return filtered_and_sorted(self.notifications, notification_filter, sort_by)


__all__ = ["NotificationEngine", "PreferencesStore", "coerce_preferences"]
