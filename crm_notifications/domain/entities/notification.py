"""Domain entity representing a derived CRM notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Rule family a notification originates from."""

    TASK = "task"
    DEAL = "deal"
    REPORT = "report"
    SYSTEM = "system"


class NotificationPriority(str, Enum):
    """Urgency attached to a notification."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK: dict[NotificationPriority, int] = {
    NotificationPriority.HIGH: 3,
    NotificationPriority.MEDIUM: 2,
    NotificationPriority.LOW: 1,
}


class NotificationReason(str, Enum):
    """Condition that triggered a notification; part of its identity."""

    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    DUE_TOMORROW = "due-tomorrow"
    CLOSING_SOON = "closing-soon"
    HIGH_VALUE = "high-value"
    WELCOME = "welcome"
    WEEKLY_REPORT = "weekly-report"


def build_notification_id(
    notification_type: NotificationType,
    reason: NotificationReason,
    source_id: str | None = None,
) -> str:
    """Return the stable identifier for ``(type, reason, source_id)``."""

    if notification_type is NotificationType.TASK:
        base = f"task-{reason.value}"
    elif notification_type is NotificationType.DEAL:
        if reason is NotificationReason.CLOSING_SOON:
            base = "deal-closing"
        else:
            base = f"deal-{reason.value}"
    elif notification_type is NotificationType.SYSTEM:
        base = f"system-{reason.value}"
    elif notification_type is NotificationType.REPORT:
        base = reason.value
    else:  # pragma: no cover - exhaustive over NotificationType
        raise ValueError(f"Unsupported notification type: {notification_type!r}")

    if source_id is None:
        return base
    return f"{base}-{source_id}"


@dataclass
class Notification:
    """Alert derived from the current CRM snapshot."""

    id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    action_url: str | None = None
    related_id: str | None = None


__all__ = [
    "Notification",
    "NotificationPriority",
    "NotificationReason",
    "NotificationType",
    "PRIORITY_RANK",
    "build_notification_id",
]
