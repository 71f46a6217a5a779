"""Domain entities exposed by the application."""

from .deal import (
    CLOSED_DEAL_STAGES,
    DEAL_STAGE_CLOSED_LOST,
    DEAL_STAGE_CLOSED_WON,
    DEAL_STAGE_LEAD,
    DEAL_STAGE_NEGOTIATION,
    DEAL_STAGE_PROPOSAL,
    DEAL_STAGE_QUALIFIED,
    Deal,
)
from .notification import (
    PRIORITY_RANK,
    Notification,
    NotificationPriority,
    NotificationReason,
    NotificationType,
    build_notification_id,
)
from .preferences import (
    ChannelPreference,
    DigestFrequency,
    NotificationPreferences,
    parse_clock,
)
from .task import TASK_STATUS_DONE, TASK_STATUS_PENDING, Task

__all__ = [
    "CLOSED_DEAL_STAGES",
    "DEAL_STAGE_CLOSED_LOST",
    "DEAL_STAGE_CLOSED_WON",
    "DEAL_STAGE_LEAD",
    "DEAL_STAGE_NEGOTIATION",
    "DEAL_STAGE_PROPOSAL",
    "DEAL_STAGE_QUALIFIED",
    "Deal",
    "PRIORITY_RANK",
    "Notification",
    "NotificationPriority",
    "NotificationReason",
    "NotificationType",
    "build_notification_id",
    "ChannelPreference",
    "DigestFrequency",
    "NotificationPreferences",
    "parse_clock",
    "TASK_STATUS_DONE",
    "TASK_STATUS_PENDING",
    "Task",
]
