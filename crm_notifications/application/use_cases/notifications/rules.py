"""Rules that turn CRM snapshots into candidate notifications."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta

from crm_notifications.config import Settings
from crm_notifications.domain.entities import (
    DEAL_STAGE_PROPOSAL,
    Deal,
    Notification,
    NotificationPriority,
    NotificationReason,
    NotificationType,
    Task,
    build_notification_id,
)
from crm_notifications.utils import parse_datetime

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class DerivationOptions:
    """Tunables shared by every rule."""

    app_name: str = "CRM Pro"
    weekly_report_weekday: int = 0
    high_value_deal_threshold: float = 50000
    deal_closing_window_days: int = 7

    @classmethod
    def from_settings(cls, settings: Settings) -> "DerivationOptions":
        return cls(
            app_name=settings.app_name,
            weekly_report_weekday=settings.weekly_report_weekday,
            high_value_deal_threshold=settings.high_value_deal_threshold,
            deal_closing_window_days=settings.deal_closing_window_days,
        )


def days_until(target: datetime, now: datetime) -> int:
    """Return the number of started days between ``now`` and ``target``."""

    return math.ceil((target - now).total_seconds() / _SECONDS_PER_DAY)


def _format_number(value: float, *, grouping: bool = False) -> str:
    if float(value).is_integer():
        value = int(value)
    return f"{value:,}" if grouping else f"{value}"


def task_notifications(tasks: Iterable[Task], now: datetime) -> Iterator[Notification]:
    """Yield due-date alerts for pending tasks."""

    for task in tasks:
        if not task.is_pending:
            continue
        due_date = parse_datetime(task.due_date)
        if due_date is None:
            logger.warning(
                "Skipping task %s: unparseable due date %r", task.id, task.due_date
            )
            continue

        days = days_until(due_date, now)
        if days < 0:
            reason = NotificationReason.OVERDUE
            priority = NotificationPriority.HIGH
            title = "Task Overdue"
            message = f'Task "{task.title}" is {abs(days)} day(s) overdue'
            timestamp = now - timedelta(days=abs(days))
        elif days == 0:
            reason = NotificationReason.DUE_TODAY
            priority = NotificationPriority.MEDIUM
            title = "Task Due Today"
            message = f'Task "{task.title}" is due today'
            timestamp = now - timedelta(hours=2)
        elif days == 1:
            reason = NotificationReason.DUE_TOMORROW
            priority = NotificationPriority.LOW
            title = "Task Due Tomorrow"
            message = f'Task "{task.title}" is due tomorrow'
            timestamp = now - timedelta(hours=1)
        else:
            continue

        yield Notification(
            id=build_notification_id(NotificationType.TASK, reason, task.id),
            type=NotificationType.TASK,
            priority=priority,
            title=title,
            message=message,
            timestamp=timestamp,
            action_url=f"/contacts/{task.contact_id}?tab=tasks",
            related_id=task.id,
        )


def deal_notifications(
    deals: Iterable[Deal], now: datetime, options: DerivationOptions
) -> Iterator[Notification]:
    """Yield closing-soon and high-value alerts for open deals.

    Both rules are evaluated independently, so one deal can raise two alerts.
    """

    for deal in deals:
        close_date = parse_datetime(deal.close_date)
        if close_date is None:
            logger.warning(
                "Skipping deal %s: unparseable close date %r", deal.id, deal.close_date
            )
            continue

        days = days_until(close_date, now)
        if 0 <= days <= options.deal_closing_window_days and not deal.is_closed:
            yield Notification(
                id=build_notification_id(
                    NotificationType.DEAL, NotificationReason.CLOSING_SOON, deal.id
                ),
                type=NotificationType.DEAL,
                priority=NotificationPriority.HIGH if days <= 3 else NotificationPriority.MEDIUM,
                title="Deal Closing Soon",
                message=(
                    f'Deal "{deal.name}" closes in {days} day(s) - '
                    f"{_format_number(deal.probability)}% probability"
                ),
                timestamp=now - timedelta(hours=3),
                action_url="/deals",
                related_id=deal.id,
            )

        if deal.value >= options.high_value_deal_threshold and deal.stage == DEAL_STAGE_PROPOSAL:
            yield Notification(
                id=build_notification_id(
                    NotificationType.DEAL, NotificationReason.HIGH_VALUE, deal.id
                ),
                type=NotificationType.DEAL,
                priority=NotificationPriority.HIGH,
                title="High-Value Deal in Proposal",
                message=(
                    f'High-value deal "{deal.name}" '
                    f"(${_format_number(deal.value, grouping=True)}) is in proposal stage"
                ),
                timestamp=now - timedelta(hours=4),
                action_url="/deals",
                related_id=deal.id,
            )


def welcome_notification(now: datetime, options: DerivationOptions) -> Notification:
    return Notification(
        id=build_notification_id(NotificationType.SYSTEM, NotificationReason.WELCOME),
        type=NotificationType.SYSTEM,
        priority=NotificationPriority.LOW,
        title=f"Welcome to {options.app_name}",
        message=(
            "Your CRM system is ready. Start by adding contacts and deals to track "
            "your sales pipeline."
        ),
        timestamp=now - timedelta(days=1),
        action_url="/contacts",
    )


def weekly_report_notification(
    now: datetime, options: DerivationOptions
) -> Notification | None:
    """Return the weekly report alert when ``now`` falls on the report day."""

    if now.weekday() != options.weekly_report_weekday:
        return None
    return Notification(
        id=build_notification_id(NotificationType.REPORT, NotificationReason.WEEKLY_REPORT),
        type=NotificationType.REPORT,
        priority=NotificationPriority.LOW,
        title="Weekly Report Available",
        message=(
            "Your weekly sales report is ready. Review your performance and plan "
            "for the week ahead."
        ),
        timestamp=now - timedelta(hours=1),
        action_url="/reports",
    )


__all__ = [
    "DerivationOptions",
    "days_until",
    "deal_notifications",
    "task_notifications",
    "weekly_report_notification",
    "welcome_notification",
]
