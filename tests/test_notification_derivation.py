"""Tests for the full derivation pipeline."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from conftest import FIXED_NOW, make_deal, make_task
from crm_notifications.application.use_cases.notifications import (
    DerivationOptions,
    derive_notifications,
    merge_read_state,
    should_show,
)
from crm_notifications.domain.entities import NotificationPreferences, NotificationPriority

AT_23 = datetime(2024, 5, 15, 23, 0, tzinfo=timezone.utc)


def _ids(notifications):
    return [notification.id for notification in notifications]


def test_derivation_is_deterministic(now):
    tasks = [make_task("t1"), make_task("t2", due_in=timedelta(hours=3))]
    deals = [make_deal("d1")]
    preferences = NotificationPreferences()

    first = derive_notifications(tasks, deals, preferences, now=now)
    second = derive_notifications(tasks, deals, preferences, now=now)

    assert first == second
    assert all(notification.read is False for notification in first)


def test_overdue_boundary_for_pending_and_done_tasks(now):
    preferences = NotificationPreferences()

    pending = derive_notifications([make_task("42")], [], preferences, now=now)
    done = derive_notifications([make_task("42", status="done")], [], preferences, now=now)

    task_alerts = [n for n in pending if n.id.startswith("task-")]
    assert len(task_alerts) == 1
    [alert] = task_alerts
    assert alert.id == "task-overdue-42"
    assert alert.priority is NotificationPriority.HIGH
    assert "1 day(s) overdue" in alert.message
    assert _ids(done) == ["system-welcome"]


def test_deal_can_raise_two_notifications(now):
    notifications = derive_notifications(
        [], [make_deal("7", close_in=timedelta(days=2))], NotificationPreferences(), now=now
    )
    by_id = {notification.id: notification for notification in notifications}

    assert by_id["deal-closing-7"].priority is NotificationPriority.HIGH
    assert by_id["deal-high-value-7"].priority is NotificationPriority.HIGH
    assert by_id["deal-closing-7"].related_id == by_id["deal-high-value-7"].related_id == "7"


def test_disabled_task_category_only_removes_task_alerts(now):
    tasks = [make_task("t1")]
    deals = [make_deal("d1")]

    enabled = derive_notifications(tasks, deals, NotificationPreferences(), now=now)
    disabled = derive_notifications(tasks, deals, NotificationPreferences(tasks=False), now=now)

    assert any(id_.startswith("task-") for id_ in _ids(enabled))
    assert not any(id_.startswith("task-") for id_ in _ids(disabled))
    assert {"deal-closing-d1", "deal-high-value-d1", "system-welcome"} <= set(_ids(disabled))


def test_disabled_deal_category(now):
    notifications = derive_notifications(
        [make_task("t1")], [make_deal("d1")], NotificationPreferences(deals=False), now=now
    )

    assert _ids(notifications) == ["task-overdue-t1", "system-welcome"]


def test_system_notification_is_always_present(now):
    preferences = NotificationPreferences(tasks=False, deals=False, reports=False)

    assert _ids(derive_notifications([], [], preferences, now=now)) == ["system-welcome"]


def test_weekly_report_depends_on_preference_and_weekday():
    monday = FIXED_NOW - timedelta(days=2)

    with_reports = derive_notifications([], [], NotificationPreferences(reports=True), now=monday)
    without_reports = derive_notifications([], [], NotificationPreferences(reports=False), now=monday)
    other_day = derive_notifications([], [], NotificationPreferences(reports=True), now=FIXED_NOW)

    assert "weekly-report" in _ids(with_reports)
    assert "weekly-report" not in _ids(without_reports)
    assert "weekly-report" not in _ids(other_day)


def test_weekly_report_weekday_is_configurable(now):
    options = DerivationOptions(weekly_report_weekday=now.weekday())

    notifications = derive_notifications([], [], NotificationPreferences(), now=now, options=options)

    assert "weekly-report" in _ids(notifications)


def test_results_are_sorted_newest_first(now):
    tasks = [
        make_task("overdue", due_in=timedelta(days=-2)),
        make_task("today", due_in=timedelta(hours=-1)),
        make_task("tomorrow", due_in=timedelta(hours=20)),
    ]
    deals = [make_deal("d1")]

    notifications = derive_notifications(tasks, deals, NotificationPreferences(), now=now)

    assert _ids(notifications) == [
        "task-due-tomorrow-tomorrow",
        "task-due-today-today",
        "deal-closing-d1",
        "deal-high-value-d1",
        "system-welcome",
        "task-overdue-overdue",
    ]
    timestamps = [notification.timestamp for notification in notifications]
    assert timestamps == sorted(timestamps, reverse=True)


def test_duplicate_source_records_yield_one_notification(now):
    notifications = derive_notifications(
        [make_task("t1"), make_task("t1")], [], NotificationPreferences(), now=now
    )

    assert _ids(notifications).count("task-overdue-t1") == 1


def test_quiet_hours_wrapping_midnight_suppress_non_critical():
    tasks = [make_task("today", due_in=timedelta(minutes=-30), now=AT_23)]
    deals = [make_deal("d1", close_in=timedelta(days=2), now=AT_23)]
    preferences = NotificationPreferences(
        quiet_hours=True,
        quiet_hours_start="22:00",
        quiet_hours_end="07:00",
        allow_critical=False,
    )

    notifications = derive_notifications(tasks, deals, preferences, now=AT_23)

    assert notifications == []


def test_quiet_hours_let_critical_through_when_allowed():
    tasks = [make_task("today", due_in=timedelta(minutes=-30), now=AT_23)]
    deals = [make_deal("d1", close_in=timedelta(days=2), now=AT_23)]
    preferences = NotificationPreferences(
        quiet_hours=True,
        quiet_hours_start="22:00",
        quiet_hours_end="07:00",
        allow_critical=True,
    )

    notifications = derive_notifications(tasks, deals, preferences, now=AT_23)

    assert _ids(notifications) == ["deal-closing-d1", "deal-high-value-d1"]
    assert all(n.priority is NotificationPriority.HIGH for n in notifications)


def test_quiet_hours_outside_window_keep_everything(now):
    preferences = NotificationPreferences(
        quiet_hours=True, quiet_hours_start="22:00", quiet_hours_end="07:00", allow_critical=False
    )

    assert _ids(derive_notifications([], [], preferences, now=now)) == ["system-welcome"]


@pytest.mark.parametrize(
    ("start", "end", "hour", "minute", "quiet"),
    [
        ("22:00", "07:00", 22, 0, True),
        ("22:00", "07:00", 7, 0, True),
        ("22:00", "07:00", 7, 1, False),
        ("22:00", "07:00", 21, 59, False),
        ("09:00", "17:00", 9, 0, True),
        ("09:00", "17:00", 17, 0, True),
        ("09:00", "17:00", 17, 1, False),
        ("09:00", "17:00", 8, 59, False),
    ],
)
def test_quiet_window_membership(start, end, hour, minute, quiet):
    preferences = NotificationPreferences(
        quiet_hours=True, quiet_hours_start=start, quiet_hours_end=end, allow_critical=False
    )
    instant = datetime(2024, 5, 15, hour, minute, tzinfo=timezone.utc)

    assert should_show(NotificationPriority.LOW, preferences, instant) is not quiet


def test_merge_read_state_carries_flags_by_id(now):
    fresh = derive_notifications([make_task("t1")], [], NotificationPreferences(), now=now)
    previous = [
        replace(notification, read=True)
        for notification in fresh
        if notification.id == "task-overdue-t1"
    ]

    merged = merge_read_state(fresh, previous)

    assert {n.id: n.read for n in merged} == {"task-overdue-t1": True, "system-welcome": False}
    assert all(n.read is False for n in fresh)


def test_quiet_hours_use_the_callers_local_clock():
    # 23:00 in UTC-5 is 04:00 UTC, outside the window on the server clock.
    local_23 = datetime(2024, 5, 15, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    preferences = NotificationPreferences(
        quiet_hours=True,
        quiet_hours_start="22:00",
        quiet_hours_end="23:30",
        allow_critical=False,
    )

    assert derive_notifications([], [], preferences, now=local_23) == []


def test_weekly_report_uses_the_callers_local_weekday():
    # Monday 01:00 in UTC+9 is still Sunday in UTC.
    monday_in_tokyo = datetime(2024, 5, 20, 1, 0, tzinfo=timezone(timedelta(hours=9)))

    notifications = derive_notifications([], [], NotificationPreferences(), now=monday_in_tokyo)

    assert "weekly-report" in _ids(notifications)


def test_naive_now_is_read_in_the_app_timezone():
    naive_23 = datetime(2024, 5, 15, 23, 0)
    preferences = NotificationPreferences(quiet_hours=True, allow_critical=False)

    assert derive_notifications([], [], preferences, now=naive_23) == []
