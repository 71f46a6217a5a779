"""Tests for notification preference parsing and serialization."""

from __future__ import annotations

import pytest

from crm_notifications.domain.entities import (
    ChannelPreference,
    DigestFrequency,
    NotificationPreferences,
    NotificationType,
    parse_clock,
)


def test_defaults_enable_every_category_with_quiet_hours_off():
    preferences = NotificationPreferences()

    assert preferences.tasks and preferences.deals and preferences.reports
    assert preferences.quiet_hours is False
    assert preferences.allow_critical is True
    assert preferences.digest is DigestFrequency.NONE
    assert preferences.channel_preferences["reports"] == ChannelPreference(email=True)


def test_to_dict_uses_persisted_layout():
    payload = NotificationPreferences(quiet_hours=True).to_dict()

    assert payload == {
        "email": True,
        "push": True,
        "sms": False,
        "deals": True,
        "tasks": True,
        "reports": True,
        "quietHours": True,
        "quietHoursStart": "22:00",
        "quietHoursEnd": "07:00",
        "allowCritical": True,
        "digest": "none",
        "channelPreferences": {
            "deals": {"email": True, "push": True, "sms": False},
            "tasks": {"email": True, "push": True, "sms": False},
            "reports": {"email": True, "push": False, "sms": False},
        },
    }


def test_from_mapping_round_trips_stored_document():
    original = NotificationPreferences(
        reports=False,
        quiet_hours=True,
        quiet_hours_start="23:15",
        digest=DigestFrequency.WEEKLY,
        channel_preferences={"deals": ChannelPreference(sms=True)},
    )

    restored = NotificationPreferences.from_mapping(original.to_dict())

    assert restored.reports is False
    assert restored.quiet_hours_start == "23:15"
    assert restored.digest is DigestFrequency.WEEKLY
    assert restored.channel_preferences["deals"] == ChannelPreference(sms=True)
    # Categories missing from the stored document keep their defaults.
    assert restored.channel_preferences["tasks"] == ChannelPreference(email=True, push=True)


@pytest.mark.parametrize("document", [None, "garbage", 42, ["tasks"]])
def test_non_mapping_documents_yield_defaults(document):
    assert NotificationPreferences.from_mapping(document) == NotificationPreferences()


def test_invalid_fields_fall_back_individually(caplog):
    with caplog.at_level("WARNING"):
        preferences = NotificationPreferences.from_mapping(
            {
                "tasks": "yes",
                "deals": False,
                "quietHoursStart": "25:00",
                "quietHoursEnd": "06:30",
                "digest": "hourly",
                "channelPreferences": "all",
            }
        )

    assert preferences.tasks is True
    assert preferences.deals is False
    assert preferences.quiet_hours_start == "22:00"
    assert preferences.quiet_hours_end == "06:30"
    assert preferences.digest is DigestFrequency.NONE
    assert preferences.channel_preferences == NotificationPreferences().channel_preferences
    assert "quietHoursStart" in caplog.text


def test_merged_is_shallow_and_keeps_other_fields():
    preferences = NotificationPreferences(sms=True)

    merged = preferences.merged({"reports": False, "allowCritical": False})

    assert merged.reports is False
    assert merged.allow_critical is False
    assert merged.sms is True
    assert preferences.reports is True


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("00:00", 0),
        ("07:00", 420),
        ("7:05", 425),
        ("23:59", 1439),
        ("24:00", None),
        ("12:60", None),
        ("noon", None),
        (None, None),
    ],
)
def test_parse_clock(value, expected):
    assert parse_clock(value) == expected


def test_quiet_hours_disabled_is_never_quiet():
    preferences = NotificationPreferences(quiet_hours=False)

    assert preferences.is_quiet_time(23 * 60) is False


@pytest.mark.parametrize(
    ("notification_type", "expected"),
    [
        (NotificationType.TASK, False),
        (NotificationType.DEAL, True),
        (NotificationType.REPORT, False),
        (NotificationType.SYSTEM, True),
    ],
)
def test_is_enabled(notification_type, expected):
    preferences = NotificationPreferences(tasks=False, reports=False)

    assert preferences.is_enabled(notification_type) is expected


def test_merged_keeps_current_value_when_update_is_invalid(caplog):
    preferences = NotificationPreferences(tasks=False, quiet_hours_start="21:00")

    with caplog.at_level("WARNING"):
        merged = preferences.merged({"tasks": "yes", "quietHoursStart": "99:00", "sms": True})

    assert merged.tasks is False
    assert merged.quiet_hours_start == "21:00"
    assert merged.sms is True
    assert "tasks" in caplog.text
