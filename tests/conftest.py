"""Shared fixtures for the notification test-suite."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``crm_notifications`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"

from crm_notifications.domain.entities import Deal, Task  # noqa: E402

# Wednesday, mid-morning.
FIXED_NOW = datetime(2024, 5, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    return FIXED_NOW


def make_task(
    task_id: str = "t1",
    *,
    due_in: timedelta | None = timedelta(days=-1),
    status: str = "pending",
    title: str = "Call back",
    contact_id: str = "c1",
    now: datetime = FIXED_NOW,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        due_date=now + due_in if due_in is not None else None,
        status=status,
        contact_id=contact_id,
    )


def make_deal(
    deal_id: str = "d1",
    *,
    close_in: timedelta | None = timedelta(days=2),
    stage: str = "proposal",
    value: float = 60000,
    probability: float = 70,
    name: str = "Acme renewal",
    now: datetime = FIXED_NOW,
) -> Deal:
    return Deal(
        id=deal_id,
        name=name,
        close_date=now + close_in if close_in is not None else None,
        stage=stage,
        probability=probability,
        value=value,
    )
