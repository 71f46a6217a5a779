"""Domain entity representing a CRM task snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

TASK_STATUS_PENDING = "pending"
TASK_STATUS_DONE = "done"


@dataclass(frozen=True)
class Task:
    """Read-only view of a task owned by the CRM data layer."""

    id: str
    title: str
    due_date: datetime | date | str | None
    status: str
    contact_id: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == TASK_STATUS_PENDING

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Task":
        """Build a task from a camelCase snapshot record."""

        contact_id = data.get("contactId", data.get("contact_id"))
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title") or ""),
            due_date=data.get("dueDate", data.get("due_date")),
            status=str(data.get("status") or ""),
            contact_id=str(contact_id) if contact_id is not None else None,
        )


__all__ = ["Task", "TASK_STATUS_PENDING", "TASK_STATUS_DONE"]
