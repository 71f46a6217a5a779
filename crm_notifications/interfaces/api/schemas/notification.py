"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crm_notifications.domain.entities import (
    Deal,
    Notification,
    NotificationPriority,
    NotificationType,
    Task,
)


class CamelModel(BaseModel):
    """Base model speaking the camelCase layout used by the CRM client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskSnapshot(CamelModel):
    """Task record as delivered by the CRM data layer."""

    id: str | int
    title: str = ""
    due_date: str | None = None
    status: str = ""
    contact_id: str | int | None = None

    def to_entity(self) -> Task:
        return Task(
            id=str(self.id),
            title=self.title,
            due_date=self.due_date,
            status=self.status,
            contact_id=str(self.contact_id) if self.contact_id is not None else None,
        )


class DealSnapshot(CamelModel):
    """Deal record as delivered by the CRM data layer."""

    id: str | int
    name: str = ""
    close_date: str | None = None
    stage: str = ""
    probability: float = 0
    value: float = 0

    def to_entity(self) -> Deal:
        return Deal(
            id=str(self.id),
            name=self.name,
            close_date=self.close_date,
            stage=self.stage,
            probability=self.probability,
            value=self.value,
        )


class RecomputeRequest(CamelModel):
    """Snapshot that triggers a recomputation of the caller's feed."""

    tasks: list[TaskSnapshot] = Field(default_factory=list)
    deals: list[DealSnapshot] = Field(default_factory=list)
    now: datetime | None = Field(
        default=None, description="Evaluation instant; defaults to the server clock"
    )


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    timestamp: datetime
    read: bool
    action_url: str | None = None
    related_id: str | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id,
            type=notification.type,
            priority=notification.priority,
            title=notification.title,
            message=notification.message,
            timestamp=notification.timestamp,
            read=notification.read,
            action_url=notification.action_url,
            related_id=notification.related_id,
        )


class NotificationListRead(CamelModel):
    items: list[NotificationRead]
    unread_count: int


class UnreadCountRead(CamelModel):
    unread_count: int


__all__ = [
    "CamelModel",
    "DealSnapshot",
    "NotificationListRead",
    "NotificationRead",
    "RecomputeRequest",
    "TaskSnapshot",
    "UnreadCountRead",
]
