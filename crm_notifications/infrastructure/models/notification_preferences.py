"""SQLAlchemy model for persisted notification preferences."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String

from crm_notifications.infrastructure.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationPreferencesModel(Base):
    """One preferences document per user."""

    __tablename__ = "notification_preferences"

    user_id = Column(String(128), primary_key=True)
    preferences = Column(JSON, nullable=False, default=dict)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)


__all__ = ["NotificationPreferencesModel"]
