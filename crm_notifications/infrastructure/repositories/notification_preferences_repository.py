"""Persistence helpers for notification preferences."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from crm_notifications.domain.entities import NotificationPreferences
from crm_notifications.infrastructure.models import NotificationPreferencesModel

logger = logging.getLogger(__name__)


class NotificationPreferencesRepository:
    """Read and write :class:`NotificationPreferences` documents keyed by user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> NotificationPreferences | None:
        model = self.session.get(NotificationPreferencesModel, user_id)
        if model is None:
            return None
        return NotificationPreferences.from_mapping(model.preferences)

    def save(self, user_id: str, preferences: NotificationPreferences) -> NotificationPreferences:
        model = self.session.get(NotificationPreferencesModel, user_id)
        if model is None:
            model = NotificationPreferencesModel(user_id=user_id)
        model.preferences = preferences.to_dict()
        model.updated_at = datetime.now(timezone.utc)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return NotificationPreferences.from_mapping(model.preferences)

    def delete(self, user_id: str) -> None:
        model = self.session.get(NotificationPreferencesModel, user_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()


class NotificationPreferencesStore:
    """Session-independent store used by long-lived notification engines.

    Each call opens a short-lived session from ``session_factory`` so an engine
    can outlive the request that created it.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(self, user_id: str) -> NotificationPreferences:
        """Return the stored preferences for ``user_id`` or the defaults."""

        with self._session_factory() as session:
            stored = NotificationPreferencesRepository(session).get(user_id)
        if stored is None:
            logger.debug("No stored notification preferences for user %s", user_id)
            return NotificationPreferences()
        return stored

    def save(self, user_id: str, preferences: NotificationPreferences) -> NotificationPreferences:
        with self._session_factory() as session:
            return NotificationPreferencesRepository(session).save(user_id, preferences)


__all__ = ["NotificationPreferencesRepository", "NotificationPreferencesStore"]
