"""Per-user ownership of notification engines."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from crm_notifications.infrastructure.repositories import NotificationPreferencesStore
from crm_notifications.utils import Clock

from .engine import NotificationEngine
from .rules import DerivationOptions

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_CAPACITY = 1000


class NotificationEngineRegistry:
    """Hand out one :class:`NotificationEngine` per user id.

    Engines are created lazily with the user's stored preferences. Switching
    the current user therefore means asking for a different engine; an engine
    never mixes the feeds of two users. At most ``capacity`` engines are kept;
    the least recently used one is dropped first and its user starts from an
    empty feed on the next request.
    """

    def __init__(
        self,
        store: NotificationPreferencesStore | None = None,
        *,
        clock: Clock | None = None,
        options: DerivationOptions | None = None,
        capacity: int = DEFAULT_ENGINE_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._store = store
        self._clock = clock
        self._options = options
        self.capacity = capacity
        self._engines: OrderedDict[str, NotificationEngine] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, user_id: str) -> NotificationEngine:
        with self._lock:
            engine = self._engines.get(user_id)
            if engine is not None:
                self._engines.move_to_end(user_id)
                return engine

        # Loading preferences hits the database, so it runs outside the lock.
        preferences = self._store.load(user_id) if self._store is not None else None
        candidate = NotificationEngine(
            user_id,
            preferences=preferences,
            preferences_store=self._store,
            clock=self._clock,
            options=self._options,
        )

        with self._lock:
            engine = self._engines.setdefault(user_id, candidate)
            self._engines.move_to_end(user_id)
            if engine is candidate:
                logger.debug("Created notification engine for user %s", user_id)
                self._evict()
        return engine

    def discard(self, user_id: str) -> None:
        """Forget the in-memory feed of ``user_id`` (e.g. on sign-out)."""

        with self._lock:
            self._engines.pop(user_id, None)

    def _evict(self) -> None:
        while len(self._engines) > self.capacity:
            user_id, _ = self._engines.popitem(last=False)
            logger.debug("Evicted notification engine for user %s", user_id)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._engines

    def __len__(self) -> int:
        with self._lock:
            return len(self._engines)


__all__ = ["DEFAULT_ENGINE_CAPACITY", "NotificationEngineRegistry"]
