"""Endpoints exposing the derived notification feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from crm_notifications.application.use_cases.notifications import (
    NotificationEngine,
    NotificationFilter,
    NotificationSort,
)
from crm_notifications.domain.entities import Notification
from crm_notifications.interfaces.api.dependencies import get_notification_engine
from crm_notifications.interfaces.api.schemas import (
    NotificationListRead,
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    NotificationRead,
    RecomputeRequest,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _feed_to_schema(
    notifications: list[Notification], engine: NotificationEngine
) -> NotificationListRead:
    return NotificationListRead(
        items=[NotificationRead.from_entity(notification) for notification in notifications],
        unread_count=engine.unread_count,
    )


@router.get("/", response_model=NotificationListRead)
def list_notifications(
    notification_filter: NotificationFilter = Query(NotificationFilter.ALL, alias="filter"),
    sort_by: NotificationSort = Query(NotificationSort.NEWEST, alias="sortBy"),
    engine: NotificationEngine = Depends(get_notification_engine),
) -> NotificationListRead:
    """Return the current feed filtered and ordered for display."""

    return _feed_to_schema(engine.filtered_and_sorted(notification_filter, sort_by), engine)


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    engine: NotificationEngine = Depends(get_notification_engine),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=engine.unread_count)


@router.post("/recompute", response_model=NotificationListRead)
def recompute_notifications(
    payload: RecomputeRequest,
    engine: NotificationEngine = Depends(get_notification_engine),
) -> NotificationListRead:
    """Rebuild the feed from the latest tasks and deals snapshot."""

    notifications = engine.recompute(
        [task.to_entity() for task in payload.tasks],
        [deal.to_entity() for deal in payload.deals],
        now=payload.now,
    )
    return _feed_to_schema(notifications, engine)


@router.post("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_notifications_as_read(
    engine: NotificationEngine = Depends(get_notification_engine),
) -> Response:
    engine.mark_all_as_read()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/preferences", response_model=NotificationPreferencesRead)
def get_preferences(
    engine: NotificationEngine = Depends(get_notification_engine),
) -> NotificationPreferencesRead:
    return NotificationPreferencesRead.from_entity(engine.preferences)


@router.patch("/preferences", response_model=NotificationPreferencesRead)
def update_preferences(
    payload: NotificationPreferencesUpdate,
    engine: NotificationEngine = Depends(get_notification_engine),
) -> NotificationPreferencesRead:
    """Merge the provided fields into the stored preferences."""

    preferences = engine.update_preferences(payload.to_partial())
    return NotificationPreferencesRead.from_entity(preferences)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_notification_as_read(
    notification_id: str,
    engine: NotificationEngine = Depends(get_notification_engine),
) -> Response:
    """Mark a notification as read; unknown ids are ignored."""

    engine.mark_as_read(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    engine: NotificationEngine = Depends(get_notification_engine),
) -> Response:
    engine.delete(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(
    engine: NotificationEngine = Depends(get_notification_engine),
) -> Response:
    engine.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
