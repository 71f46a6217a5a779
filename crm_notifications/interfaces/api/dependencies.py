"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, Request, status

from crm_notifications.application.use_cases.notifications import (
    NotificationEngine,
    NotificationEngineRegistry,
)


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Return the user id forwarded by the identity layer.

    Authentication happens upstream; this service only needs to know whose
    feed a request targets.
    """

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing user identity",
        )
    return user_id


def get_engine_registry(request: Request) -> NotificationEngineRegistry:
    """Return the registry attached to the running application."""

    return request.app.state.notification_registry


def get_notification_engine(
    user_id: str = Depends(get_current_user_id),
    registry: NotificationEngineRegistry = Depends(get_engine_registry),
) -> NotificationEngine:
    """Return the notification engine owned by the current user."""

    return registry.get(user_id)
