from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crm_notifications.application.use_cases.notifications import (
    DerivationOptions,
    NotificationEngineRegistry,
)
from crm_notifications.config import get_settings
from crm_notifications.infrastructure.database import SessionLocal, engine, initialize_database
from crm_notifications.infrastructure.repositories import NotificationPreferencesStore
from crm_notifications.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the preferences tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def build_registry() -> NotificationEngineRegistry:
    """Return a registry backed by the configured preferences database."""

    settings = get_settings()
    return NotificationEngineRegistry(
        NotificationPreferencesStore(SessionLocal),
        options=DerivationOptions.from_settings(settings),
        capacity=settings.notification_engine_capacity,
    )


def create_app(registry: NotificationEngineRegistry | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title=f"{settings.app_name} notifications", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.notification_registry = registry if registry is not None else build_registry()

    register_routes(app)
    return app
