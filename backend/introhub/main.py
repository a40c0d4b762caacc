"""IntroHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map IntroHubError → {"error", "code"} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and notification worker initialized on startup via lifespan,
      torn down in reverse order on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Notification queue stopped before the database is disposed: the worker
      drains pending emails while the process is still healthy
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from introhub.api.error_handlers import register_error_handlers
from introhub.api.routes import auth, contacts, health, profile, requests, users
from introhub.config import get_settings
from introhub.infrastructure.database import init_db
from introhub.infrastructure.mailer import ResendMailer
from introhub.infrastructure.notifications import init_notifications
from introhub.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    mailer = ResendMailer(
        api_key=settings.resend_api_key,
        sender=settings.email_from,
        api_url=settings.resend_api_url,
        timeout_seconds=settings.email_timeout_seconds,
    )
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set, notification emails will be skipped")
    notifications = init_notifications(
        mailer, maxsize=settings.notification_queue_size,
    )
    await notifications.start()
    logger.info("IntroHub API started")
    yield
    logger.info("IntroHub API shutting down")
    await notifications.stop()
    await db.dispose()


app = FastAPI(
    title="IntroHub API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, registered explicitly
app.include_router(health.root_router)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(contacts.router)
app.include_router(users.router)
app.include_router(requests.router)

register_error_handlers(app)
