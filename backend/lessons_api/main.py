"""Digital Life Lessons API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LessonsApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, identity verifier and checkout gateway initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Provider clients stored on app.state and resolved through dependencies
      (ADR: no module-global collaborator handles)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lessons_api.api.error_handlers import register_error_handlers
from lessons_api.api.routes import accounts, admin, billing, health, lessons, reports
from lessons_api.config import get_settings
from lessons_api.infrastructure import database
from lessons_api.infrastructure.identity_provider import FirebaseIdentityVerifier
from lessons_api.infrastructure.observability import setup_logging
from lessons_api.infrastructure.payment_provider import StripeCheckoutGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.identity_verifier = FirebaseIdentityVerifier(
        settings.firebase_service_account,
        check_revoked=settings.firebase_check_revoked,
    )
    app.state.checkout_gateway = StripeCheckoutGateway(settings.stripe_secret)
    logger.info("Lessons API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Lessons API shutting down")


app = FastAPI(
    title="Digital Life Lessons API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(lessons.router)
app.include_router(reports.router)
app.include_router(billing.router)
app.include_router(admin.router)

register_error_handlers(app)
