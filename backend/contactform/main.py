"""Contact Form API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ContactFormError → structured JSON responses
    - CORS allows only http(s)://<allowed_domain>, configured from settings
    - contacts table created (if absent) on startup via lifespan context manager

Design Decisions:
    - create_app() factory: each app owns its AppContext, so tests build
      isolated apps against their own database
    - Middleware order: CORS is added last so it wraps the rate limiter and
      answers preflight requests before they spend a token
    - Module attribute `app` is built lazily: importing create_app (as the
      CLI does) never builds a second engine and context
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contactform.api.error_handlers import register_error_handlers
from contactform.api.routes import contact, health
from contactform.config import Settings, get_settings
from contactform.context import build_context
from contactform.infrastructure.observability import setup_logging
from contactform.infrastructure.rate_limit import RateLimitMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    context = app.state.context
    settings = context.settings
    setup_logging(settings.log_level, settings.log_format)
    await context.store.init_schema()
    logger.info(
        f"Contact form API started (allowed domain: {settings.allowed_domain})",
    )
    yield
    await context.store.dispose()
    logger.info("Contact form API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own context, routes, filters and error handlers."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Contact Form API", version="1.0.0", lifespan=lifespan,
    )
    app.state.context = build_context(settings)

    register_error_handlers(app)

    # Routes - explicit registration
    app.include_router(health.router)
    app.include_router(contact.router)

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            per_minute=settings.rate_limit_per_minute,
            burst=settings.rate_limit_burst,
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Origin", "Accept"],
        allow_credentials=True,
        max_age=settings.cors_max_age,
    )

    return app


_app: FastAPI | None = None


def __getattr__(name: str):
    """Build the default `app` (for `uvicorn contactform.main:app`) on first access."""
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
