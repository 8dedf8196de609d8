"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See question_bank.core.lifespan and
question_bank.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from question_bank.api.proxy import proxy_router
from question_bank.api.v1 import api_router
from question_bank.core.config import get_settings
from question_bank.core.exception_handlers import register_exception_handlers
from question_bank.core.lifespan import create_lifespan
from question_bank.core.limiter import limiter
from question_bank.middleware import (
    RequestIDMiddleware,
    ScopedCORSMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)

API_V1_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → request ID → security → CORS (/api/v1 only).
    app.add_middleware(
        ScopedCORSMiddleware,
        path_prefix=API_V1_PREFIX,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(proxy_router, prefix="/api")
    app.include_router(api_router, prefix=API_V1_PREFIX)

    return app


app = create_app()
