"""FastAPI application factory.

create_app() returns a configured FastAPI instance: lifespan, middleware,
CORS, exception handlers, and routers are all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shelfmark import __version__
from shelfmark.api import api_router
from shelfmark.config import settings
from shelfmark.errors import AuthError, ShelfmarkError, ValidationError
from shelfmark.logging_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "shelfmark.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("shelfmark.shutdown")

    from shelfmark.db.engine import engine
    await engine.dispose()


async def shelfmark_error_handler(request: Request, exc: ShelfmarkError):
    """Render a domain error as {"detail", "kind"} with its mapped status."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    if exc.status_code >= 500:
        logger.error("request.failed", kind=exc.kind, detail=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are bad requests, same as service-level validation."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"] if p != "body")
        messages.append(f"{field}: {err['msg']}" if field else err["msg"])
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": "; ".join(messages), "kind": ValidationError.kind},
    )


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title="Shelfmark",
        description="Personal bookmark manager — signup, signin, and owner-scoped bookmark CRUD",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from shelfmark.middleware.request_id import RequestIdMiddleware
    from shelfmark.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(ShelfmarkError, shelfmark_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: shelfmark.main:app)
app = create_app()
