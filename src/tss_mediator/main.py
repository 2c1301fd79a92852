# src/tss_mediator/main.py
"""Main entry point for the mediator application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from tss_mediator.api import (
    messages_router,
    sessions_router,
    start_router,
    system_router,
    websocket_router,
)
from tss_mediator.core.settings import settings
from tss_mediator.services.hub import get_hub
from tss_mediator.services.message_store import get_message_store

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Install a basic root logging configuration from settings."""
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Session relay and message routing for multi-device TSS ceremonies",
    version=settings.app_version,
    # Keep single-segment paths free for session ids
    docs_url="/system/docs",
    redoc_url="/system/redoc",
    openapi_url="/system/openapi.json",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Fixed paths first so the single-segment session routes do not shadow them
app.include_router(system_router)
app.include_router(websocket_router)
app.include_router(messages_router)
app.include_router(start_router)
app.include_router(sessions_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400 Bad Request."""
    logger.error("invalid request payload for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "invalid json payload"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    # In-memory state does not outlive the process.
    get_message_store().clear()
    get_hub().reset()
    logger.info("%s stopped", settings.app_name)


def run() -> None:
    """Start the mediator with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "tss_mediator.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.effective_log_level.lower(),
    )


if __name__ == "__main__":
    run()
