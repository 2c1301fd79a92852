"""Health and transparency endpoints for the mediator."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from tss_mediator.api.dependencies import HubDep
from tss_mediator.core.settings import settings
from tss_mediator.services.message_store import MessageStore, get_message_store

router = APIRouter(tags=["system"])

StoreDep = Annotated[MessageStore, Depends(get_message_store)]


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Session relay for multi-device TSS ceremonies",
        "websocket": settings.websocket_path,
        "docs": "/system/docs",
    }


@router.get("/system/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration."""
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "listener": {
            "host": settings.host,
            "port": settings.port,
            "websocket_path": settings.websocket_path,
        },
    }


@router.get("/system/stats")
async def get_stats(store: StoreDep, hub: HubDep) -> dict[str, int]:
    """Relay occupancy counters.

    Returns:
        Dictionary with the number of stored keys, connected device
        identities and sessions with a recorded owner
    """
    return {
        "stored_keys": len(store),
        "connected_clients": hub.connected_count,
        "owned_sessions": hub.session_count,
    }
