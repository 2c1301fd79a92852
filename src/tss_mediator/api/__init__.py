# src/tss_mediator/api/__init__.py
"""HTTP and WebSocket API for the mediator."""

from .endpoints import (
    messages_router,
    sessions_router,
    start_router,
    system_router,
    websocket_router,
)

__all__ = [
    "messages_router",
    "sessions_router",
    "start_router",
    "system_router",
    "websocket_router",
]
