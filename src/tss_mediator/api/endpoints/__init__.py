# src/tss_mediator/api/endpoints/__init__.py
"""API endpoint modules."""

from .messages import router as messages_router
from .sessions import router as sessions_router
from .start import router as start_router
from .system import router as system_router
from .websocket import router as websocket_router

__all__ = [
    "messages_router",
    "sessions_router",
    "start_router",
    "system_router",
    "websocket_router",
]
