# src/tss_mediator/schemas/__init__.py
"""
Pydantic schemas for relay data and WebSocket envelopes.

These schemas define the structure of API data for serialization and validation.
"""

from .envelope import (
    Envelope,
    EnvelopeHeader,
    HelloPayload,
    SessionPayload,
    StartTSSPayload,
    TSSRoutingPayload,
)
from .message import RelayedMessage
from .session import Session, StartMarker

__all__ = [
    "Envelope", "EnvelopeHeader",
    "HelloPayload", "SessionPayload", "StartTSSPayload", "TSSRoutingPayload",
    "RelayedMessage",
    "Session", "StartMarker",
]
