# src/tss_mediator/services/__init__.py
"""Relay services: storage, session registry, inbox and realtime hub."""

from .hub import ConnectionHub
from .mailbox import Mailbox
from .message_store import MessageStore
from .session_registry import SessionRegistry

__all__ = [
    "ConnectionHub",
    "Mailbox",
    "MessageStore",
    "SessionRegistry",
]
