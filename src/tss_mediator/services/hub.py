"""Realtime control channel hub.

The hub keeps one live connection per device identifier and relays
control envelopes between them:

- Join/drop traffic is routed through the session owner (star topology).
- StartTSS is broadcast to every connected committee member.
- TSSRouting is unicast to a single connected recipient.

Forwarded frames are always the exact text the sender produced; the hub
decodes only the payload fields needed for addressing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from threading import Lock
from typing import Protocol, TypeVar

from fastapi import WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from tss_mediator.schemas.envelope import (
    Envelope,
    EnvelopeHeader,
    HelloPayload,
    SessionPayload,
    StartTSSPayload,
    TSSRoutingPayload,
)

# Configure logger for this module
logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class Connection(Protocol):
    """Anything the hub can push text frames to."""

    async def send_text(self, data: str) -> None: ...


Handler = Callable[[Connection, str, str], Awaitable[None]]


class ConnectionHub:
    """Identity-to-connection map plus session ownership for control traffic."""

    def __init__(self) -> None:
        self._clients: dict[str, Connection] = {}
        self._session_owners: dict[str, str] = {}
        self._lock = Lock()
        self._handlers: dict[EnvelopeHeader, Handler] = {
            EnvelopeHeader.HELLO: self._handle_hello,
            EnvelopeHeader.START_SESSION: self._handle_start_session,
            EnvelopeHeader.JOIN_SESSION: self._handle_join_or_drop,
            EnvelopeHeader.DROP_SESSION: self._handle_join_or_drop,
            EnvelopeHeader.END_SESSION: self._handle_end_session,
            EnvelopeHeader.START_TSS: self._handle_start_tss,
            EnvelopeHeader.TSS_ROUTING: self._handle_tss_routing,
        }

    # --- Connection lifecycle -------------------------------------------------------
    async def dispatch(self, connection: Connection, content: str) -> None:
        """Decode one text frame and run the handler for its envelope kind.

        Undecodable frames are logged and dropped without a reply.
        """
        try:
            envelope = Envelope.model_validate_json(content)
        except ValidationError as exc:
            logger.error("fail to process message, error: %s", exc)
            return
        handler = self._handlers[envelope.header]
        await handler(connection, envelope.body, content)

    def disconnect(self, connection: Connection) -> list[str]:
        """Forget every identifier bound to ``connection``.

        Returns:
            The identifiers that were removed.
        """
        with self._lock:
            stale = [key for key, bound in self._clients.items() if bound is connection]
            for key in stale:
                del self._clients[key]
        if stale:
            logger.info("clients disconnected: %s", stale)
        return stale

    def reset(self) -> None:
        with self._lock:
            self._clients.clear()
            self._session_owners.clear()

    # --- Introspection --------------------------------------------------------------
    def connection_for(self, client_key: str) -> Connection | None:
        with self._lock:
            return self._clients.get(client_key)

    def owner_of(self, session_id: str) -> str | None:
        with self._lock:
            return self._session_owners.get(session_id)

    @property
    def connected_count(self) -> int:
        with self._lock:
            return len(self._clients)

    @property
    def session_count(self) -> int:
        with self._lock:
            return len(self._session_owners)

    # --- Envelope handlers ----------------------------------------------------------
    async def _handle_hello(self, connection: Connection, payload: str, content: str) -> None:
        hello = self._decode(HelloPayload, payload, EnvelopeHeader.HELLO.value)
        if hello is None:
            return
        with self._lock:
            self._clients[hello.client_key] = connection
        logger.info("successfully process hello message from %s", hello.client_key)

    async def _handle_start_session(self, connection: Connection, payload: str, content: str) -> None:
        message = self._decode(SessionPayload, payload, EnvelopeHeader.START_SESSION.value)
        if message is None:
            return
        if not message.client_key:
            logger.error("start session %s carries no owner", message.session_id)
            return
        with self._lock:
            self._session_owners[message.session_id] = message.client_key
        logger.info("session %s started by %s", message.session_id, message.client_key)

    async def _handle_join_or_drop(self, connection: Connection, payload: str, content: str) -> None:
        message = self._decode(SessionPayload, payload, "JoinSession/DropSession")
        if message is None:
            return
        with self._lock:
            owner = self._session_owners.get(message.session_id)
            owner_connection = self._clients.get(owner) if owner is not None else None
        if owner is None:
            logger.debug("session:%s is not started", message.session_id)
            return
        if owner_connection is None:
            logger.debug("session owner: %s is not online", owner)
            return
        await self._send(owner, owner_connection, content)

    async def _handle_end_session(self, connection: Connection, payload: str, content: str) -> None:
        message = self._decode(SessionPayload, payload, EnvelopeHeader.END_SESSION.value)
        if message is None:
            return
        with self._lock:
            self._session_owners.pop(message.session_id, None)
        logger.info("session %s ended", message.session_id)

    async def _handle_start_tss(self, connection: Connection, payload: str, content: str) -> None:
        message = self._decode(StartTSSPayload, payload, EnvelopeHeader.START_TSS.value)
        if message is None:
            return
        with self._lock:
            targets = [
                (member, self._clients[member])
                for member in dict.fromkeys(message.committee)
                if member in self._clients
            ]
        await asyncio.gather(*(self._send(member, target, content) for member, target in targets))

    async def _handle_tss_routing(self, connection: Connection, payload: str, content: str) -> None:
        message = self._decode(TSSRoutingPayload, payload, EnvelopeHeader.TSS_ROUTING.value)
        if message is None:
            return
        target = self.connection_for(message.to)
        if target is None:
            logger.error("client:%s is offline", message.to)
            return
        await self._send(message.to, target, content)

    # --- Helpers --------------------------------------------------------------------
    @staticmethod
    def _decode(model: type[PayloadT], payload: str, kind: str) -> PayloadT | None:
        try:
            return model.model_validate_json(payload)
        except ValidationError as exc:
            logger.error("fail to decode %s payload %r, error: %s", kind, payload, exc)
            return None

    @staticmethod
    async def _send(client_key: str, connection: Connection, content: str) -> bool:
        try:
            await connection.send_text(content)
        except (RuntimeError, OSError, WebSocketDisconnect) as exc:
            logger.warning("fail to forward message to %s, error: %s", client_key, exc)
            return False
        return True


_HUB = ConnectionHub()


def get_hub() -> ConnectionHub:
    """Return the shared connection hub."""
    return _HUB
