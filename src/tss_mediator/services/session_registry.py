"""Session participant registry built on the message store."""

from __future__ import annotations

import logging

from tss_mediator.core.errors import NotFoundError
from tss_mediator.schemas.session import Session, StartMarker
from tss_mediator.services.message_store import MessageStore, get_message_store
from tss_mediator.utils.keys import session_key, start_key

# Configure logger for this module
logger = logging.getLogger(__name__)


class SessionRegistry:
    """Tracks who joined a session and whether its ceremony has started.

    Registration is additive and idempotent so devices can join in any
    order. The start marker is a separate snapshot that every start call
    overwrites.
    """

    def __init__(self, store: MessageStore | None = None) -> None:
        self._store = store if store is not None else get_message_store()

    def register(self, session_id: str, participants: list[str]) -> Session:
        """Create the session or merge new participants into it.

        Existing participants keep their position; unseen ones are
        appended in the order supplied.
        """

        def _merge(current: object) -> Session:
            # Message keys share the keyspace; anything else under the key is no session.
            if not isinstance(current, Session):
                return Session(session_id=session_id, participants=[]).merge(participants)
            return current.merge(participants)

        session = self._store.update(session_key(session_id), _merge)
        logger.debug("session %s participants: %s", session_id, session.participants)
        return session

    def participants(self, session_id: str) -> list[str]:
        """Return the ordered participants of a session.

        Raises:
            NotFoundError: If no session is registered under ``session_id``.
        """
        session = self._store.get(session_key(session_id))
        if not isinstance(session, Session):
            raise NotFoundError(f"no session registered for {session_id!r}")
        return list(session.participants)

    def delete(self, session_id: str) -> None:
        """Remove the session and its start marker; missing ones are ignored."""
        self._store.delete_many([session_key(session_id), start_key(session_id)])
        logger.debug("session %s deleted", session_id)

    def mark_started(self, session_id: str, participants: list[str]) -> StartMarker:
        marker = StartMarker(session_id=session_id, participants=list(participants))
        self._store.set(start_key(session_id), marker)
        logger.info("ceremony for session %s started with %s", session_id, marker.participants)
        return marker

    def started_participants(self, session_id: str) -> list[str]:
        """Return the frozen committee of a started ceremony.

        Raises:
            NotFoundError: If the ceremony has not been marked started.
        """
        try:
            marker = self._store.get(start_key(session_id))
            if not isinstance(marker, StartMarker):
                raise NotFoundError(f"no start marker for {session_id!r}")
        except NotFoundError:
            logger.debug("session %s has not started", session_id)
            raise
        return list(marker.participants)


_REGISTRY = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    """Return the shared session registry."""
    return _REGISTRY
