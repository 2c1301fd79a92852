"""Per-recipient inbox for relayed ceremony messages.

A deposited message is fanned out into one stored copy per recipient,
keyed by ``{session}-{recipient}-[{round}-]{hash}``. Recipients poll by
prefix and delete their copy once processed; nothing expires on its own.
"""

from __future__ import annotations

import logging

from tss_mediator.schemas.message import RelayedMessage
from tss_mediator.services.message_store import MessageStore, get_message_store
from tss_mediator.utils.keys import inbox_prefix, message_key

# Configure logger for this module
logger = logging.getLogger(__name__)


class Mailbox:
    """Deposit, poll and acknowledge operations over the message store."""

    def __init__(self, store: MessageStore | None = None) -> None:
        self._store = store if store is not None else get_message_store()

    def deposit(self, session_id: str, message: RelayedMessage, round_id: str | None = None) -> list[str]:
        """Store one copy of ``message`` per recipient in a single transaction.

        Returns:
            The storage keys written, one per distinct recipient.
        """
        copies: dict[str, RelayedMessage] = {}
        for recipient in message.to:
            key = message_key(session_id, recipient, message.hash, round_id)
            copies[key] = message
        self._store.set_many(copies)
        for recipient in dict.fromkeys(message.to):
            logger.info(
                "received message %s from %s to %s", message.hash, message.sender, recipient
            )
        return list(copies)

    def poll(self, session_id: str, recipient: str, round_id: str | None = None) -> list[RelayedMessage]:
        """Return every stored copy addressed to ``recipient``.

        An empty list means nothing is waiting yet.
        """
        prefix = inbox_prefix(session_id, recipient, round_id)
        return [
            value
            for _, value in self._store.items_with_prefix(prefix)
            if isinstance(value, RelayedMessage)
        ]

    def acknowledge(
        self,
        session_id: str,
        recipient: str,
        message_hash: str,
        round_id: str | None = None,
    ) -> None:
        """Delete exactly one stored copy; acknowledging twice is harmless."""
        key = message_key(session_id, recipient, message_hash, round_id)
        self._store.delete(key)
        logger.info("message with key:%s deleted", key)


_MAILBOX = Mailbox()


def get_mailbox() -> Mailbox:
    """Return the shared mailbox."""
    return _MAILBOX
