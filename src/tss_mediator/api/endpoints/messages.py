"""Inbox endpoints for relaying opaque ceremony messages."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from tss_mediator.api.dependencies import (
    MailboxDep,
    MessageHashDep,
    ParticipantKeyDep,
    RoundIDDep,
    SessionIDDep,
)
from tss_mediator.schemas.message import RelayedMessage

router = APIRouter(prefix="/message", tags=["messages"])


@router.post("/{session_id}", status_code=status.HTTP_202_ACCEPTED)
def deposit_message(
    session_id: SessionIDDep,
    message: RelayedMessage,
    round_id: RoundIDDep,
    mailbox: MailboxDep,
) -> Response:
    """Store one copy of the message for each recipient."""
    mailbox.deposit(session_id, message, round_id)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.get("/{session_id}/{participant_key}", response_model=list[RelayedMessage])
def poll_messages(
    session_id: SessionIDDep,
    participant_key: ParticipantKeyDep,
    round_id: RoundIDDep,
    mailbox: MailboxDep,
) -> list[RelayedMessage]:
    """Return every message waiting for a participant (possibly none)."""
    return mailbox.poll(session_id, participant_key, round_id)


@router.delete("/{session_id}/{participant_key}/{message_hash}")
def acknowledge_message(
    session_id: SessionIDDep,
    participant_key: ParticipantKeyDep,
    message_hash: MessageHashDep,
    round_id: RoundIDDep,
    mailbox: MailboxDep,
) -> Response:
    """Remove the participant's copy once it has been processed."""
    mailbox.acknowledge(session_id, participant_key, message_hash, round_id)
    return Response(status_code=status.HTTP_200_OK)
