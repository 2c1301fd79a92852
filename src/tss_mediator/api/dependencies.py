"""Shared API dependencies for identifier cleaning and service access."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from tss_mediator.core.errors import BadRequestError
from tss_mediator.services.hub import ConnectionHub, get_hub
from tss_mediator.services.mailbox import Mailbox, get_mailbox
from tss_mediator.services.session_registry import SessionRegistry, get_session_registry
from tss_mediator.utils.keys import clean_identifier, clean_round_id


def _clean_or_400(value: str, name: str) -> str:
    """Trim a path identifier or reject it with 400 Bad Request.

    Args:
        value: Raw path segment
        name: Parameter name reported back to the caller

    Returns:
        The trimmed identifier

    Raises:
        HTTPException: If the identifier is blank
    """
    try:
        return clean_identifier(value, name)
    except BadRequestError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


def clean_session_id(session_id: str) -> str:
    return _clean_or_400(session_id, "sessionID")


def clean_participant_key(participant_key: str) -> str:
    return _clean_or_400(participant_key, "participantKey")


def clean_message_hash(message_hash: str) -> str:
    return _clean_or_400(message_hash, "hash")


def round_id_header(
    message_id: Annotated[str | None, Header(convert_underscores=False)] = None,
) -> str | None:
    """Read the optional ``message_id`` header carrying the round id."""
    return clean_round_id(message_id)


SessionIDDep = Annotated[str, Depends(clean_session_id)]
ParticipantKeyDep = Annotated[str, Depends(clean_participant_key)]
MessageHashDep = Annotated[str, Depends(clean_message_hash)]
RoundIDDep = Annotated[str | None, Depends(round_id_header)]

RegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
MailboxDep = Annotated[Mailbox, Depends(get_mailbox)]
HubDep = Annotated[ConnectionHub, Depends(get_hub)]
