"""Storage key construction for sessions, start markers and inbox messages."""

from __future__ import annotations

from tss_mediator.core.errors import BadRequestError


def clean_identifier(value: str | None, name: str) -> str:
    """Trim surrounding whitespace from an identifier, rejecting blanks.

    Args:
        value: Raw identifier, typically a path segment or header value.
        name: Parameter name used in the error message.

    Returns:
        The trimmed identifier.

    Raises:
        BadRequestError: If the identifier is missing or whitespace-only.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise BadRequestError(f"{name} is empty")
    return cleaned


def clean_round_id(value: str | None) -> str | None:
    """Normalize the optional round id; blank values mean "no round"."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def session_key(session_id: str) -> str:
    return f"session-{session_id}"


def start_key(session_id: str) -> str:
    return f"{session_key(session_id)}-start"


def inbox_prefix(session_id: str, recipient: str, round_id: str | None = None) -> str:
    """Return the key prefix under which a recipient's copies are stored.

    The prefix always ends with ``-`` so one participant key never matches
    another participant whose key merely starts with it.
    """
    if round_id:
        return f"{session_id}-{recipient}-{round_id}-"
    return f"{session_id}-{recipient}-"


def message_key(session_id: str, recipient: str, message_hash: str, round_id: str | None = None) -> str:
    return f"{inbox_prefix(session_id, recipient, round_id)}{message_hash}"
