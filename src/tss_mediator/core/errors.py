"""Error taxonomy shared by the relay services."""

from __future__ import annotations


class MediatorError(RuntimeError):
    """Base exception raised for relay failures."""


class BadRequestError(MediatorError):
    """Raised when a caller supplies a malformed identifier or body.

    Always client-caused; the relay never retries these.
    """


class NotFoundError(MediatorError):
    """Raised when a session, start marker or stored value is absent.

    This is an expected outcome that callers treat as "not ready yet".
    """
