# src/tss_mediator/schemas/envelope.py
"""WebSocket control envelope schemas.

Every frame on the realtime channel is an :class:`Envelope` whose ``body``
is itself a JSON document encoded as a string. The hub decodes only the
payload fields it needs for addressing and forwards the original frame
text untouched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EnvelopeHeader(str, Enum):
    """Closed set of control envelope kinds."""

    HELLO = "Hello"
    START_SESSION = "StartSession"
    JOIN_SESSION = "JoinSession"
    DROP_SESSION = "DropSession"
    END_SESSION = "EndSession"
    START_TSS = "StartTSS"
    TSS_ROUTING = "TSSRouting"


# Older clients name the hello frame after its payload type.
_HEADER_ALIASES = {"HelloMessage": EnvelopeHeader.HELLO.value}


class Envelope(BaseModel):
    header: EnvelopeHeader
    body: str

    @field_validator("header", mode="before")
    @classmethod
    def _normalize_header(cls, value: object) -> object:
        if isinstance(value, str):
            return _HEADER_ALIASES.get(value, value)
        return value


class HelloPayload(BaseModel):
    """Binds a device's long-lived identifier to the sending connection."""

    client_key: str = Field(..., min_length=1, alias="clientKey")

    model_config = ConfigDict(populate_by_name=True)


class SessionPayload(BaseModel):
    """Payload shared by the StartSession/JoinSession/DropSession/EndSession kinds."""

    session_id: str = Field(..., min_length=1, alias="sessionID")
    client_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clientKey", "ownerID"),
    )

    model_config = ConfigDict(populate_by_name=True)


class StartTSSPayload(BaseModel):
    committee: list[str]


class TSSRoutingPayload(BaseModel):
    to: str = Field(..., min_length=1)
