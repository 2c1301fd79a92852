# src/tss_mediator/schemas/message.py
"""Relayed ceremony message schema."""

from pydantic import BaseModel, ConfigDict, Field


class RelayedMessage(BaseModel):
    """One unit of ceremony protocol traffic.

    The relay never inspects ``body``; ``hash`` is a sender-supplied
    fingerprint used only for addressing.
    """

    sender: str = Field(..., alias="from", description="Sender device identifier")
    to: list[str] = Field(..., description="Recipient device identifiers")
    hash: str = Field(..., min_length=1, description="Opaque content fingerprint")
    body: str = Field(..., description="Opaque protocol payload")

    model_config = ConfigDict(populate_by_name=True)
