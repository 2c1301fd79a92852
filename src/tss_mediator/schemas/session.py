# src/tss_mediator/schemas/session.py
"""Session-related Pydantic schemas."""

from pydantic import BaseModel, Field


class Session(BaseModel):
    """A ceremony session and its ordered participant set."""

    session_id: str = Field(..., description="Client-chosen session identifier")
    participants: list[str] = Field(default_factory=list, description="Device identifiers in join order")

    def merge(self, participants: list[str]) -> "Session":
        """Return a copy with any new participants appended in order."""
        merged = list(self.participants)
        for participant in participants:
            if participant not in merged:
                merged.append(participant)
        return self.model_copy(update={"participants": merged})


class StartMarker(BaseModel):
    """Frozen committee snapshot recorded when a ceremony round begins."""

    session_id: str
    participants: list[str] = Field(default_factory=list)
