"""Ceremony start marker endpoints.

A POST records a fresh committee snapshot for the session, replacing any
earlier one. Devices poll the GET until the marker appears.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Response, status

from tss_mediator.api.dependencies import RegistryDep, SessionIDDep
from tss_mediator.core.errors import NotFoundError

router = APIRouter(prefix="/start", tags=["start"])


@router.post("/{session_id}")
def mark_started(
    session_id: SessionIDDep,
    participants: Annotated[list[str], Body(description="Frozen committee for this round")],
    registry: RegistryDep,
) -> Response:
    """Mark the keygen/keysign ceremony for a session as started."""
    registry.mark_started(session_id, participants)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{session_id}")
def get_started(session_id: SessionIDDep, registry: RegistryDep) -> list[str]:
    """Return the committee frozen at start time, or 404 if not started."""
    try:
        return registry.started_participants(session_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not started",
        ) from exc
