"""Session participant registration endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Response, status

from tss_mediator.api.dependencies import RegistryDep, SessionIDDep
from tss_mediator.core.errors import NotFoundError

router = APIRouter(tags=["sessions"])

ParticipantsBody = Annotated[list[str], Body(description="Device identifiers to register")]


@router.post("/{session_id}", status_code=status.HTTP_201_CREATED)
def register_participants(
    session_id: SessionIDDep,
    participants: ParticipantsBody,
    registry: RegistryDep,
) -> Response:
    """Create the session or merge participants into it."""
    registry.register(session_id, participants)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("/{session_id}")
def list_participants(session_id: SessionIDDep, registry: RegistryDep) -> list[str]:
    """Return the ordered participants of a session.

    A session named `health` can be registered but not listed here, since
    the health check owns that path.
    """
    try:
        return registry.participants(session_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        ) from exc


@router.delete("/{session_id}")
def delete_session(session_id: SessionIDDep, registry: RegistryDep) -> Response:
    """Delete the session and its start marker. Always succeeds."""
    registry.delete(session_id)
    return Response(status_code=status.HTTP_200_OK)
