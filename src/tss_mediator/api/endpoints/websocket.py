"""Realtime control channel endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket

from tss_mediator.api.dependencies import HubDep
from tss_mediator.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket(settings.websocket_path)
async def control_channel(websocket: WebSocket, hub: HubDep) -> None:
    """Accept a device connection and feed each text frame to the hub.

    Binary frames are ignored. When the socket closes, every identifier
    bound to it is forgotten.
    """
    await websocket.accept()
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            content = message.get("text")
            if content is None:
                logger.warning("dropping non-text frame from %s", websocket.client)
                continue
            await hub.dispatch(websocket, content)
    finally:
        hub.disconnect(websocket)
