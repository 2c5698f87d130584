"""WebSocket endpoint and message routing."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from tictactoe_server.models import (
    ErrorMsg,
    JumpToMsg,
    PlayMsg,
    SyncMsg,
    ToggleSortMsg,
    parse_client_message,
)
from tictactoe_server.session import session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    await session_manager.open_session(ws)
    try:
        while True:
            try:
                data = await ws.receive_json()
            except ValueError:
                logger.warning("Received a frame that is not JSON")
                await ws.send_json(ErrorMsg(message="Message is not valid JSON").model_dump())
                continue

            msg = parse_client_message(data)
            if msg is None:
                logger.warning("Invalid message: %r", data)
                await ws.send_json(ErrorMsg(message="Unknown or invalid message").model_dump())
                continue

            if isinstance(msg, PlayMsg):
                await session_manager.play(ws, msg.cell)

            elif isinstance(msg, JumpToMsg):
                await session_manager.jump_to(ws, msg.move)

            elif isinstance(msg, ToggleSortMsg):
                await session_manager.toggle_sort(ws)

            elif isinstance(msg, SyncMsg):
                await session_manager.sync(ws)
    except WebSocketDisconnect:
        pass
    finally:
        session_manager.close_session(ws)
