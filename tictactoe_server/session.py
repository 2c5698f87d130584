"""Session management: one game per WebSocket connection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import WebSocket

from tictactoe_server.game import GameState
from tictactoe_server.models import ErrorMsg, render

logger = logging.getLogger(__name__)


@dataclass
class Session:
    ws: WebSocket
    game: GameState = field(default_factory=GameState)

    async def push_render(self):
        await self.send(render(self.game).model_dump())

    async def send(self, msg_dict: dict):
        try:
            await self.ws.send_json(msg_dict)
        except Exception:
            logger.warning("Dropping %s message for closed socket", msg_dict.get("type"))


class SessionManager:
    def __init__(self):
        self.sessions: dict[WebSocket, Session] = {}

    async def open_session(self, ws: WebSocket) -> Session:
        session = Session(ws=ws)
        self.sessions[ws] = session
        logger.info("Session opened (%d active)", len(self.sessions))
        await session.push_render()
        return session

    def get_session(self, ws: WebSocket) -> Session | None:
        return self.sessions.get(ws)

    async def play(self, ws: WebSocket, cell: int):
        session = await self._require_session(ws)
        if session is None:
            return

        reason = session.game.validate_move(cell)
        if reason is not None:
            logger.debug("Ignored play at %s: %s", cell, reason)
            return

        session.game.apply_move(cell)
        logger.debug("Move %d played at cell %d", session.game.current_move, cell)
        await session.push_render()

    async def jump_to(self, ws: WebSocket, move: int):
        session = await self._require_session(ws)
        if session is None:
            return

        if not session.game.jump_to(move):
            logger.debug("Ignored jump to move %s", move)
            return

        logger.debug("Jumped to move %d", move)
        await session.push_render()

    async def toggle_sort(self, ws: WebSocket):
        session = await self._require_session(ws)
        if session is None:
            return

        session.game.toggle_sort_order()
        await session.push_render()

    async def sync(self, ws: WebSocket):
        session = await self._require_session(ws)
        if session is None:
            return
        await session.push_render()

    def close_session(self, ws: WebSocket):
        if self.sessions.pop(ws, None) is not None:
            logger.info("Session closed (%d active)", len(self.sessions))

    async def _require_session(self, ws: WebSocket) -> Session | None:
        session = self.sessions.get(ws)
        if session is None:
            await ws.send_json(ErrorMsg(message="No active session").model_dump())
        return session


session_manager = SessionManager()
