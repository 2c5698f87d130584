"""Pydantic models for WebSocket message protocol."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, StrictInt, ValidationError

from tictactoe_server.game import GameState


# ---------------------------------------------------------------------------
# Client → Server
# ---------------------------------------------------------------------------

class PlayMsg(BaseModel):
    type: Literal["play"] = "play"
    cell: StrictInt


class JumpToMsg(BaseModel):
    type: Literal["jump_to"] = "jump_to"
    move: StrictInt


class ToggleSortMsg(BaseModel):
    type: Literal["toggle_sort"] = "toggle_sort"


class SyncMsg(BaseModel):
    type: Literal["sync"] = "sync"


ClientMessage = PlayMsg | JumpToMsg | ToggleSortMsg | SyncMsg


# ---------------------------------------------------------------------------
# Server → Client
# ---------------------------------------------------------------------------

class StatusView(BaseModel):
    kind: Literal["winner", "draw", "next"]
    player: str | None
    text: str


class MoveView(BaseModel):
    move: int
    cell: int | None
    row: int | None
    col: int | None
    is_current: bool
    description: str


class RenderMsg(BaseModel):
    type: Literal["render"] = "render"
    board: list[str | None]
    status: StatusView
    winning_line: list[int] | None
    current_move: int
    moves: list[MoveView]
    descending: bool


class ErrorMsg(BaseModel):
    type: Literal["error"] = "error"
    message: str


def render(game: GameState) -> RenderMsg:
    """Build the render payload from the game's history and pointer."""
    status = game.get_status()
    line = game.winning_line()
    return RenderMsg(
        board=list(game.current_board),
        status=StatusView(kind=status.kind, player=status.player, text=status.text),
        winning_line=list(line) if line is not None else None,
        current_move=game.current_move,
        moves=[
            MoveView(
                move=entry.move,
                cell=entry.cell,
                row=entry.row,
                col=entry.col,
                is_current=entry.is_current,
                description=entry.description,
            )
            for entry in game.move_list()
        ],
        descending=game.descending,
    )


def parse_client_message(data: dict) -> ClientMessage | None:
    """Parse a raw dict into a typed client message, or None if invalid."""
    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        return None
    msg_type = data.get("type")
    mapping: dict[str, type[BaseModel]] = {
        "play": PlayMsg,
        "jump_to": JumpToMsg,
        "toggle_sort": ToggleSortMsg,
        "sync": SyncMsg,
    }
    model = mapping.get(msg_type)  # type: ignore[arg-type]
    if model is None:
        return None
    try:
        return model.model_validate(data)  # type: ignore[return-value]
    except ValidationError:
        return None
