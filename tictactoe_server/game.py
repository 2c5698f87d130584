"""Game logic: board history, time travel, and win detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NamedTuple

BOARD_CELLS = 9
BOARD_WIDTH = 3

Cell = Literal["X", "O"] | None
Board = tuple[Cell, ...]

EMPTY_BOARD: Board = (None,) * BOARD_CELLS

# Scan order decides ties: rows, columns, then both diagonals
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class WinResult(NamedTuple):
    winner: str | None
    line: tuple[int, int, int] | None


def evaluate(board: Board) -> WinResult:
    """Return the first winning line found on the board, or (None, None)."""
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return WinResult(board[a], (a, b, c))
    return WinResult(None, None)


def cell_coords(cell: int) -> tuple[int, int]:
    return divmod(cell, BOARD_WIDTH)


@dataclass(frozen=True)
class MoveRecord:
    board: Board
    cell: int | None = None  # None for the game start


@dataclass(frozen=True)
class Status:
    kind: Literal["winner", "draw", "next"]
    player: str | None

    @property
    def text(self) -> str:
        if self.kind == "winner":
            return f"Game over. Winner: {self.player}"
        if self.kind == "draw":
            return "Game over. It's a tie"
        return f"Next player: {self.player}"


@dataclass(frozen=True)
class MoveEntry:
    """One row of the jump-to-move menu."""

    move: int
    cell: int | None
    is_current: bool

    @property
    def row(self) -> int | None:
        return None if self.cell is None else cell_coords(self.cell)[0]

    @property
    def col(self) -> int | None:
        return None if self.cell is None else cell_coords(self.cell)[1]

    @property
    def description(self) -> str:
        if self.move == 0:
            return "Go to game start"
        where = f"#{self.move} ({self.row}, {self.col})"
        if self.is_current:
            return f"You are at move {where}"
        return f"Go to move {where}"


@dataclass
class GameState:
    history: list[MoveRecord] = field(default_factory=lambda: [MoveRecord(EMPTY_BOARD)])
    current_move: int = 0
    descending: bool = False

    @property
    def current_board(self) -> Board:
        return self.history[self.current_move].board

    @property
    def x_is_next(self) -> bool:
        return self.current_move % 2 == 0

    @property
    def next_player(self) -> str:
        return "X" if self.x_is_next else "O"

    def validate_move(self, cell: int) -> str | None:
        """Return the reason a move would be ignored, or None if it is legal."""
        if not isinstance(cell, int) or isinstance(cell, bool):
            return "Cell is not an index"
        if cell < 0 or cell >= BOARD_CELLS:
            return "Cell out of bounds"
        board = self.current_board
        if evaluate(board).winner is not None:
            return "Game is already over"
        if board[cell] is not None:
            return "Cell is already occupied"
        return None

    def apply_move(self, cell: int) -> bool:
        """Play the next player's symbol at ``cell``.

        Moves after the current one are discarded before the new record is
        appended. Illegal moves leave the state untouched and return False.
        """
        if self.validate_move(cell) is not None:
            return False

        next_board = list(self.current_board)
        next_board[cell] = self.next_player

        self.history = self.history[: self.current_move + 1]
        self.history.append(MoveRecord(tuple(next_board), cell))
        self.current_move = len(self.history) - 1
        return True

    def jump_to(self, move: int) -> bool:
        if not isinstance(move, int) or isinstance(move, bool):
            return False
        if move < 0 or move >= len(self.history):
            return False
        self.current_move = move
        return True

    def toggle_sort_order(self) -> None:
        self.descending = not self.descending

    def get_status(self) -> Status:
        board = self.current_board
        winner = evaluate(board).winner
        if winner is not None:
            return Status("winner", winner)
        if None not in board:
            return Status("draw", None)
        return Status("next", self.next_player)

    def winning_line(self) -> tuple[int, int, int] | None:
        return evaluate(self.current_board).line

    def move_list(self) -> list[MoveEntry]:
        entries = [
            MoveEntry(move=i, cell=record.cell, is_current=i == self.current_move)
            for i, record in enumerate(self.history)
        ]
        if self.descending:
            entries.reverse()
        return entries
