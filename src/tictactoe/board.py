"""
Board Engine: pure functions over a GameState value.

Nothing in here holds state of its own. Every function returns a new GameState (or the same one, when a move is rejected)
and never mutates its input, so the service layer decides when a new state becomes the authoritative one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from src.core.shared_types import DRAW, GameStatus, Mark

BOARD_SIZE = 9

Cell = Optional[Mark]
Board = tuple[Cell, ...]
Line = tuple[int, int, int]

# Order matters: rows, then columns, then diagonals. The first complete line in this order is the one reported.
WINNING_LINES: tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game in a room."""

    board: Board = field(default_factory=empty_board)
    current_turn: Mark = Mark.X
    status: GameStatus = GameStatus.WAITING
    winner: Optional[str] = None  # Mark, DRAW or None
    winning_line: Optional[Line] = None
    # the first game in a room always starts with X
    last_starting_player: Mark = Mark.X

    @property
    def moves_played(self) -> int:
        return sum(1 for cell in self.board if cell is not None)


def initial_state() -> GameState:
    return GameState()


def find_winning_line(board: Board) -> Optional[Line]:
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def evaluate_winner(board: Board) -> Optional[Mark]:
    """Mark owning a complete line, if any."""
    line = find_winning_line(board)
    return board[line[0]] if line else None


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def apply_move(state: GameState, position: int, mark: Mark) -> GameState:
    """
    Place `mark` on `position`.
    ----

    Occupied cells and games that are not being played are ignored silently: the state is returned unchanged.
    Turn validation (is it this mark's turn?) is the caller's responsibility.
    """
    if not 0 <= position < BOARD_SIZE:
        return state
    if state.board[position] is not None or state.status != GameStatus.PLAYING:
        return state

    board = state.board[:position] + (mark,) + state.board[position + 1 :]
    line = find_winning_line(board)
    full = is_full(board)

    if line:
        winner: Optional[str] = board[line[0]]
    elif full:
        winner = DRAW
    else:
        winner = None

    return replace(
        state,
        board=board,
        current_turn=mark.opponent,
        status=GameStatus.FINISHED if winner else GameStatus.PLAYING,
        winner=winner,
        winning_line=line,
    )


def start_game(state: GameState) -> GameState:
    """Board and turn are left untouched."""
    return replace(state, status=GameStatus.PLAYING)


def reset_game(previous: Optional[GameState] = None) -> GameState:
    """Fresh board, where the starting mark alternates with respect to the previous game."""
    last_starter = previous.last_starting_player if previous else None
    next_starter = Mark.O if last_starter == Mark.X else Mark.X
    return GameState(current_turn=next_starter, last_starting_player=next_starter)
