"""
Game basics: board representation, serialization, rules, winner/draw checks, validity.
Notes:
- A board is a tuple of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- Boards are values; apply_move returns a new tuple and never mutates its input.
- Outcomes are derived from the board on demand, never stored.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import IllegalMove

EMPTY = 0
X = 1
O = 2

SYMBOLS = {EMPTY: ".", X: "X", O: "O"}

WIN_PATTERNS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

IN_PROGRESS = "in_progress"
WIN = "win"
DRAW = "draw"

Board = Tuple[int, ...]


@dataclass(frozen=True)
class Outcome:
    status: str
    winner: Optional[int] = None

    @property
    def is_over(self) -> bool:
        return self.status != IN_PROGRESS

    def __str__(self) -> str:
        if self.status == WIN:
            return f"win({SYMBOLS[self.winner]})"
        return self.status


def opponent(mark: int) -> int:
    return O if mark == X else X


def new_game() -> Board:
    return (EMPTY,) * 9


def serialize_board(board: Sequence[int]) -> str:
    return ''.join(str(cell) for cell in board)


def deserialize_board(board_str: str) -> Board:
    raw = board_str.strip()
    if len(raw) != 9 or any(c not in "012" for c in raw):
        raise ValueError(f"Invalid board string {board_str!r}. Must be 9 chars of 0/1/2.")
    return tuple(int(c) for c in raw)


def legal_moves(board: Sequence[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def get_winner(board: Sequence[int]) -> int:
    for a, b, c in WIN_PATTERNS:
        v = board[a]
        if v != EMPTY and v == board[b] and v == board[c]:
            return v
    return EMPTY


def is_draw(board: Sequence[int]) -> bool:
    return EMPTY not in board and get_winner(board) == EMPTY


def evaluate_outcome(board: Sequence[int]) -> Outcome:
    w = get_winner(board)
    if w != EMPTY:
        return Outcome(WIN, w)
    if EMPTY not in board:
        return Outcome(DRAW)
    return Outcome(IN_PROGRESS)


def apply_move(board: Sequence[int], cell: int, mark: int) -> Board:
    """Return a copy of ``board`` with ``mark`` placed at ``cell``.

    Raises IllegalMove when the index is out of range, the cell is taken,
    the game is already decided, or the mark is not X/O.
    """
    if mark not in (X, O):
        raise IllegalMove(cell, f"unknown mark {mark!r}")
    if isinstance(cell, bool) or not isinstance(cell, int) or not 0 <= cell < 9:
        raise IllegalMove(cell, "index out of range")
    if board[cell] != EMPTY:
        raise IllegalMove(cell, "cell already occupied")
    if evaluate_outcome(board).is_over:
        raise IllegalMove(cell, "game is already over")
    lst = list(board)
    lst[cell] = mark
    return tuple(lst)


def get_piece_counts(board: Sequence[int]) -> Tuple[int, int]:
    return board.count(X), board.count(O)


def current_player(board: Sequence[int]) -> int:
    x, o = get_piece_counts(board)
    return X if x == o else O


def is_valid_state(board: Sequence[int]) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    w = get_winner(board)
    if w == X and x_count != o_count + 1:
        return False
    if w == O and x_count != o_count:
        return False
    # no double winners
    def count_wins(p: int) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    if count_wins(X) > 0 and count_wins(O) > 0:
        return False
    return True


def render_board(board: Sequence[int]) -> str:
    rows = []
    for r in range(3):
        rows.append(' '.join(SYMBOLS[board[r * 3 + c]] for c in range(3)))
    return '\n'.join(rows)
