"""
Opponent policy: random play for the lower difficulties, exhaustive minimax for HIGH.

Scoring convention for the search:
- The sign convention is fixed globally: O is always the maximizer and X the minimizer,
  no matter which mark the search was asked to choose for.
- An X win scores -10, an O win scores +10, a full board with no winner scores 0.
- No pruning, no memoization, no depth limit. Ties go to the first move in legal_moves order.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

import numpy as np

from .errors import NoLegalMove
from .game_basics import EMPTY, O, X, get_winner, legal_moves, opponent

logger = logging.getLogger(__name__)

MAXIMIZER = O
MINIMIZER = X

WIN_SCORE = 10


class Difficulty(Enum):
    LOW = "easy"
    MEDIUM = "medium"
    HIGH = "hard"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for d in cls:
            if key in (d.name.lower(), d.value):
                return d
        raise ValueError(f"Unknown difficulty {value!r}; expected one of easy, medium, hard")


@dataclass(frozen=True)
class SearchResult:
    score: int
    index: Optional[int] = None


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def random_move(board: Sequence[int], rng: Optional[np.random.Generator] = None) -> int:
    moves = legal_moves(board)
    if not moves:
        raise NoLegalMove("No empty cells left to play")
    if rng is None:
        rng = make_rng()
    return int(rng.choice(moves))


def _search(cells: List[int], player: int, stats: List[int]) -> SearchResult:
    stats[0] += 1
    w = get_winner(cells)
    if w == MINIMIZER:
        return SearchResult(-WIN_SCORE)
    if w == MAXIMIZER:
        return SearchResult(WIN_SCORE)
    empty = legal_moves(cells)
    if not empty:
        return SearchResult(0)

    scored = []
    for idx in empty:
        cells[idx] = player
        result = _search(cells, opponent(player), stats)
        cells[idx] = EMPTY
        scored.append((idx, result.score))

    best_idx = None
    best_score = None
    for idx, score in scored:
        if best_score is None:
            better = True
        elif player == MAXIMIZER:
            better = score > best_score
        else:
            better = score < best_score
        if better:
            best_idx, best_score = idx, score
    return SearchResult(best_score, best_idx)


def minimax(board: Sequence[int], player: int) -> SearchResult:
    """Exhaustive adversarial search from ``board`` with ``player`` to move.

    Works on a private copy of the board: placements are undone on the way back up
    so sibling branches never see each other's moves, and the caller's board is
    never touched.
    """
    stats = [0]
    result = _search(list(board), player, stats)
    logger.debug("minimax player=%d evaluated=%d score=%d index=%s",
                 player, stats[0], result.score, result.index)
    return result


def choose_move(
    board: Sequence[int],
    mark: int,
    difficulty: Union[str, Difficulty] = Difficulty.LOW,
    rng: Optional[np.random.Generator] = None,
) -> int:
    level = Difficulty.parse(difficulty)
    moves = legal_moves(board)
    if not moves:
        raise NoLegalMove("choose_move called on a board with no empty cells")
    if get_winner(board) != EMPTY:
        raise NoLegalMove("choose_move called on a finished game")
    if len(moves) == 1:
        return moves[0]
    if level is Difficulty.HIGH:
        return minimax(board, mark).index
    # MEDIUM currently plays exactly like LOW.
    return random_move(board, rng)
