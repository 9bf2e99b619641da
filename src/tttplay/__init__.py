"""tttplay package.

Tic-tac-toe rules engine, a computer opponent (random or exhaustive minimax),
and a game session that schedules the computer's replies.

Convenience imports are exposed for common workflows.
"""

from .errors import IllegalMove, NoLegalMove
from .game_basics import apply_move, evaluate_outcome, legal_moves, new_game
from .policy import Difficulty, choose_move, minimax
from .session import GameSession

__all__ = [
    "new_game",
    "apply_move",
    "legal_moves",
    "evaluate_outcome",
    "choose_move",
    "minimax",
    "Difficulty",
    "GameSession",
    "IllegalMove",
    "NoLegalMove",
]
