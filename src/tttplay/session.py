"""
A single game of tic-tac-toe between a human and (optionally) the computer.

The session owns its board, turn and difficulty; nothing is process-wide.
The computer's reply is not played inline: after a human move it is queued on a
``sched.scheduler`` with a short presentation delay, and the surrounding layer
drives the queue with ``run_pending``. Resetting cancels a queued reply, so a
stale computer move can never land on a fresh board.
"""
from __future__ import annotations

import logging
import sched
import time
from typing import Optional, Union

from .config import SessionConfig
from .errors import IllegalMove
from .game_basics import (
    DRAW,
    SYMBOLS,
    WIN,
    X,
    Board,
    Outcome,
    apply_move,
    evaluate_outcome,
    new_game,
    opponent,
)
from .policy import Difficulty, choose_move, make_rng

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(self, config: Optional[SessionConfig] = None,
                 scheduler: Optional[sched.scheduler] = None):
        self.config = config if config is not None else SessionConfig()
        self._scheduler = scheduler if scheduler is not None else sched.scheduler(time.monotonic, time.sleep)
        self._rng = make_rng(self.config.seed)
        self._pending: Optional[sched.Event] = None
        self.board: Board = new_game()
        self.turn: int = X
        self.reset()

    @property
    def difficulty(self) -> Difficulty:
        return self.config.difficulty

    @property
    def computer_mark(self) -> Optional[int]:
        return self.config.computer_mark

    @property
    def outcome(self) -> Outcome:
        return evaluate_outcome(self.board)

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def reset(self) -> None:
        self._cancel_pending()
        self.board = new_game()
        self.turn = X
        logger.debug("new game difficulty=%s computer=%s",
                     self.difficulty.value, self.computer_mark)
        if self.computer_mark == self.turn:
            self._schedule_computer_move()

    new_game = reset

    def set_difficulty(self, value: Union[str, Difficulty]) -> None:
        self.config.difficulty = Difficulty.parse(value)
        self.reset()

    def play(self, cell: int) -> Outcome:
        """Apply a human move for the side to move.

        Raises IllegalMove, leaving the session untouched, when the move is
        invalid or the computer is the side to move.
        """
        if self.computer_mark is not None and self.turn == self.computer_mark:
            raise IllegalMove(cell, "waiting for the computer to move")
        return self._apply(cell)

    def computer_move(self) -> int:
        """Compute and apply the computer's move synchronously."""
        self._cancel_pending()
        cell = choose_move(self.board, self.turn, self.difficulty, self._rng)
        self._apply(cell)
        logger.debug("computer played %d", cell)
        return cell

    def run_pending(self, blocking: bool = True) -> None:
        self._scheduler.run(blocking=blocking)

    def status_text(self) -> str:
        o = self.outcome
        if o.status == WIN:
            return f"Player {SYMBOLS[o.winner]} wins!"
        if o.status == DRAW:
            return "It's a draw!"
        return f"Current Player: {SYMBOLS[self.turn]}"

    def _apply(self, cell: int) -> Outcome:
        self.board = apply_move(self.board, cell, self.turn)
        outcome = self.outcome
        if outcome.is_over:
            logger.debug("game over: %s", outcome)
            return outcome
        self.turn = opponent(self.turn)
        if self.turn == self.computer_mark:
            self._schedule_computer_move()
        return outcome

    def _schedule_computer_move(self) -> None:
        self._pending = self._scheduler.enter(self.config.ai_delay, 0, self._on_timer)

    def _on_timer(self) -> None:
        self._pending = None
        if self.is_over or self.turn != self.computer_mark:
            return
        self.computer_move()

    def _cancel_pending(self) -> None:
        if self._pending is None:
            return
        try:
            self._scheduler.cancel(self._pending)
        except ValueError:
            # already popped off the queue
            pass
        self._pending = None
        logger.debug("cancelled pending computer move")
