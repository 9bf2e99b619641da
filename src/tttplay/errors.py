"""Exceptions raised by the rules engine and the opponent policy."""


class TicTacToeError(Exception):
    """Base class for recoverable game errors."""


class IllegalMove(TicTacToeError, ValueError):
    def __init__(self, cell: object, reason: str):
        super().__init__(f"Illegal move at {cell!r}: {reason}")
        self.cell = cell
        self.reason = reason


class NoLegalMove(TicTacToeError):
    """Raised when the opponent is asked to move on a full board."""
