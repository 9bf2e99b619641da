"""Session configuration.

Environment-first: each field can be overridden by a TTT_* variable,
falling back to the defaults of the browser game (easy, computer plays O,
half a second before the computer answers).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .game_basics import O, X
from .policy import Difficulty

_MARKS = {"x": X, "o": O, "none": None}


def parse_computer_mark(value: str) -> int | None:
    key = value.strip().lower()
    if key not in _MARKS:
        raise ValueError(f"Invalid computer mark {value!r}; expected x, o or none")
    return _MARKS[key]


@dataclass
class SessionConfig:
    difficulty: Difficulty = Difficulty.LOW
    computer_mark: int | None = O
    ai_delay: float = 0.5
    seed: int | None = None

    def __post_init__(self) -> None:
        self.difficulty = Difficulty.parse(self.difficulty)
        if self.computer_mark not in (X, O, None):
            raise ValueError(f"Invalid computer mark {self.computer_mark!r}")
        if self.ai_delay < 0:
            raise ValueError(f"ai_delay must be >= 0, got {self.ai_delay}")

    @classmethod
    def from_env(cls) -> "SessionConfig":
        cfg = cls()
        d = os.getenv("TTT_DIFFICULTY")
        if d:
            cfg.difficulty = Difficulty.parse(d)
        c = os.getenv("TTT_COMPUTER")
        if c:
            cfg.computer_mark = parse_computer_mark(c)
        delay = os.getenv("TTT_AI_DELAY")
        if delay:
            cfg.ai_delay = float(delay)
            if cfg.ai_delay < 0:
                raise ValueError(f"TTT_AI_DELAY must be >= 0, got {delay}")
        seed = os.getenv("TTT_SEED")
        if seed:
            cfg.seed = int(seed)
        return cfg
