from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .config import SessionConfig, parse_computer_mark
from .errors import NoLegalMove
from .game_basics import (
    SYMBOLS,
    current_player,
    deserialize_board,
    evaluate_outcome,
    is_valid_state,
    render_board,
)
from .policy import Difficulty, choose_move, make_rng
from .session import GameSession

DIFFICULTIES = [d.value for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe against the computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the random opponent")

    p_out = sub.add_parser("outcome", help="Evaluate a board (9 digits, 0=empty,1=X,2=O)")
    p_out.add_argument("--board", required=True, help="Board string, e.g., 110220000")

    p_mv = sub.add_parser("move", help="Ask the computer for a move on a board")
    p_mv.add_argument("--board", required=True, help="Board string, e.g., 110220000")
    p_mv.add_argument("--difficulty", choices=DIFFICULTIES, default=Difficulty.HIGH.value,
                      help="Opponent strength (default: hard)")
    p_mv.add_argument("--mark", choices=["x", "o"], default=None,
                      help="Mark to choose for (default: side to move)")

    p_play = sub.add_parser("play", help="Play an interactive game on the terminal")
    p_play.add_argument("--difficulty", choices=DIFFICULTIES, default=None,
                        help="Opponent strength (default: TTT_DIFFICULTY or easy)")
    p_play.add_argument("--computer", choices=["x", "o", "none"], default=None,
                        help="Mark played by the computer (default: TTT_COMPUTER or o)")
    p_play.add_argument("--delay", type=float, default=None,
                        help="Seconds before the computer answers (default: TTT_AI_DELAY or 0.5)")

    return p


def _parse_board(raw: str):
    try:
        b = deserialize_board(raw)
    except ValueError:
        logging.error("Invalid board string. Must be 9 chars of 0/1/2.")
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def play_loop(session: GameSession, stdin: TextIO, stdout: TextIO) -> int:
    def show() -> None:
        stdout.write(render_board(session.board) + "\n" + session.status_text() + "\n")
        stdout.flush()

    show()
    for line in stdin:
        cmd = line.strip().lower()
        if not cmd:
            continue
        if cmd in ("q", "quit"):
            break
        if cmd in ("r", "reset"):
            session.reset()
        else:
            try:
                session.play(int(cmd))
            except ValueError:
                # IllegalMove is a ValueError too
                logging.warning("Ignored move %r: expected a free cell 0-8", cmd)
                continue
        session.run_pending()
        show()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttplay"))
        except Exception:
            print("unknown")
        return 0

    if ns.cmd == "outcome":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        o = evaluate_outcome(b)
        logging.info(
            "outcome=%s winner=%s",
            o.status,
            SYMBOLS[o.winner] if o.winner else "-",
        )
        return 0

    if ns.cmd == "move":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        mark = parse_computer_mark(ns.mark) if ns.mark else current_player(b)
        try:
            cell = choose_move(b, mark, ns.difficulty, make_rng(ns.seed))
        except NoLegalMove as e:
            logging.error("%s", e)
            return 2
        logging.info("mark=%s difficulty=%s move=%d", SYMBOLS[mark], ns.difficulty, cell)
        return 0

    if ns.cmd == "play":
        try:
            cfg = SessionConfig.from_env()
        except ValueError as e:
            logging.error("%s", e)
            return 2
        if ns.difficulty is not None:
            cfg.difficulty = Difficulty.parse(ns.difficulty)
        if ns.computer is not None:
            cfg.computer_mark = parse_computer_mark(ns.computer)
        if ns.delay is not None:
            cfg.ai_delay = max(0.0, ns.delay)
        if ns.seed is not None:
            cfg.seed = ns.seed
        session = GameSession(cfg)
        session.run_pending()
        return play_loop(session, sys.stdin, sys.stdout)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
