from typing import List, Tuple

import pytest
try:
    from hypothesis import given, settings, strategies as st  # type: ignore
except ModuleNotFoundError:  # pragma: no cover - test infra
    pytest.skip("Hypothesis not installed", allow_module_level=True)

from tttplay.errors import IllegalMove
from tttplay.game_basics import (
    EMPTY,
    O,
    WIN_PATTERNS,
    X,
    apply_move,
    evaluate_outcome,
    legal_moves,
    new_game,
    opponent,
)
from tttplay.policy import Difficulty, choose_move, minimax


def play_out(order: List[int], plies: int) -> Tuple[tuple, int]:
    """Play ``order`` alternately from X, stopping early if the game ends."""
    b = new_game()
    turn = X
    for cell in order[:plies]:
        if evaluate_outcome(b).is_over:
            break
        b = apply_move(b, cell, turn)
        turn = opponent(turn)
    return b, turn


games = st.tuples(st.permutations(list(range(9))), st.integers(min_value=0, max_value=9))


@given(games)
def test_never_two_winners(game):
    b, _ = play_out(*game)
    winners = {m for m in (X, O) for pat in WIN_PATTERNS if all(b[i] == m for i in pat)}
    assert len(winners) <= 1
    o = evaluate_outcome(b)
    if winners:
        assert o.winner in winners


@given(games)
def test_legal_plus_occupied_is_nine(game):
    b, _ = play_out(*game)
    assert len(legal_moves(b)) + sum(1 for v in b if v != EMPTY) == 9


@given(games, st.integers(min_value=-3, max_value=12))
def test_failed_move_leaves_board_unchanged(game, cell):
    b, turn = play_out(*game)
    before = tuple(b)
    try:
        after = apply_move(b, cell, turn)
    except IllegalMove:
        assert b == before
        return
    assert 0 <= cell < 9 and before[cell] == EMPTY
    assert sum(1 for i in range(9) if after[i] != before[i]) == 1


@settings(max_examples=40, deadline=None)
@given(games.filter(lambda g: g[1] >= 3))
def test_search_restores_caller_board(game):
    b, turn = play_out(*game)
    cells = list(b)
    minimax(cells, turn)
    assert tuple(cells) == b


@settings(max_examples=40, deadline=None)
@given(st.permutations(list(range(9))), st.sampled_from([3, 5, 7]))
def test_maximizer_avoids_immediate_loss_when_possible(order, plies):
    b, turn = play_out(order, plies)
    if turn != O or evaluate_outcome(b).is_over:
        return
    cell = choose_move(b, O, Difficulty.HIGH)
    child = apply_move(b, cell, O)
    if evaluate_outcome(child).is_over:
        return
    x_wins_next = any(
        evaluate_outcome(apply_move(child, m, X)).winner == X
        for m in legal_moves(child)
    )
    if x_wins_next:
        # only acceptable when every alternative loses too
        for m in legal_moves(b):
            assert minimax(apply_move(b, m, O), X).score == -10
