import pytest

from tttplay.errors import IllegalMove
from tttplay.game_basics import (
    DRAW,
    EMPTY,
    IN_PROGRESS,
    O,
    WIN,
    WIN_PATTERNS,
    X,
    apply_move,
    current_player,
    deserialize_board,
    evaluate_outcome,
    get_winner,
    is_draw,
    is_valid_state,
    legal_moves,
    new_game,
    render_board,
    serialize_board,
)


def test_new_game_is_empty_and_x_to_move():
    b = new_game()
    assert b == (0,) * 9
    assert current_player(b) == X
    assert evaluate_outcome(b).status == IN_PROGRESS


def test_win_patterns_cover_rows_cols_diagonals():
    assert len(WIN_PATTERNS) == 8
    assert (0, 1, 2) in WIN_PATTERNS
    assert (2, 4, 6) in WIN_PATTERNS


def test_top_row_completion_wins_for_x():
    b = (X, X, EMPTY, O, O, EMPTY, EMPTY, EMPTY, EMPTY)
    after = apply_move(b, 2, X)
    o = evaluate_outcome(after)
    assert o.status == WIN
    assert o.winner == X
    assert o.is_over
    # input board untouched
    assert b[2] == EMPTY


def test_full_board_without_line_is_draw():
    b = (1, 1, 2, 2, 2, 1, 1, 2, 1)
    assert get_winner(b) == 0
    assert is_draw(b)
    assert evaluate_outcome(b).status == DRAW
    assert legal_moves(b) == []


@pytest.mark.parametrize("cell", [-1, 9, 100, 2.0, "4", None, True])
def test_out_of_range_or_non_int_cell_rejected(cell):
    b = new_game()
    with pytest.raises(IllegalMove):
        apply_move(b, cell, X)
    assert b == new_game()


def test_occupied_cell_rejected():
    b = apply_move(new_game(), 4, X)
    with pytest.raises(IllegalMove) as exc:
        apply_move(b, 4, O)
    assert exc.value.cell == 4
    assert "occupied" in exc.value.reason
    assert b[4] == X


def test_move_after_win_rejected():
    b = (X, X, X, O, O, EMPTY, EMPTY, EMPTY, EMPTY)
    with pytest.raises(IllegalMove) as exc:
        apply_move(b, 5, O)
    assert "over" in exc.value.reason


def test_unknown_mark_rejected():
    with pytest.raises(IllegalMove):
        apply_move(new_game(), 0, 3)


def test_legal_moves_ascending():
    b = (0, 1, 0, 2, 0, 0, 1, 2, 0)
    assert legal_moves(b) == [0, 2, 4, 5, 8]


def test_serialize_round_trip_and_errors():
    b = (1, 0, 2, 0, 1, 0, 0, 0, 2)
    assert serialize_board(b) == "102010002"
    assert deserialize_board("102010002") == b
    for bad in ["abc", "0123", "1020100023", "10201000x"]:
        with pytest.raises(ValueError):
            deserialize_board(bad)


def test_is_valid_state():
    assert is_valid_state(new_game())
    assert is_valid_state((1, 0, 0, 0, 2, 0, 0, 0, 0))
    assert not is_valid_state((2, 0, 0, 0, 0, 0, 0, 0, 0))
    assert not is_valid_state((1, 1, 1, 2, 2, 2, 0, 0, 0))


def test_render_board():
    b = (1, 0, 2, 0, 0, 0, 0, 0, 0)
    assert render_board(b) == "X . O\n. . .\n. . ."
