import random

import pytest

from game2048.errors import BoardFullError
from game2048.services.game import board as engine
from game2048.services.game.board import Direction, apply_move, has_won, is_terminal


def _grid(*rows):
    return [list(r) for r in rows]


FULL_NO_MERGE = _grid(
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
)


def test_merge_left_pair():
    board = _grid([2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0])
    result = apply_move(board, 'left')
    assert result.changed
    assert result.earned == 4
    assert result.board == _grid([4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0])


def test_gap_merges_once():
    board = _grid([2, 0, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0])
    result = apply_move(board, Direction.LEFT)
    assert result.board[0] == [4, 0, 0, 0]
    assert result.earned == 4


def test_no_chained_merge():
    board = _grid([2, 2, 4, 0], [4, 4, 4, 4], [2, 2, 2, 0], [0, 0, 0, 0])
    result = apply_move(board, 'left')
    assert result.board[0] == [4, 4, 0, 0]
    assert result.board[1] == [8, 8, 0, 0]
    assert result.board[2] == [4, 2, 0, 0]
    assert result.earned == 4 + 16 + 4


def test_right_up_down():
    board = _grid([2, 2, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 4])
    assert apply_move(board, 'right').board[0] == [0, 0, 0, 4]
    up = apply_move(board, 'up').board
    assert [row[0] for row in up] == [4, 2, 0, 0]
    assert up[0][3] == 4
    down = apply_move(board, 'down').board
    assert [row[0] for row in down] == [0, 0, 2, 4]
    assert down[3][3] == 4


def test_unchanged_move_is_noop():
    board = _grid([2, 4, 0, 0], [8, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0])
    snapshot = [row[:] for row in board]
    result = apply_move(board, 'left')
    assert not result.changed
    assert result.earned == 0
    assert result.board == snapshot
    assert board == snapshot


def test_apply_move_does_not_mutate_input():
    board = _grid([2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0])
    apply_move(board, 'right')
    assert board[0] == [2, 2, 0, 0]


def test_direction_parse():
    assert Direction.parse('UP') is Direction.UP
    with pytest.raises(ValueError):
        Direction.parse('sideways')


def test_new_board_has_two_tiles():
    board = engine.new_board(random.Random(7))
    tiles = [v for row in board for v in row if v]
    assert len(tiles) == 2
    assert all(v in (2, 4) for v in tiles)


def test_spawn_tile_policy(fixed_rng):
    board = engine.empty_board()
    spawned = engine.spawn_tile(board, fixed_rng)
    assert spawned[0][0] == 2
    assert board[0][0] == 0
    four = engine.spawn_tile(board, type(fixed_rng)(value=0.95))
    assert four[0][0] == 4


def test_spawn_on_full_board_raises():
    with pytest.raises(BoardFullError):
        engine.spawn_tile(FULL_NO_MERGE)


def test_is_terminal_checks_both_axes():
    assert is_terminal(FULL_NO_MERGE)
    horizontal = [row[:] for row in FULL_NO_MERGE]
    horizontal[0][1] = 2
    assert not is_terminal(horizontal)
    vertical = _grid([2, 4, 2, 4], [2, 8, 4, 2], [4, 2, 8, 4], [8, 4, 2, 8])
    assert not is_terminal(vertical)
    with_gap = [row[:] for row in FULL_NO_MERGE]
    with_gap[3][3] = 0
    assert not is_terminal(with_gap)


def test_has_won_is_edge_triggered():
    board = engine.empty_board()
    board[1][2] = 2048
    assert has_won(board, already_won=False)
    assert not has_won(board, already_won=True)
    board[1][2] = 1024
    assert not has_won(board, already_won=False)
