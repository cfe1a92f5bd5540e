"""Pure 2048 board mechanics.

Every function here takes a board and returns a new one; nothing mutates its
input and nothing touches I/O. Moves in all four directions are handled by
rotating the grid so the move points left, sliding left, and rotating back.
"""

import random
from enum import Enum
from typing import NamedTuple, Optional

from game2048.errors import BoardFullError

SIZE = 4
WIN_TILE = 2048

Board = list[list[int]]


class Direction(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'
    UP = 'up'
    DOWN = 'down'

    @classmethod
    def parse(cls, value) -> 'Direction':
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r}") from None


# Clockwise quarter turns that make each direction slide toward column 0
_TURNS = {
    Direction.LEFT: 0,
    Direction.DOWN: 1,
    Direction.RIGHT: 2,
    Direction.UP: 3,
}


class MoveResult(NamedTuple):
    board: Board
    changed: bool
    earned: int


def empty_board() -> Board:
    return [[0] * SIZE for _ in range(SIZE)]


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def empty_cells(board: Board) -> list[tuple[int, int]]:
    cells = []
    for i in range(SIZE):
        for j in range(SIZE):
            if board[i][j] == 0:
                cells.append((i, j))
    return cells


def max_tile(board: Board) -> int:
    return max(max(row) for row in board)


def spawn_tile(board: Board, rng: Optional[random.Random] = None) -> Board:
    """Place a 2 (90%) or a 4 (10%) in a uniformly chosen empty cell."""
    rng = rng or random
    cells = empty_cells(board)
    if not cells:
        raise BoardFullError('Cannot spawn a tile on a full board')
    new = copy_board(board)
    i, j = rng.choice(cells)
    new[i][j] = 2 if rng.random() < 0.9 else 4
    return new


def new_board(rng: Optional[random.Random] = None) -> Board:
    board = spawn_tile(empty_board(), rng)
    return spawn_tile(board, rng)


def _rotate_cw(board: Board) -> Board:
    return [list(row) for row in zip(*board[::-1])]


def _rotate(board: Board, turns: int) -> Board:
    for _ in range(turns % 4):
        board = _rotate_cw(board)
    return board


def _slide_row_left(row: list[int]) -> tuple[list[int], int]:
    tiles = [v for v in row if v != 0]
    merged = []
    earned = 0
    skip = False
    for idx, value in enumerate(tiles):
        if skip:
            skip = False
            continue
        if idx + 1 < len(tiles) and tiles[idx + 1] == value:
            merged.append(value * 2)
            earned += value * 2
            # the partner is consumed; a merged tile never merges again this pass
            skip = True
        else:
            merged.append(value)
    return merged + [0] * (SIZE - len(merged)), earned


def apply_move(board: Board, direction) -> MoveResult:
    """Slide and merge every row toward ``direction``.

    No tile is spawned here. ``changed`` compares the whole grid, so callers
    can treat ``changed=False`` as a complete no-op.
    """
    turns = _TURNS[Direction.parse(direction)]
    rotated = _rotate(board, turns)
    rows = []
    earned = 0
    for row in rotated:
        new_row, row_earned = _slide_row_left(row)
        rows.append(new_row)
        earned += row_earned
    moved = _rotate(rows, SIZE - turns)
    return MoveResult(moved, moved != board, earned)


def has_won(board: Board, already_won: bool, target: int = WIN_TILE) -> bool:
    """Edge trigger: fires only the first time a tile reaches ``target``."""
    if already_won:
        return False
    return max_tile(board) >= target


def is_terminal(board: Board) -> bool:
    for i in range(SIZE):
        for j in range(SIZE):
            current = board[i][j]
            if current == 0:
                return False
            if j < SIZE - 1 and board[i][j + 1] == current:
                return False
            if i < SIZE - 1 and board[i + 1][j] == current:
                return False
    return True
