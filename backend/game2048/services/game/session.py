import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from game2048.errors import GameNotOverError
from . import board as engine


@dataclass(frozen=True)
class GameSummary:
    """What a finished game hands to the score ledger."""
    score: int
    max_tile: int = 0
    moves: int = 0
    duration: int = 0
    won: bool = False


class GameSession:
    """One player's in-progress game.

    Phases: idle -> playing -> (won ->) over. A won game accepts no moves
    until ``keep_playing()`` is called; an over game accepts none until
    ``new_game()``.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time,
                 best_score: int = 0, win_tile: int = engine.WIN_TILE):
        self.rng = rng
        self.clock = clock
        self.win_tile = win_tile
        self.best_score = int(best_score or 0)
        self.board: engine.Board = engine.empty_board()
        self.score = 0
        self.moves = 0
        self.has_won = False
        self.continue_after_win = False
        self.game_over = False
        self.started_at: Optional[float] = None
        self.finished_at: Optional[float] = None

    def new_game(self) -> None:
        self.board = engine.new_board(self.rng)
        self.score = 0
        self.moves = 0
        self.has_won = False
        self.continue_after_win = False
        self.game_over = False
        self.started_at = self.clock()
        self.finished_at = None

    @property
    def phase(self) -> str:
        if self.started_at is None:
            return 'idle'
        if self.game_over:
            return 'over'
        if self.has_won and not self.continue_after_win:
            return 'won'
        return 'playing'

    def move(self, direction) -> bool:
        """Apply a move. Returns False when the move was ignored or changed nothing."""
        if self.phase != 'playing':
            return False
        result = engine.apply_move(self.board, direction)
        if not result.changed:
            return False

        self.board = engine.spawn_tile(result.board, self.rng)
        self.score += result.earned
        self.best_score = max(self.best_score, self.score)
        self.moves += 1
        if engine.has_won(self.board, self.has_won, self.win_tile):
            self.has_won = True
        if engine.is_terminal(self.board):
            self.game_over = True
            self.finished_at = self.clock()
        return True

    def keep_playing(self) -> None:
        if self.has_won:
            self.continue_after_win = True

    @property
    def max_tile(self) -> int:
        return engine.max_tile(self.board)

    @property
    def duration(self) -> int:
        if self.started_at is None:
            return 0
        end = self.finished_at if self.finished_at is not None else self.clock()
        return int(end - self.started_at)

    def summary(self) -> GameSummary:
        if not self.game_over:
            raise GameNotOverError('Game is still in progress')
        return GameSummary(
            score=self.score,
            max_tile=self.max_tile,
            moves=self.moves,
            duration=self.duration,
            won=self.has_won,
        )
