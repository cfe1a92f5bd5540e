"""Game play services: the pure board engine and the per-player session.

Nothing in this package talks to the database. A finished session produces
a ``GameSummary`` which the leaderboard services persist.
"""

from .board import Direction, MoveResult, apply_move, has_won, is_terminal, new_board, spawn_tile
from .session import GameSession, GameSummary

__all__ = [
    'Direction',
    'MoveResult',
    'apply_move',
    'has_won',
    'is_terminal',
    'new_board',
    'spawn_tile',
    'GameSession',
    'GameSummary',
]
