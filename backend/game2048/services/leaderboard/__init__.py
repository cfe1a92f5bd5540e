"""Leaderboard domain services: score ledger, ranking, global stats.

Imported by the HTTP routes and the CLI; transport concerns stay out of
here. Ledger submissions own their transaction and commit or roll back
before returning.
"""

from .events import LeaderboardEvents, get_leaderboard_events
from .ledger import SubmitResult, submit
from .queries import LeaderboardPage, leaderboard_page, player_profile
from .ranking import rank
from .stats import global_stats

__all__ = [
    'LeaderboardEvents',
    'get_leaderboard_events',
    'SubmitResult',
    'submit',
    'LeaderboardPage',
    'leaderboard_page',
    'player_profile',
    'rank',
    'global_stats',
]
