import math

from sqlalchemy import case

from game2048 import db
from game2048.models import GameStats, GLOBAL_STATS_ID


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def record_accepted(score: int, max_tile: int, won: bool) -> None:
    """Fold an accepted best score into the global aggregate.

    Runs inside the caller's transaction; increments are evaluated by the
    database so concurrent submissions do not lose updates. Only accepted
    submissions reach this function, so ``games_counted`` counts new personal
    bests rather than every game played.
    """
    updated = GameStats.query.filter_by(id=GLOBAL_STATS_ID).update({
        GameStats.games_counted: GameStats.games_counted + 1,
        GameStats.cumulative_score: GameStats.cumulative_score + score,
        GameStats.highest_score: case((GameStats.highest_score < score, score), else_=GameStats.highest_score),
        GameStats.highest_tile: case((GameStats.highest_tile < max_tile, max_tile), else_=GameStats.highest_tile),
        GameStats.total_wins: GameStats.total_wins + (1 if won else 0),
    }, synchronize_session=False)
    if not updated:
        # First accepted submission; a racing insert fails the flush and the ledger retries
        db.session.add(GameStats(
            id=GLOBAL_STATS_ID,
            games_counted=1,
            cumulative_score=score,
            highest_score=score,
            highest_tile=max_tile,
            total_wins=1 if won else 0,
        ))
        db.session.flush()


def global_stats() -> dict:
    # populate_existing: counters are updated in SQL, never through the identity map
    stats = GameStats.query.filter_by(id=GLOBAL_STATS_ID).populate_existing().first()
    if not stats:
        return {
            'totalGames': 0,
            'averageScore': 0,
            'highestScore': 0,
            'highestTile': 0,
            'totalWins': 0,
            'winRate': 0,
        }
    games = stats.games_counted or 0
    return {
        'totalGames': games,
        'averageScore': _round_half_up(int(stats.cumulative_score) / games) if games > 0 else 0,
        'highestScore': stats.highest_score,
        'highestTile': stats.highest_tile,
        'totalWins': stats.total_wins,
        'winRate': _round_half_up(stats.total_wins / games * 100) if games > 0 else 0,
    }
