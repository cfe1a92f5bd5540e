import math
from typing import NamedTuple, Optional

from game2048 import db
from game2048.models import Player, Score
from .ranking import rank

RECENT_SCORES_LIMIT = 10


class LeaderboardPage(NamedTuple):
    entries: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def to_dict(self):
        return {
            'leaderboard': self.entries,
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'totalPages': self.total_pages,
            },
        }


def leaderboard_page(limit: int, page: int) -> LeaderboardPage:
    """Best scores, highest first; equal scores keep submission order.

    Every stored score is a player's best, so there is no separate history
    view. Ranks are dense: tied scores share a rank.
    """
    query = (
        db.session.query(Score, Player.name)
        .join(Player, Score.player_id == Player.id)
        .order_by(Score.value.desc(), Score.id.asc())
    )
    total = Score.query.count()
    rows = query.limit(limit).offset((page - 1) * limit).all()

    ranks = {}
    entries = []
    for score, player_name in rows:
        if score.value not in ranks:
            ranks[score.value] = rank(score.value)
        entry = {'rank': ranks[score.value], 'playerName': player_name}
        entry.update(score.to_dict())
        entries.append(entry)
    return LeaderboardPage(entries=entries, page=page, limit=limit, total=total)


def player_profile(name: str) -> Optional[dict]:
    player = Player.query.filter_by(name=name).first()
    if not player:
        return None
    scores = (
        Score.query.filter_by(player_id=player.id)
        .order_by(Score.value.desc())
        .limit(RECENT_SCORES_LIMIT)
        .all()
    )
    total_games = len(scores)
    wins = sum(1 for s in scores if s.won)
    return {
        'id': player.id,
        'name': player.name,
        'bestScore': scores[0].value if scores else 0,
        'totalGames': total_games,
        'wins': wins,
        'winRate': int(math.floor(wins / total_games * 100 + 0.5)) if total_games else 0,
        'recentScores': [s.to_dict() for s in scores],
    }
