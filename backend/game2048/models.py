from datetime import datetime, timezone

from game2048 import db

GLOBAL_STATS_ID = 'global'


def _utcnow():
    return datetime.now(timezone.utc)


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    # Case-sensitive identity key
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
    score = db.relationship('Score', back_populates='player', uselist=False,
                            cascade='all, delete-orphan')


class Score(db.Model):
    """A player's best score. At most one row per player (unique player_id)."""
    __tablename__ = 'score'
    # Never hand out the id of a replaced best score again
    __table_args__ = {'sqlite_autoincrement': True}
    id = db.Column(db.Integer, primary_key=True)
    value = db.Column(db.Integer, nullable=False, index=True)
    max_tile = db.Column(db.Integer, nullable=False, default=0)
    moves = db.Column(db.Integer, nullable=False, default=0)
    duration = db.Column(db.Integer, nullable=False, default=0)
    won = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id', ondelete='CASCADE'),
                          nullable=False, unique=True, index=True)
    player = db.relationship('Player', back_populates='score')

    def to_dict(self):
        return {
            'score': self.value,
            'maxTile': self.max_tile,
            'moves': self.moves,
            'duration': self.duration,
            'won': bool(self.won),
            'date': self.created_at.isoformat() if self.created_at else None,
        }


class GameStats(db.Model):
    __tablename__ = 'game_stats'
    id = db.Column(db.String(16), primary_key=True, default=GLOBAL_STATS_ID)
    games_counted = db.Column(db.Integer, nullable=False, default=0)
    cumulative_score = db.Column(db.BigInteger, nullable=False, default=0)
    highest_score = db.Column(db.Integer, nullable=False, default=0)
    highest_tile = db.Column(db.Integer, nullable=False, default=0)
    total_wins = db.Column(db.Integer, nullable=False, default=0)
