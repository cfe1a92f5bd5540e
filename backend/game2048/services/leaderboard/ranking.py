from sqlalchemy import func

from game2048 import db
from game2048.models import Score


def rank(value: int) -> int:
    """Dense rank of ``value``: one plus the number of players whose best beats it.

    Always computed from the live table so a freshly committed best score is
    reflected on the next call.
    """
    best = (
        db.session.query(Score.player_id, func.max(Score.value).label('best'))
        .group_by(Score.player_id)
        .subquery()
    )
    higher = db.session.query(func.count()).select_from(best).filter(best.c.best > value).scalar()
    return int(higher or 0) + 1
