from dataclasses import dataclass
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from game2048 import db
from game2048.errors import SubmissionConflictError
from game2048.models import Player, Score
from game2048.services.game.session import GameSummary
from . import stats
from .ranking import rank


@dataclass(frozen=True)
class SubmitResult:
    accepted: bool
    rank: int
    score_id: int


class _StaleBest(Exception):
    """The best score read at the start of an attempt was replaced concurrently."""


def _find_or_create_player(name: str) -> Player:
    player = Player.query.filter_by(name=name).first()
    if player is None:
        player = Player(name=name)
        db.session.add(player)
        # A concurrent creation of the same name fails here with IntegrityError
        db.session.flush()
    return player


def _current_best(player_id: int) -> Optional[Score]:
    return Score.query.filter_by(player_id=player_id).first()


def _replace_best(current: Score, new_value: int) -> None:
    """Compare-and-swap delete: succeeds only if ``current`` is still there and still lower."""
    deleted = (
        Score.query
        .filter(Score.id == current.id, Score.value < new_value)
        .delete(synchronize_session='evaluate')
    )
    if deleted != 1:
        raise _StaleBest()


def _submit_once(player_name: str, candidate: GameSummary) -> SubmitResult:
    player = _find_or_create_player(player_name)
    current = _current_best(player.id)

    if current is not None and current.value >= candidate.score:
        return SubmitResult(accepted=False, rank=rank(current.value), score_id=current.id)

    if current is not None:
        _replace_best(current, candidate.score)

    new_score = Score(
        value=candidate.score,
        max_tile=candidate.max_tile or 0,
        moves=candidate.moves or 0,
        duration=candidate.duration or 0,
        won=bool(candidate.won),
        player_id=player.id,
    )
    db.session.add(new_score)
    # UNIQUE(player_id) rejects a second concurrent insert for the same player
    db.session.flush()
    stats.record_accepted(candidate.score, candidate.max_tile or 0, bool(candidate.won))
    return SubmitResult(accepted=True, rank=rank(candidate.score), score_id=new_score.id)


def submit(player_name: str, candidate: GameSummary, max_retries: Optional[int] = None) -> SubmitResult:
    """Record ``candidate`` as ``player_name``'s best score if it beats the stored one.

    The whole read-compare-replace runs in one transaction. Conflicts with
    concurrent submissions roll the attempt back and start over, so the stored
    row is always the player's maximum and never duplicated. A lower or equal
    score is rejected without touching storage; its result carries the rank
    and id of the stored best.
    """
    if max_retries is None:
        max_retries = int(current_app.config.get('SUBMIT_MAX_RETRIES', 3))
    attempts = max(1, max_retries)

    for attempt in range(1, attempts + 1):
        try:
            result = _submit_once(player_name, candidate)
            db.session.commit()
        except (IntegrityError, _StaleBest) as exc:
            db.session.rollback()
            current_app.logger.info(
                f"[submit-retry] player={player_name!r} attempt={attempt}/{attempts} reason={type(exc).__name__}"
            )
            continue
        except SQLAlchemyError:
            db.session.rollback()
            raise
        current_app.logger.info(
            f"[submit] player={player_name!r} score={candidate.score} accepted={result.accepted} rank={result.rank}"
        )
        return result

    current_app.logger.warning(f"[submit-conflict] player={player_name!r} gave up after {attempts} attempts")
    raise SubmissionConflictError(f"Could not record score for {player_name!r} after {attempts} attempts")
