import math

from flask import Blueprint, jsonify, request, current_app
from sqlalchemy.exc import SQLAlchemyError

from game2048 import db
from game2048.errors import LedgerError
from game2048.services.game.session import GameSummary
from game2048.services.leaderboard import (
    get_leaderboard_events,
    global_stats,
    leaderboard_page,
    player_profile,
    submit,
)

leaderboard = Blueprint('leaderboard', __name__)

MAX_NAME_LENGTH = 64
# Stored columns are 32-bit integers
MAX_INT_FIELD = 2 ** 31 - 1


class InvalidRequest(ValueError):
    pass


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidRequest(f"'{name}' must be an integer") from None
    if abs(value) > MAX_INT_FIELD:
        raise InvalidRequest(f"'{name}' is out of range")
    return value


def _is_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _bounded_int(value, key):
    if not _is_number(value):
        raise InvalidRequest(f"'{key}' must be a number")
    if not 0 <= value <= MAX_INT_FIELD:
        raise InvalidRequest(f"'{key}' must be between 0 and {MAX_INT_FIELD}")
    return int(value)


def _optional_int(data, key):
    value = data.get(key)
    if value is None:
        return 0
    return _bounded_int(value, key)


def _parse_submission(data):
    player_name = data.get('playerName')
    score = data.get('score')
    if not isinstance(player_name, str) or not player_name.strip() or not _is_number(score):
        raise InvalidRequest('Player name and score are required')
    if len(player_name) > MAX_NAME_LENGTH:
        raise InvalidRequest(f'Player name must be at most {MAX_NAME_LENGTH} characters')
    won = data.get('won')
    if won is None:
        won = False
    elif not isinstance(won, bool):
        raise InvalidRequest("'won' must be a boolean")
    summary = GameSummary(
        score=_bounded_int(score, 'score'),
        max_tile=_optional_int(data, 'maxTile'),
        moves=_optional_int(data, 'moves'),
        duration=_optional_int(data, 'duration'),
        won=won,
    )
    return player_name, summary


@leaderboard.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    cfg = current_app.config
    try:
        limit = _int_arg('limit', int(cfg.get('LEADERBOARD_DEFAULT_LIMIT', 10)))
        page = _int_arg('page', 1)
    except InvalidRequest as exc:
        return jsonify({'error': str(exc)}), 400
    limit = min(max(limit, 1), int(cfg.get('LEADERBOARD_MAX_LIMIT', 100)))
    page = max(page, 1)
    # bestOnly is accepted for compatibility; only best scores are stored
    try:
        result = leaderboard_page(limit, page)
    except SQLAlchemyError:
        current_app.logger.exception('[leaderboard] failed to fetch leaderboard')
        return jsonify({'error': 'Failed to fetch leaderboard'}), 500
    return jsonify(result.to_dict())


@leaderboard.route('/leaderboard', methods=['POST'])
def post_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Player name and score are required'}), 400
    try:
        player_name, summary = _parse_submission(data)
    except InvalidRequest as exc:
        return jsonify({'error': str(exc)}), 400

    try:
        result = submit(player_name, summary)
    except (LedgerError, SQLAlchemyError):
        db.session.rollback()
        current_app.logger.exception(f"[leaderboard] failed to save score for {player_name!r}")
        return jsonify({'error': 'Failed to save score'}), 500

    payload = {
        'success': True,
        'rank': result.rank,
        'scoreId': result.score_id,
        'isNewBest': result.accepted,
    }
    if not result.accepted:
        payload['message'] = 'Score not saved - not higher than your best'
    get_leaderboard_events().emit(result)
    return jsonify(payload)


@leaderboard.route('/player', methods=['GET'])
def get_player():
    name = request.args.get('name')
    if not name:
        return jsonify({'error': 'Player name is required'}), 400
    try:
        profile = player_profile(name)
    except SQLAlchemyError:
        current_app.logger.exception('[player] failed to fetch player')
        return jsonify({'error': 'Failed to fetch player'}), 500
    return jsonify({'exists': profile is not None, 'player': profile})


@leaderboard.route('/stats', methods=['GET'])
def get_stats():
    try:
        return jsonify(global_stats())
    except SQLAlchemyError:
        current_app.logger.exception('[stats] failed to fetch stats')
        return jsonify({'error': 'Failed to fetch stats'}), 500
