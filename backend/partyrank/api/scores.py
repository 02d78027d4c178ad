from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from partyrank import db, socketio
from partyrank.models import Game, Score
import math


scores = Blueprint('scores', __name__)


def _parse_score(value, score_max):
    """Return the score as a number, or None when it is not acceptable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0 or value > score_max:
        return None
    return value


@scores.route('', methods=['GET'])
def list_scores():
    query = Score.query
    user_id = request.args.get('user')
    game_id = request.args.get('game')
    if user_id:
        query = query.filter_by(user_id=user_id)
    if game_id:
        query = query.filter_by(game_id=game_id)
    items = query.order_by(Score.created).all()
    return jsonify({'items': [s.to_dict() for s in items]})


@scores.route('', methods=['POST'])
@login_required
def save_score():
    data = request.get_json(silent=True) or {}
    game_id = data.get('game')
    if not game_id:
        return jsonify({'error': 'Game is required'}), 400

    score_max = float(current_app.config.get('SCORE_MAX', 10))
    value = _parse_score(data.get('score'), score_max)
    if value is None:
        return jsonify({'error': f'Score must be a number between 0 and {score_max:g}'}), 400

    game = db.session.get(Game, game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404

    try:
        record = Score.query.filter_by(user_id=current_user.id, game_id=game.id).first()
        if record:
            record.score = value
        else:
            record = Score(user_id=current_user.id, game_id=game.id, score=value)
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[score-save] user={current_user.id} game={game.id} failed: {exc}")
        return jsonify({'error': 'Failed to save score'}), 500

    current_app.logger.info(f"[score-save] user={current_user.id} game={game.id} score={value}")
    socketio.emit('leaderboard_update', {'game': game.id}, to='leaderboard', namespace='/ws')
    return jsonify(record.to_dict())
