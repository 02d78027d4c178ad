from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from partyrank.services.leaderboard import ValidationError, load_votes, rank


leaderboard = Blueprint('leaderboard', __name__)

TIER_LABELS = {1: 'gold', 2: 'silver', 3: 'bronze'}


def tier_label(position: int):
    return TIER_LABELS.get(position)


def render_leaderboard(ranked):
    """Number ranked games from 1 and attach tier labels to the podium."""
    rows = []
    for position, game in enumerate(ranked, start=1):
        row = game.to_dict()
        row['rank'] = position
        row['tier'] = tier_label(position)
        rows.append(row)
    return rows


@leaderboard.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    try:
        ranked = rank(load_votes())
    except (ValidationError, SQLAlchemyError) as exc:
        current_app.logger.error(f"[leaderboard] failed: {exc}")
        return jsonify({'error': 'Could not load leaderboard'}), 500

    payload = {'items': render_leaderboard(ranked)}
    if not ranked:
        payload['message'] = 'No scores yet'
    return jsonify(payload)


@leaderboard.route('/votes', methods=['GET'])
def get_votes():
    try:
        votes = load_votes()
    except SQLAlchemyError as exc:
        current_app.logger.error(f"[votes] failed: {exc}")
        return jsonify({'error': 'Could not load votes'}), 500
    return jsonify({'items': [v.to_dict() for v in votes]})
