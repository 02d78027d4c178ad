from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from partyrank import db
from partyrank.models import Game


games = Blueprint('games', __name__)


@games.route('', methods=['GET'])
def list_games():
    query = Game.query
    name = (request.args.get('name') or '').strip()
    pack = (request.args.get('pack') or '').strip()
    if name:
        query = query.filter(Game.name.ilike(f"%{name}%"))
    if pack:
        query = query.filter(Game.pack == pack)
    items = query.order_by(Game.name).all()
    return jsonify({'items': [g.to_dict() for g in items]})


@games.route('/packs', methods=['GET'])
def list_packs():
    rows = db.session.query(Game.pack).filter(Game.pack.isnot(None), Game.pack != '').distinct().all()
    return jsonify({'items': sorted(pack for (pack,) in rows)})


@games.route('', methods=['POST'])
@login_required
def create_game():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return jsonify({'error': 'Name is required'}), 400

    game = Game(name=name, pack=data.get('pack') or None, img=data.get('img') or None)
    try:
        db.session.add(game)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[game-create] name={name} failed: {exc}")
        return jsonify({'error': 'Failed to create game'}), 500
    current_app.logger.info(f"[game-create] game={game.id} name={name}")
    return jsonify(game.to_dict()), 201
