from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from partyrank import db, socketio
from partyrank.models import Comment, Game


comments = Blueprint('comments', __name__)


def _notify(game_id):
    socketio.emit('comments_update', {'game': game_id}, to=f"game:{game_id}", namespace='/ws')


@comments.route('', methods=['GET'])
def list_comments():
    query = Comment.query
    game_id = request.args.get('game')
    if game_id:
        query = query.filter_by(game_id=game_id)
    items = query.order_by(Comment.created.desc()).all()
    return jsonify({'items': [c.to_dict() for c in items]})


@comments.route('', methods=['POST'])
@login_required
def create_comment():
    data = request.get_json(silent=True) or {}
    game_id = data.get('game')
    text = (data.get('comment') or '').strip()
    if not game_id or not text:
        return jsonify({'error': 'Game and comment are required'}), 400

    max_length = int(current_app.config.get('COMMENT_MAX_LENGTH', 500))
    if len(text) > max_length:
        return jsonify({'error': f'Comment must be at most {max_length} characters'}), 400

    game = db.session.get(Game, game_id)
    if not game:
        return jsonify({'error': 'Game not found'}), 404

    comment = Comment(comment=text, user_id=current_user.id, game_id=game.id)
    try:
        db.session.add(comment)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[comment-create] user={current_user.id} game={game.id} failed: {exc}")
        return jsonify({'error': 'Failed to create comment'}), 500

    current_app.logger.info(f"[comment-create] comment={comment.id} user={current_user.id} game={game.id}")
    _notify(game.id)
    return jsonify(comment.to_dict()), 201


@comments.route('/<string:comment_id>', methods=['DELETE'])
@login_required
def delete_comment(comment_id):
    comment = db.session.get(Comment, comment_id)
    if not comment:
        return jsonify({'error': 'Comment not found'}), 404
    if comment.user_id != current_user.id:
        return jsonify({'error': 'Not authorized to delete this comment'}), 403

    game_id = comment.game_id
    try:
        db.session.delete(comment)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[comment-delete] comment={comment_id} failed: {exc}")
        return jsonify({'error': 'Failed to delete comment'}), 500

    current_app.logger.info(f"[comment-delete] comment={comment_id} user={current_user.id}")
    _notify(game_id)
    return jsonify({'success': True})
