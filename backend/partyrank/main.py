from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from partyrank import db
from partyrank.models import User
from partyrank.sessions import bearer_token, get_sessions

main = Blueprint('main', __name__)


def _email_from_payload(data):
    email = (data.get('email') or '').strip().lower()
    if email:
        return email
    username = (data.get('username') or '').strip()
    if username:
        return f"{username.lower()}@example.com"
    return None


@main.route('/auth/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    email = _email_from_payload(data)
    if not email:
        return jsonify({'error': 'Email is required'}), 400

    try:
        user = User.query.filter_by(email=email).first()
        if not user:
            user = User(email=email, name=email.split('@')[0])
            db.session.add(user)
            db.session.commit()
            current_app.logger.info(f"[user-create] user={user.id} email={email}")
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[login] email={email} failed: {exc}")
        return jsonify({'error': 'Failed to authenticate'}), 500

    token = get_sessions().create(user)
    return jsonify({'token': token, 'user': user.to_dict()})


@main.route('/auth/logout', methods=['POST'])
@login_required
def logout():
    get_sessions().revoke(bearer_token(request))
    return jsonify({'success': True})


@main.route('/auth/verify', methods=['GET'])
@login_required
def verify():
    return jsonify({'user': current_user.to_dict()})


@main.route('/health')
def health():
    return jsonify({'status': 'ok'})
