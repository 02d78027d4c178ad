import os
import sys
import pytest

# Ensure the backend root (containing the `partyrank` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from partyrank import create_app, db, socketio


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_TTL_SEC = 0
    SCORE_MAX = 10
    COMMENT_MAX_LENGTH = 500


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import partyrank.models  # noqa: F401
        db.create_all()
    # Requests must each get a fresh app context so Flask-Login's cached
    # user on `g` does not leak between calls with different tokens
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


def login(client, username):
    res = client.post('/api/auth/login', json={'username': username})
    assert res.status_code == 200
    data = res.get_json()
    return {'Authorization': f"Bearer {data['token']}"}, data['user']


@pytest.fixture()
def auth_headers(client):
    headers, _ = login(client, 'alice')
    return headers


@pytest.fixture()
def make_game(flask_app):
    from partyrank.models import Game

    def _make(name, pack=None):
        with flask_app.app_context():
            game = Game(name=name, pack=pack)
            db.session.add(game)
            db.session.commit()
            return game.id

    return _make
