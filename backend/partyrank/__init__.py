from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
import os
from config import BACKEND_ROOT, Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    origins = flask_app.config.get('CORS_ORIGINS') or '*'

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db, directory=os.path.join(BACKEND_ROOT, 'migrations'))
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from partyrank.database import configure_sqlite, ensure_sqlite_directory
    ensure_sqlite_directory(flask_app.config['SQLALCHEMY_DATABASE_URI'])
    with flask_app.app_context():
        configure_sqlite(
            db.engine,
            journal_mode=flask_app.config.get('SQLITE_JOURNAL_MODE'),
            busy_timeout_ms=flask_app.config.get('SQLITE_BUSY_TIMEOUT_MS', 5000),
        )

    from partyrank.sessions import SessionStore
    flask_app.extensions['partyrank_sessions'] = SessionStore(ttl_sec=flask_app.config.get('SESSION_TTL_SEC', 0))

    # Import and register blueprints here
    from partyrank.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from partyrank.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')
    from partyrank.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api/scores')
    from partyrank.api.comments import comments
    flask_app.register_blueprint(comments, url_prefix='/api/comments')
    from partyrank.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api')

    # Register Socket.IO event handlers
    try:
        from partyrank.socketio_events import register_socketio_handlers
        register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    except ImportError as exc:
        flask_app.logger.warning(f"SocketIO events not loaded: {exc}")

    from partyrank.models import User
    from partyrank.sessions import bearer_token, get_sessions

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    @login_manager.request_loader
    def load_user_from_request(req):
        token = bearer_token(req)
        if not token:
            return None
        session = get_sessions().get(token)
        if not session:
            return None
        return db.session.get(User, session['user_id'])

    @login_manager.unauthorized_handler
    def unauthorized():
        if bearer_token(request):
            return jsonify({'error': 'Invalid or expired session'}), 401
        return jsonify({'error': 'Unauthorized'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from partyrank.catalog import seed_games
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            count = seed_games()
            print(f'Database has been reset and seeded with {count} games!')

    @click.command('verify-db')
    def verify_db_command():
        """Checks the SQLite journal mode and busy timeout."""
        from partyrank.database import read_sqlite_settings
        expected_mode = (flask_app.config.get('SQLITE_JOURNAL_MODE') or '').lower()
        expected_timeout = int(flask_app.config.get('SQLITE_BUSY_TIMEOUT_MS', 5000))
        with flask_app.app_context():
            settings = read_sqlite_settings(db.engine)
        print('Database Configuration Verification:')
        print(f"  - Journal Mode: {settings['journal_mode']} (expected: {expected_mode})")
        print(f"  - Busy Timeout: {settings['busy_timeout']}ms (expected: {expected_timeout}ms)")
        if settings['journal_mode'] != expected_mode or settings['busy_timeout'] != expected_timeout:
            print('Database settings are NOT correctly configured!')
            raise SystemExit(1)
        print('All database settings are correctly configured for concurrency!')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(verify_db_command)

    return flask_app
