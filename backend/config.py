import os

BACKEND_ROOT = os.path.abspath(os.path.dirname(__file__))
DEFAULT_DB_PATH = os.path.join(BACKEND_ROOT, 'data', 'partyrank.db')


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + (os.environ.get('DB_PATH') or DEFAULT_DB_PATH)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # SQLite concurrency settings applied on every new connection
    SQLITE_JOURNAL_MODE = os.environ.get('SQLITE_JOURNAL_MODE', 'WAL')
    SQLITE_BUSY_TIMEOUT_MS = int(os.environ.get('SQLITE_BUSY_TIMEOUT_MS', '5000'))
    # Highest accepted score; 0 always means "unscored"
    SCORE_MAX = float(os.environ.get('SCORE_MAX', '10'))
    COMMENT_MAX_LENGTH = int(os.environ.get('COMMENT_MAX_LENGTH', '500'))
    # Bearer token lifetime (seconds). 0 disables expiry.
    SESSION_TTL_SEC = int(os.environ.get('SESSION_TTL_SEC', '0'))
    CORS_ORIGINS = _csv(os.environ.get('CORS_ORIGINS', '')) or [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    PORT = int(os.environ.get('PORT', '3000'))
