import secrets
import time
from typing import Any, Dict, Optional

from flask import current_app


class SessionStore:
    """In-memory bearer token map: token -> {'user_id', 'email', 'created_at'}."""

    def __init__(self, ttl_sec: int = 0, clock=time.time):
        self.ttl_sec = int(ttl_sec or 0)
        self._clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create(self, user) -> str:
        token = secrets.token_hex(32)
        self._sessions[token] = {
            'user_id': user.id,
            'email': user.email,
            'created_at': self._clock(),
        }
        return token

    def get(self, token: str) -> Optional[Dict[str, Any]]:
        session = self._sessions.get(token)
        if session is None:
            return None
        if self.ttl_sec > 0 and self._clock() - session['created_at'] > self.ttl_sec:
            self._sessions.pop(token, None)
            return None
        return session

    def revoke(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def __len__(self):
        return len(self._sessions)


def get_sessions() -> SessionStore:
    return current_app.extensions['partyrank_sessions']


def bearer_token(req) -> Optional[str]:
    header = req.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    return header[len('Bearer '):].strip() or None
