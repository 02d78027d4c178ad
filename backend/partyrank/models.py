from partyrank import db
from flask_login import UserMixin
from datetime import datetime, timezone
import secrets


def generate_id():
    """Generate a short random record id (15 hex characters)."""
    return secrets.token_hex(8)[:15]


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class TimestampMixin:
    created = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.String(15), primary_key=True, default=generate_id)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(64), nullable=True)
    scores = db.relationship('Score', back_populates='user', lazy='dynamic')
    comments = db.relationship('Comment', back_populates='user', lazy='dynamic')

    @property
    def display_name(self):
        return self.name or self.id[:8]

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
        }


class Game(TimestampMixin, db.Model):
    __tablename__ = 'game'
    id = db.Column(db.String(15), primary_key=True, default=generate_id)
    name = db.Column(db.String(128), nullable=False, index=True)
    pack = db.Column(db.String(128), nullable=True)
    img = db.Column(db.String(512), nullable=True)
    scores = db.relationship('Score', back_populates='game', lazy='dynamic')
    comments = db.relationship('Comment', back_populates='game', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'pack': self.pack,
            'img': self.img,
            'created': _iso(self.created),
            'updated': _iso(self.updated),
        }


class Score(TimestampMixin, db.Model):
    __tablename__ = 'score'
    __table_args__ = (db.UniqueConstraint('user_id', 'game_id', name='uq_score_user_game'),)
    id = db.Column(db.String(15), primary_key=True, default=generate_id)
    user_id = db.Column(db.String(15), db.ForeignKey('user.id'), nullable=False, index=True)
    game_id = db.Column(db.String(15), db.ForeignKey('game.id'), nullable=False, index=True)
    score = db.Column(db.Float, nullable=False, default=0)
    user = db.relationship('User', back_populates='scores')
    game = db.relationship('Game', back_populates='scores')

    def to_dict(self):
        return {
            'id': self.id,
            'user': self.user_id,
            'game': self.game_id,
            'score': self.score,
            'created': _iso(self.created),
            'updated': _iso(self.updated),
        }


class Comment(TimestampMixin, db.Model):
    __tablename__ = 'comment'
    id = db.Column(db.String(15), primary_key=True, default=generate_id)
    comment = db.Column(db.Text, nullable=False)
    user_id = db.Column(db.String(15), db.ForeignKey('user.id'), nullable=False, index=True)
    game_id = db.Column(db.String(15), db.ForeignKey('game.id'), nullable=False, index=True)
    user = db.relationship('User', back_populates='comments')
    game = db.relationship('Game', back_populates='comments')

    def to_dict(self):
        # Author is embedded under `expand` so clients need no second lookup
        return {
            'id': self.id,
            'comment': self.comment,
            'user': self.user_id,
            'game': self.game_id,
            'created': _iso(self.created),
            'updated': _iso(self.updated),
            'expand': {
                'user': self.user.to_dict() if self.user else None,
            },
        }
