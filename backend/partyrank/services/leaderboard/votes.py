from typing import List

from partyrank import db
from partyrank.models import Game, Score, User
from .aggregator import Vote


def load_votes() -> List[Vote]:
    """Read every stored score joined with its game name and voter.

    Rows come back in creation order so the aggregator's voter lists
    follow the order scores were first saved.
    """
    rows = (
        db.session.query(User, Game.name, Score.score)
        .join(Score, Score.user_id == User.id)
        .join(Game, Score.game_id == Game.id)
        .order_by(Score.created, Score.id)
        .all()
    )
    return [
        Vote(user=user.display_name, game_name=game_name, score=score)
        for user, game_name, score in rows
    ]
