from partyrank import db
from partyrank.models import Game

# (name, pack) pairs used to seed a fresh database
PARTY_GAMES = [
    ('Drawful', 'The Jackbox Party Pack'),
    ('Fibbage XL', 'The Jackbox Party Pack'),
    ('Fibbage 2', 'The Jackbox Party Pack 2'),
    ('Bidiots', 'The Jackbox Party Pack 2'),
    ('Quiplash 2', 'The Jackbox Party Pack 3'),
    ('Trivia Murder Party', 'The Jackbox Party Pack 3'),
    ('Tee K.O.', 'The Jackbox Party Pack 3'),
    ('Fibbage 3', 'The Jackbox Party Pack 4'),
    ('Survive the Internet', 'The Jackbox Party Pack 4'),
    ('Split the Room', 'The Jackbox Party Pack 5'),
    ('Mad Verse City', 'The Jackbox Party Pack 5'),
    ('Trivia Murder Party 2', 'The Jackbox Party Pack 6'),
    ('Push The Button', 'The Jackbox Party Pack 6'),
    ('Quiplash 3', 'The Jackbox Party Pack 7'),
    ("Champ'd Up", 'The Jackbox Party Pack 7'),
    ('Quiplash', None),
]


def seed_games(games=PARTY_GAMES) -> int:
    """Insert catalogue games whose names are not stored yet. Returns rows added."""
    existing = {name for (name,) in db.session.query(Game.name).all()}
    added = 0
    for name, pack in games:
        if name in existing:
            continue
        db.session.add(Game(name=name, pack=pack))
        existing.add(name)
        added += 1
    db.session.commit()
    return added
