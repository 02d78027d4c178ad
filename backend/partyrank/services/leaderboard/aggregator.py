from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Iterable, List, Mapping, Union
import math


class ValidationError(ValueError):
    """A vote handed to the aggregator is malformed."""

    def __init__(self, index: int, message: str):
        self.index = index
        self.message = message
        super().__init__(f"vote[{index}]: {message}")


@dataclass(frozen=True)
class Vote:
    user: str
    game_name: str
    score: float

    def to_dict(self):
        return {'user': self.user, 'game_name': self.game_name, 'score': self.score}


@dataclass
class RankedGame:
    name: str
    average: float
    count: int
    voters: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            'name': self.name,
            'average': self.average,
            'count': self.count,
            'voters': list(self.voters),
        }


VoteLike = Union[Vote, Mapping]


def round_half_up(value: float, places: int = 1) -> float:
    """Round half away from zero on the shortest decimal repr of ``value``.

    ``round()`` works on the binary float and rounds half to even, so
    ``round(8.05, 1) == 8.0``; this returns ``8.1``.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def format_score(score) -> str:
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def _coerce_vote(index: int, raw: VoteLike) -> Vote:
    if isinstance(raw, Vote):
        user, game_name, score = raw.user, raw.game_name, raw.score
    elif isinstance(raw, Mapping):
        user = raw.get('user')
        game_name = raw.get('game_name') or raw.get('gameName')
        score = raw.get('score')
    else:
        raise ValidationError(index, f"expected a Vote or mapping, got {type(raw).__name__}")

    if not isinstance(user, str) or not user.strip():
        raise ValidationError(index, "user is missing or empty")
    if not isinstance(game_name, str) or not game_name.strip():
        raise ValidationError(index, "game_name is missing or empty")
    # bool is a Real subclass; True is not a score
    if isinstance(score, bool) or not isinstance(score, Real):
        raise ValidationError(index, f"score must be a number, got {score!r}")
    if not math.isfinite(score):
        raise ValidationError(index, f"score must be finite, got {score!r}")
    if score < 0:
        raise ValidationError(index, f"score must be non-negative, got {score!r}")
    # Fraction and numpy scalars reduce to a plain float
    return Vote(user=user, game_name=game_name, score=float(score))


def rank(votes: Iterable[VoteLike]) -> List[RankedGame]:
    """Aggregate votes per game name and rank by average, best first.

    Votes scoring ``0`` are "not rated" and skipped. Games with equal
    averages keep the order in which their first vote was seen.

    Raises:
        ValidationError: a vote has a missing user or game name, or a
            score that is non-numeric, negative, NaN or infinite.
    """
    # dict preserves first-seen order of game names
    stats = {}
    for index, raw in enumerate(votes):
        vote = _coerce_vote(index, raw)
        if vote.score == 0:
            continue
        entry = stats.setdefault(vote.game_name, {'total': 0, 'count': 0, 'voters': []})
        entry['total'] += vote.score
        entry['count'] += 1
        entry['voters'].append(f"{vote.user} ({format_score(vote.score)})")

    ranked = [
        RankedGame(
            name=name,
            average=round_half_up(entry['total'] / entry['count'], 1),
            count=entry['count'],
            voters=entry['voters'],
        )
        for name, entry in stats.items()
    ]
    # sorted() is stable, so ties keep first-seen order
    return sorted(ranked, key=lambda game: game.average, reverse=True)
