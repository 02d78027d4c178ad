"""Leaderboard domain services.

``rank`` is a pure function over already-fetched votes; ``load_votes``
is the storage side that feeds it. HTTP routes combine the two and own
rendering (rank numbers and tier labels).
"""

from .aggregator import RankedGame, ValidationError, Vote, rank, round_half_up
from .votes import load_votes

__all__ = ['RankedGame', 'ValidationError', 'Vote', 'load_votes', 'rank', 'round_half_up']
