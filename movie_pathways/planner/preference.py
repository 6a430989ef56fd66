"""Movie preference points.

Ranked movies dominate: every ranked movie is worth at least
``PREFERENCE_BASE - MAX_RANK`` points while unranked movies are worth
nothing, so no number of unranked movies can outweigh a ranked one.
Among ranked movies a lower rank number is worth more.
"""

from __future__ import annotations

from ..domain.models import Movie
from ..utils import clamp_int

PREFERENCE_BASE = 100_000
MAX_RANK = 9_999


def movie_preference_points(movie: Movie) -> int:
    """Return the points ``movie`` adds to any chain it appears in."""
    if movie.rank is None:
        return 0
    return PREFERENCE_BASE - clamp_int(movie.rank, 1, MAX_RANK)
