"""Itinerary finalization and global ranking."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set, Tuple

from ..domain.models import Itinerary, ScheduledShow
from .beam import Chain

MAX_RESULTS_CAP = 200


def finalize_chains(
    chains: Iterable[Chain], shows: Sequence[ScheduledShow]
) -> List[Itinerary]:
    """Turn chains into itineraries, dropping repeated show sequences.

    Two chains are duplicates when they visit the same showtimes in the
    same order; the first one seen is kept.
    """
    seen: Set[Tuple[str, ...]] = set()
    itineraries: List[Itinerary] = []

    for chain in chains:
        visited = tuple(shows[i] for i in chain.indices())
        key = tuple(show.showtime_id for show in visited)
        if key in seen:
            continue
        seen.add(key)
        itineraries.append(
            Itinerary(
                shows=visited,
                preference_score=chain.preference_score,
                movie_count=chain.length,
                finish=visited[-1].end,
                total_travel_mins=chain.total_travel_mins,
            )
        )

    return itineraries


def sort_itineraries(itineraries: Iterable[Itinerary]) -> List[Itinerary]:
    """Best first: preference desc, movie count desc, earliest finish."""
    return sorted(
        itineraries,
        key=lambda it: (-it.preference_score, -it.movie_count, it.finish),
    )


def rank_itineraries(
    itineraries: Iterable[Itinerary],
    max_results: int,
    cap: int = MAX_RESULTS_CAP,
) -> List[Itinerary]:
    """Sort and keep the top ``min(max_results, cap)`` itineraries."""
    limit = min(max_results, cap)
    if limit <= 0:
        return []
    return sort_itineraries(itineraries)[:limit]
