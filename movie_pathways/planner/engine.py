"""Itinerary generation.

This module wires the planner stages together:

1. Schedule building (showtimes to time-resolved shows).
2. Feasibility graph construction (pairwise transition checks).
3. Beam search over chains of shows.
4. Finalization, deduplication and global ranking.

``generate_itineraries`` is a pure function of its inputs: it holds no
state between calls, performs no I/O and always runs to completion.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..domain.models import AppState, Itinerary, Movie, Settings, Showtime, Theater
from .beam import beam_search
from .feasibility import build_feasibility_graph
from .preference import movie_preference_points
from .ranking import MAX_RESULTS_CAP, finalize_chains, rank_itineraries
from .schedule import build_scheduled_shows


def generate_itineraries(
    movies: Sequence[Movie],
    theaters: Sequence[Theater],
    showtimes: Iterable[Showtime],
    settings: Settings,
    *,
    strict: bool = False,
    max_results_cap: int = MAX_RESULTS_CAP,
) -> List[Itinerary]:
    """Plan and rank itineraries.

    Args:
        movies: Every known movie.
        theaters: Every known theater. Theater identity is all the
            planner needs, and showtimes already carry it.
        showtimes: Raw showtimes; stale or unparsable ones are skipped.
        settings: Leeway, travel time, result count and beam width.
        strict: Forbid transitions out of a show that has not ended by
            the next show's posted start.
        max_results_cap: Hard upper bound on the number of results.

    Returns:
        At most ``min(settings.max_results, max_results_cap)``
        itineraries, best first.
    """
    if min(settings.max_results, max_results_cap) <= 0 or settings.beam_width <= 0:
        return []

    shows = build_scheduled_shows(movies, showtimes)
    if not shows:
        return []

    movie_by_id = {movie.id: movie for movie in movies}
    points = [movie_preference_points(movie_by_id[show.movie_id]) for show in shows]

    graph = build_feasibility_graph(
        shows,
        settings.trailer_leeway_mins,
        settings.travel_mins,
        strict=strict,
    )
    chains = beam_search(shows, graph, points, settings.beam_width)

    return rank_itineraries(
        finalize_chains(chains, shows),
        settings.max_results,
        cap=max_results_cap,
    )


def plan_state(
    state: AppState,
    *,
    strict: bool = False,
    max_results_cap: int = MAX_RESULTS_CAP,
) -> List[Itinerary]:
    """Run ``generate_itineraries`` on a whole application state."""
    return generate_itineraries(
        state.movies,
        state.theaters,
        state.showtimes,
        state.settings,
        strict=strict,
        max_results_cap=max_results_cap,
    )
