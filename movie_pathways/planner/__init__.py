"""Itinerary planning engine.

This subpackage builds scheduled shows from raw showtimes, connects
them into a feasibility graph and searches it for the best chains a
single person could attend back to back.
"""

from .beam import Chain, beam_search
from .engine import generate_itineraries, plan_state
from .feasibility import FeasibilityGraph, build_feasibility_graph
from .preference import MAX_RANK, PREFERENCE_BASE, movie_preference_points
from .ranking import MAX_RESULTS_CAP, finalize_chains, rank_itineraries, sort_itineraries
from .schedule import build_scheduled_shows, parse_local_datetime
from .transition import Transition, can_transition

__all__ = [
    "Chain",
    "FeasibilityGraph",
    "Transition",
    "MAX_RANK",
    "MAX_RESULTS_CAP",
    "PREFERENCE_BASE",
    "beam_search",
    "build_feasibility_graph",
    "build_scheduled_shows",
    "can_transition",
    "finalize_chains",
    "generate_itineraries",
    "movie_preference_points",
    "parse_local_datetime",
    "plan_state",
    "rank_itineraries",
    "sort_itineraries",
]
