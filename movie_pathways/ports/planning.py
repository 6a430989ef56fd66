"""Planning port - Abstraction for itinerary generation."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import AppState, Itinerary


class ItineraryPlannerPort(Protocol):
    """Port for itinerary planning.

    Wraps: planner/engine.py (generate_itineraries)
    Implementation: adapters/planning/beam_planner.py

    A planner is stateless: the same state always yields the same
    ranked itineraries.
    """

    def plan(self, state: AppState) -> List[Itinerary]:
        """Plan ranked itineraries for the recorded showtimes.

        Args:
            state: Movies, theaters, showtimes and settings.

        Returns:
            Itineraries, best first.
        """
        ...
