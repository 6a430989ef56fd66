"""Beam search planner adapter.

This adapter wraps the planning engine and adds:
- Configuration injection (strict transitions, result cap)
- Logging with timing and counts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import List

from ...config import PlannerConfig, get_config
from ...domain.models import AppState, Itinerary
from ...planner.engine import plan_state


@dataclass
class BeamSearchPlanner:
    """Itinerary planner backed by the beam search engine.

    This adapter implements ItineraryPlannerPort.

    Attributes:
        config: Planner configuration
    """

    config: PlannerConfig = field(default_factory=lambda: get_config().planner)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def plan(self, state: AppState) -> List[Itinerary]:
        """Plan ranked itineraries for ``state``.

        Args:
            state: Movies, theaters, showtimes and settings.

        Returns:
            Itineraries, best first.
        """
        settings = state.settings
        self._logger.debug(
            "Planning itineraries",
            extra={
                "showtimes": len(state.showtimes),
                "leeway_mins": settings.trailer_leeway_mins,
                "travel_mins": settings.travel_mins,
                "max_results": settings.max_results,
                "beam_width": settings.beam_width,
                "strict": self.config.strict_transitions,
            },
        )

        started = perf_counter()
        itineraries = plan_state(
            state,
            strict=self.config.strict_transitions,
            max_results_cap=self.config.max_results_cap,
        )
        duration_ms = int((perf_counter() - started) * 1000)

        self._logger.info(
            "Itineraries planned",
            extra={
                "showtimes": len(state.showtimes),
                "results": len(itineraries),
                "best_score": itineraries[0].preference_score if itineraries else None,
                "duration_ms": duration_ms,
            },
        )
        return itineraries
