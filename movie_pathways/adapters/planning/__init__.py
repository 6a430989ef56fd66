"""Planning adapters - Implementations of the ItineraryPlannerPort.

Available implementations:
- BeamSearchPlanner: Layered beam search over feasible showtime chains
"""

from .beam_planner import BeamSearchPlanner

__all__ = ["BeamSearchPlanner"]
