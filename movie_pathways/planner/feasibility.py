"""Forward feasibility graph over scheduled shows.

Nodes are positions in the start-sorted show list. An edge ``i -> j``
(always ``i < j``) means show ``j`` can follow show ``i``. Edges are
stored in compressed form: the successors of ``i`` are
``targets[offsets[i]:offsets[i + 1]]`` with matching ``costs``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from ..domain.models import ScheduledShow
from .transition import can_transition


@dataclass(frozen=True, slots=True)
class FeasibilityGraph:
    """Compressed adjacency of feasible transitions."""

    offsets: Sequence[int]
    targets: Sequence[int]
    costs: Sequence[int]

    @property
    def num_nodes(self) -> int:
        return len(self.offsets) - 1

    @property
    def num_edges(self) -> int:
        return len(self.targets)

    def successors(self, node: int) -> Iterator[Tuple[int, int]]:
        """Yield ``(target, travel_mins)`` pairs leaving ``node``."""
        lo, hi = self.offsets[node], self.offsets[node + 1]
        for k in range(lo, hi):
            yield self.targets[k], self.costs[k]


def build_feasibility_graph(
    shows: Sequence[ScheduledShow],
    trailer_leeway_mins: int,
    travel_mins: int,
    *,
    strict: bool = False,
) -> FeasibilityGraph:
    """Evaluate every ordered pair of shows once.

    This is the quadratic part of a planning run.
    """
    n = len(shows)
    offsets: List[int] = [0]
    targets: List[int] = []
    costs: List[int] = []

    for i in range(n):
        a = shows[i]
        for j in range(i + 1, n):
            transition = can_transition(
                a, shows[j], trailer_leeway_mins, travel_mins, strict=strict
            )
            if transition.ok:
                targets.append(j)
                costs.append(transition.travel_applied_mins)
        offsets.append(len(targets))

    return FeasibilityGraph(offsets=offsets, targets=targets, costs=costs)
