"""Beam search over chains of scheduled shows.

The search runs layer by layer, one layer per chain length. Layer one
holds a chain for every show. Each layer is emitted as a set of finished
candidates (short itineraries are valid results), then every chain is
extended along the feasibility graph and only the best ``beam_width``
extensions survive into the next layer.

Pruning is greedy: with a beam narrower than the real branching factor
the best itinerary overall may be missed.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..domain.models import ScheduledShow
from .feasibility import FeasibilityGraph


@dataclass(frozen=True, slots=True)
class Chain:
    """A partial itinerary.

    The visited shows form a persistent linked list through ``parent``
    so extending a chain never copies its prefix. Movies and showtimes
    already used are integer bitmasks over compact indices.
    """

    last: int
    parent: Optional[Chain]
    length: int
    preference_score: int
    total_travel_mins: int
    movie_mask: int
    showtime_mask: int

    def indices(self) -> List[int]:
        """Return the show positions of this chain, first to last."""
        out: List[int] = []
        node: Optional[Chain] = self
        while node is not None:
            out.append(node.last)
            node = node.parent
        out.reverse()
        return out


def _compact_bits(keys: Sequence[str]) -> List[int]:
    """Map each key to a single bit, equal keys sharing the same bit."""
    index: Dict[str, int] = {}
    return [1 << index.setdefault(key, len(index)) for key in keys]


def beam_search(
    shows: Sequence[ScheduledShow],
    graph: FeasibilityGraph,
    points: Sequence[int],
    beam_width: int,
) -> Iterator[Chain]:
    """Yield every chain that made it into a beam.

    Parameters
    ----------
    shows:
        Scheduled shows sorted by start.
    graph:
        Feasible transitions between positions in ``shows``.
    points:
        Preference points of the movie of each show.
    beam_width:
        Maximum number of chains carried from one layer to the next.

    Yields
    ------
    Chain
        Layer by layer, in beam order. The same show sequence may be
        yielded more than once; deduplication is the caller's job.
    """
    n = len(shows)
    movie_bits = _compact_bits([show.movie_id for show in shows])
    showtime_bits = _compact_bits([show.showtime_id for show in shows])

    def rank_key(chain: Chain) -> Tuple[int, int, datetime, int]:
        return (
            -chain.preference_score,
            -chain.length,
            shows[chain.last].end,
            chain.total_travel_mins,
        )

    beam = [
        Chain(
            last=i,
            parent=None,
            length=1,
            preference_score=points[i],
            total_travel_mins=0,
            movie_mask=movie_bits[i],
            showtime_mask=showtime_bits[i],
        )
        for i in range(n)
    ]

    for _ in range(n):
        yield from beam

        expanded: List[Chain] = []
        for chain in beam:
            for j, travel in graph.successors(chain.last):
                if chain.showtime_mask & showtime_bits[j]:
                    continue
                if chain.movie_mask & movie_bits[j]:
                    continue
                expanded.append(
                    Chain(
                        last=j,
                        parent=chain,
                        length=chain.length + 1,
                        preference_score=chain.preference_score + points[j],
                        total_travel_mins=chain.total_travel_mins + travel,
                        movie_mask=chain.movie_mask | movie_bits[j],
                        showtime_mask=chain.showtime_mask | showtime_bits[j],
                    )
                )

        if not expanded:
            break

        # nsmallest is stable, so ties keep expansion order
        beam = heapq.nsmallest(beam_width, expanded, key=rank_key)
