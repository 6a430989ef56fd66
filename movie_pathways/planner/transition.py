"""Transition feasibility between two scheduled shows.

A traveler leaving show A may catch show B when they can reach B's
theater no later than ``trailer_leeway_mins`` after B's posted start.
Travel time is only paid when the theater changes.

The ordering guard only compares start times. Two shows that overlap
on the clock therefore pass whenever the arrival deadline holds.
``strict=True`` additionally requires A to have ended by B's posted
start.
"""

from __future__ import annotations

from datetime import timedelta
from typing import NamedTuple

from ..domain.models import ScheduledShow


class Transition(NamedTuple):
    """Outcome of a transition check."""

    ok: bool
    travel_applied_mins: int


def can_transition(
    a: ScheduledShow,
    b: ScheduledShow,
    trailer_leeway_mins: int,
    travel_mins: int,
    *,
    strict: bool = False,
) -> Transition:
    """Check whether ``b`` can follow ``a``.

    Args:
        a: The show watched first.
        b: The candidate next show.
        trailer_leeway_mins: Minutes one may arrive after ``b``'s posted start.
        travel_mins: Travel minutes applied when the theaters differ.
        strict: Also require ``a`` to end before ``b`` is posted to start.

    Returns:
        Transition with the feasibility flag and the travel minutes
        applied (0 or ``travel_mins``).
    """
    if b.start < a.start:
        return Transition(False, 0)

    travel_applied = 0 if a.theater_id == b.theater_id else travel_mins
    # a.end + travel <= b.start + leeway, kept to differences so shows
    # near datetime.max can't overflow
    slack = timedelta(minutes=trailer_leeway_mins - travel_applied)
    ok = a.end - b.start <= slack
    if strict and a.end > b.start:
        ok = False
    return Transition(ok, travel_applied)
