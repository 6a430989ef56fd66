"""Scheduled show construction.

This module turns raw showtimes into time-resolved ``ScheduledShow``
values sorted by start. A showtime is dropped, never reported, when
its movie is gone, its start cannot be parsed or its end would fall
past ``datetime.max``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from ..domain.models import Movie, ScheduledShow, Showtime, StartLocal


def parse_local_datetime(value: Optional[StartLocal]) -> Optional[datetime]:
    """Parse a ``YYYY-MM-DDTHH:MM`` local timestamp.

    Parameters
    ----------
    value:
        The recorded start, either an ISO 8601 string or a datetime.

    Returns
    -------
    datetime or None
        A naive local datetime, or ``None`` when the value is not a
        valid date-time. Offset-aware values are converted to local
        time so every start in a run compares on the same footing.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def build_scheduled_shows(
    movies: Iterable[Movie], showtimes: Iterable[Showtime]
) -> List[ScheduledShow]:
    """Resolve showtimes into scheduled shows sorted by start.

    Ties keep the input order of the showtimes.
    """
    movie_by_id = {movie.id: movie for movie in movies}
    shows: List[ScheduledShow] = []

    for showtime in showtimes:
        movie = movie_by_id.get(showtime.movie_id)
        if movie is None:
            continue
        start = parse_local_datetime(showtime.start_local)
        if start is None:
            continue
        try:
            end = start + timedelta(minutes=movie.runtime_mins)
        except OverflowError:
            continue
        shows.append(
            ScheduledShow(
                showtime_id=showtime.id,
                movie_id=showtime.movie_id,
                theater_id=showtime.theater_id,
                start=start,
                end=end,
            )
        )

    shows.sort(key=lambda show: show.start)
    return shows
