"""Human-readable rendering of itineraries."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Mapping, Sequence

from .domain.models import Itinerary, Movie, Settings, Theater


def format_time(dt: datetime) -> str:
    """Format a clock time like ``7:05 PM``."""
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour}:{dt.minute:02d} {suffix}"


def format_date(dt: datetime) -> str:
    """Format a date like ``May 1, 2024``."""
    return f"{dt:%b} {dt.day}, {dt.year}"


def ranking_hint(movies: Sequence[Movie]) -> str:
    """Explain what the result ordering favors for these movies."""
    base = "Sorted by preference score, then movie count, then earliest finish."
    if any(movie.is_ranked for movie in movies):
        return f"{base} (You have ranked movies.)"
    return f"{base} (No rankings set: prioritizing max movie count.)"


def describe_itinerary(
    itinerary: Itinerary,
    movies: Mapping[str, Movie],
    theaters: Mapping[str, Theater],
    settings: Settings,
) -> str:
    """Render one itinerary as a header line followed by one block per show.

    Args:
        itinerary: The itinerary to render.
        movies: Movies by id, for titles.
        theaters: Theaters by id, for names.
        settings: Settings of the run, for leeway and travel notes.
    """
    first, last = itinerary.shows[0], itinerary.shows[-1]
    lines: List[str] = [
        f"[{itinerary.movie_count} movies | pref: {itinerary.preference_score} | "
        f"travel: {itinerary.total_travel_mins}m] "
        f"{format_date(first.start)} {format_time(first.start)} -> {format_time(last.end)}"
    ]

    leeway = timedelta(minutes=settings.trailer_leeway_mins)
    for i, show in enumerate(itinerary.shows):
        movie = movies.get(show.movie_id)
        theater = theaters.get(show.theater_id)
        title = movie.title if movie else "Unknown movie"
        theater_name = theater.name if theater else "Unknown theater"

        detail = (
            f"    {theater_name} - {format_time(show.start)}-{format_time(show.end)}"
            f" - posted {format_time(show.start)}"
        )
        if settings.trailer_leeway_mins > 0:
            detail += f" (arrive by {format_time(show.start + leeway)})"

        lines.append(f"  {i + 1}. {title}")
        lines.append(detail)

        if i < len(itinerary.shows) - 1:
            if show.theater_id == itinerary.shows[i + 1].theater_id:
                lines.append("    Next: same theater (0m travel)")
            else:
                lines.append(f"    Next: switch theaters (+{settings.travel_mins}m travel)")

    return "\n".join(lines)


def describe_itineraries(
    itineraries: Sequence[Itinerary],
    movies: Sequence[Movie],
    theaters: Sequence[Theater],
    settings: Settings,
) -> str:
    """Render a ranked result list, or a hint when it is empty."""
    if not itineraries:
        return "Add movies, theaters, and showtimes to generate itineraries."

    movie_by_id = {movie.id: movie for movie in movies}
    theater_by_id = {theater.id: theater for theater in theaters}
    blocks = [ranking_hint(movies)]
    blocks.extend(
        f"#{rank}\n{describe_itinerary(it, movie_by_id, theater_by_id, settings)}"
        for rank, it in enumerate(itineraries, start=1)
    )
    return "\n\n".join(blocks)
