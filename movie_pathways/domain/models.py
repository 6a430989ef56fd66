"""Immutable domain models for Movie Pathways.

All models are frozen dataclasses with slots for memory efficiency.
These models have no external dependencies and represent the core
business concepts of the application: what the user records (movies,
theaters, showtimes, settings) and what the planner derives from it
(scheduled shows and itineraries).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

# A showtime start as recorded by a datetime-local form field
# ("YYYY-MM-DDTHH:MM"), or an already parsed datetime.
StartLocal = Union[str, datetime]


@dataclass(frozen=True, slots=True)
class Movie:
    """A movie the user may want to watch.

    Attributes:
        id: Unique movie identifier (e.g., 'mov_3f9a...')
        title: Human-readable title
        runtime_mins: Running time in minutes
        rank: Optional preference rank, 1 is most preferred. None means unranked.
    """

    id: str
    title: str
    runtime_mins: int
    rank: Optional[int] = None

    @property
    def is_ranked(self) -> bool:
        """Check if the user gave this movie a rank."""
        return self.rank is not None


@dataclass(frozen=True, slots=True)
class Theater:
    """A theater where showtimes take place."""

    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Showtime:
    """A scheduled occurrence of a movie at a theater.

    Attributes:
        id: Unique showtime identifier
        movie_id: Identifier of the movie being shown
        theater_id: Identifier of the theater showing it
        start_local: Posted wall-clock start, local time, no timezone
    """

    id: str
    movie_id: str
    theater_id: str
    start_local: StartLocal


@dataclass(frozen=True, slots=True)
class Settings:
    """Planning knobs supplied with every planning run.

    Attributes:
        trailer_leeway_mins: Minutes one may arrive after the posted start (X)
        travel_mins: Fixed travel time when switching theaters (T)
        max_results: Maximum number of itineraries returned (K)
        beam_width: Partial chains kept per search layer (W)
    """

    trailer_leeway_mins: int = 20
    travel_mins: int = 15
    max_results: int = 20
    beam_width: int = 200


@dataclass(frozen=True, slots=True)
class ScheduledShow:
    """A showtime resolved against its movie into a concrete time window.

    Built fresh on every planning run and never persisted.
    """

    showtime_id: str
    movie_id: str
    theater_id: str
    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class Itinerary:
    """A feasible chain of scheduled shows.

    Attributes:
        shows: Scheduled shows in viewing order
        preference_score: Sum of the preference points of every movie
        movie_count: Number of movies watched
        finish: End of the last show
        total_travel_mins: Travel minutes spent switching theaters
    """

    shows: tuple[ScheduledShow, ...]
    preference_score: int
    movie_count: int
    finish: datetime
    total_travel_mins: int = 0

    @property
    def start(self) -> datetime:
        """Return the start of the first show."""
        return self.shows[0].start

    @property
    def showtime_ids(self) -> tuple[str, ...]:
        """Return the ordered showtime identifiers of this itinerary."""
        return tuple(show.showtime_id for show in self.shows)


@dataclass(frozen=True, slots=True)
class AppState:
    """Everything the user has recorded, persisted as a single document.

    This is the input of a planning run: the planner reads the movies,
    theaters and showtimes together with the settings.
    """

    settings: Settings = field(default_factory=Settings)
    movies: tuple[Movie, ...] = field(default_factory=tuple)
    theaters: tuple[Theater, ...] = field(default_factory=tuple)
    showtimes: tuple[Showtime, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """Check if nothing has been recorded yet."""
        return not (self.movies or self.theaters or self.showtimes)

    @property
    def has_ranked_movies(self) -> bool:
        """Check if at least one movie carries a rank."""
        return any(movie.is_ranked for movie in self.movies)
