"""Pathways service - Main orchestrator.

This service owns the application state: it validates and applies
entity edits, persists every change through the state repository and
asks the planner for ranked itineraries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, TypeVar

from ..config import PlannerConfig, get_config
from ..domain.errors import EntityNotFoundError, ValidationError
from ..domain.models import AppState, Itinerary, Movie, Settings, Showtime, StartLocal, Theater
from ..formatting import describe_itineraries
from ..planner.schedule import parse_local_datetime
from ..ports.planning import ItineraryPlannerPort
from ..ports.storage import StateRepositoryPort
from ..utils import clamp_int, new_id

E = TypeVar("E", Movie, Theater, Showtime)


def _find(entities: Sequence[E], entity_id: str, entity_type: str) -> E:
    for entity in entities:
        if entity.id == entity_id:
            return entity
    raise EntityNotFoundError(
        f"{entity_type.capitalize()} not found: {entity_id}",
        entity_type=entity_type,
        entity_id=entity_id,
    )


def _replace_entity(entities: Sequence[E], updated: E) -> tuple[E, ...]:
    return tuple(updated if entity.id == updated.id else entity for entity in entities)


def _required_text(value: str, field_name: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field_name} must not be empty", field_name=field_name)
    return text


@dataclass
class PathwaysService:
    """Main service for managing showtimes and planning itineraries.

    Attributes:
        repository: Loads and saves the application state
        planner: Plans ranked itineraries
        limits: Clamp bounds applied to user input
    """

    repository: StateRepositoryPort
    planner: ItineraryPlannerPort
    limits: PlannerConfig = field(default_factory=lambda: get_config().planner)

    _state: Optional[AppState] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> AppState:
        """Current state, loaded from the repository on first access."""
        if self._state is None:
            self._state = self.repository.load()
        return self._state

    def _commit(self, state: AppState) -> AppState:
        self.repository.save(state)
        self._state = state
        return state

    # ------------------------------------------------------------------
    # Settings

    def update_settings(
        self,
        *,
        trailer_leeway_mins: Optional[float] = None,
        travel_mins: Optional[float] = None,
        max_results: Optional[float] = None,
        beam_width: Optional[float] = None,
    ) -> Settings:
        """Change some settings, clamping each to its configured bounds."""
        current = self.state.settings
        limits = self.limits
        updated = Settings(
            trailer_leeway_mins=(
                current.trailer_leeway_mins
                if trailer_leeway_mins is None
                else clamp_int(trailer_leeway_mins, *limits.leeway_bounds)
            ),
            travel_mins=(
                current.travel_mins
                if travel_mins is None
                else clamp_int(travel_mins, *limits.travel_bounds)
            ),
            max_results=(
                current.max_results
                if max_results is None
                else clamp_int(max_results, *limits.max_results_bounds)
            ),
            beam_width=(
                current.beam_width
                if beam_width is None
                else clamp_int(beam_width, *limits.beam_width_bounds)
            ),
        )
        self._commit(replace(self.state, settings=updated))
        self._logger.info("Settings updated", extra={"settings": str(updated)})
        return updated

    def reset(self) -> AppState:
        """Drop every movie, theater and showtime and restore default settings."""
        self.repository.clear()
        state = self._commit(AppState(settings=self.limits.default_settings()))
        self._logger.info("State reset")
        return state

    # ------------------------------------------------------------------
    # Movies

    def add_movie(self, title: str, runtime_mins: float) -> Movie:
        """Add a movie.

        Raises:
            ValidationError: If the title is blank.
        """
        movie = Movie(
            id=new_id("mov"),
            title=_required_text(title, "title"),
            runtime_mins=clamp_int(runtime_mins, *self.limits.runtime_bounds),
        )
        self._commit(replace(self.state, movies=self.state.movies + (movie,)))
        self._logger.info("Movie added", extra={"movie_id": movie.id})
        return movie

    def update_movie(
        self,
        movie_id: str,
        *,
        title: Optional[str] = None,
        runtime_mins: Optional[float] = None,
        rank: Optional[float] = None,
    ) -> Movie:
        """Edit a movie. Fields left as None are unchanged.

        Raises:
            EntityNotFoundError: If the movie does not exist.
            ValidationError: If the new title is blank.
        """
        movie = _find(self.state.movies, movie_id, "movie")
        if title is not None:
            movie = replace(movie, title=_required_text(title, "title"))
        if runtime_mins is not None:
            movie = replace(
                movie, runtime_mins=clamp_int(runtime_mins, *self.limits.runtime_bounds)
            )
        if rank is not None:
            movie = replace(movie, rank=clamp_int(rank, *self.limits.rank_bounds))
        self._commit(replace(self.state, movies=_replace_entity(self.state.movies, movie)))
        return movie

    def clear_movie_rank(self, movie_id: str) -> Movie:
        """Make a movie unranked again."""
        movie = replace(_find(self.state.movies, movie_id, "movie"), rank=None)
        self._commit(replace(self.state, movies=_replace_entity(self.state.movies, movie)))
        return movie

    def delete_movie(self, movie_id: str) -> None:
        """Delete a movie together with its showtimes."""
        _find(self.state.movies, movie_id, "movie")
        state = self.state
        self._commit(
            replace(
                state,
                movies=tuple(m for m in state.movies if m.id != movie_id),
                showtimes=tuple(s for s in state.showtimes if s.movie_id != movie_id),
            )
        )
        self._logger.info("Movie deleted", extra={"movie_id": movie_id})

    # ------------------------------------------------------------------
    # Theaters

    def add_theater(self, name: str) -> Theater:
        """Add a theater.

        Raises:
            ValidationError: If the name is blank.
        """
        theater = Theater(id=new_id("the"), name=_required_text(name, "name"))
        self._commit(replace(self.state, theaters=self.state.theaters + (theater,)))
        self._logger.info("Theater added", extra={"theater_id": theater.id})
        return theater

    def update_theater(self, theater_id: str, *, name: Optional[str] = None) -> Theater:
        theater = _find(self.state.theaters, theater_id, "theater")
        if name is not None:
            theater = replace(theater, name=_required_text(name, "name"))
        self._commit(
            replace(self.state, theaters=_replace_entity(self.state.theaters, theater))
        )
        return theater

    def delete_theater(self, theater_id: str) -> None:
        """Delete a theater together with its showtimes."""
        _find(self.state.theaters, theater_id, "theater")
        state = self.state
        self._commit(
            replace(
                state,
                theaters=tuple(t for t in state.theaters if t.id != theater_id),
                showtimes=tuple(s for s in state.showtimes if s.theater_id != theater_id),
            )
        )
        self._logger.info("Theater deleted", extra={"theater_id": theater_id})

    # ------------------------------------------------------------------
    # Showtimes

    def _check_showtime(self, movie_id: str, theater_id: str, start_local: StartLocal) -> None:
        if not any(movie.id == movie_id for movie in self.state.movies):
            raise ValidationError(f"Unknown movie: {movie_id}", field_name="movie_id")
        if not any(theater.id == theater_id for theater in self.state.theaters):
            raise ValidationError(f"Unknown theater: {theater_id}", field_name="theater_id")
        if parse_local_datetime(start_local) is None:
            raise ValidationError(
                f"Invalid start time: {start_local!r}", field_name="start_local"
            )

    def add_showtime(self, movie_id: str, theater_id: str, start_local: StartLocal) -> Showtime:
        """Add a showtime for a known movie at a known theater.

        Raises:
            ValidationError: If the movie or theater is unknown, or the
                start is not a valid date-time.
        """
        self._check_showtime(movie_id, theater_id, start_local)
        showtime = Showtime(
            id=new_id("sho"),
            movie_id=movie_id,
            theater_id=theater_id,
            start_local=start_local,
        )
        self._commit(replace(self.state, showtimes=self.state.showtimes + (showtime,)))
        self._logger.info("Showtime added", extra={"showtime_id": showtime.id})
        return showtime

    def update_showtime(
        self,
        showtime_id: str,
        *,
        movie_id: Optional[str] = None,
        theater_id: Optional[str] = None,
        start_local: Optional[StartLocal] = None,
    ) -> Showtime:
        showtime = _find(self.state.showtimes, showtime_id, "showtime")
        showtime = replace(
            showtime,
            movie_id=showtime.movie_id if movie_id is None else movie_id,
            theater_id=showtime.theater_id if theater_id is None else theater_id,
            start_local=showtime.start_local if start_local is None else start_local,
        )
        self._check_showtime(showtime.movie_id, showtime.theater_id, showtime.start_local)
        self._commit(
            replace(self.state, showtimes=_replace_entity(self.state.showtimes, showtime))
        )
        return showtime

    def delete_showtime(self, showtime_id: str) -> None:
        _find(self.state.showtimes, showtime_id, "showtime")
        self._commit(
            replace(
                self.state,
                showtimes=tuple(s for s in self.state.showtimes if s.id != showtime_id),
            )
        )

    # ------------------------------------------------------------------
    # Planning

    def generate(self) -> List[Itinerary]:
        """Plan ranked itineraries for the current state."""
        return self.planner.plan(self.state)

    def describe(self, itineraries: Optional[Sequence[Itinerary]] = None) -> str:
        """Render itineraries as text, planning them first if not given."""
        if itineraries is None:
            itineraries = self.generate()
        state = self.state
        return describe_itineraries(itineraries, state.movies, state.theaters, state.settings)
