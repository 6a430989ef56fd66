"""JSON file state repository adapter.

The application state is stored as a single JSON document named after
the configured state key. Loading is forgiving:
- a missing file yields the default state
- a corrupt file is logged and yields the default state
- entries with the wrong shape are dropped
- stored settings are merged over the defaults

Writes go to a temporary file first and then replace the document.
"""

from __future__ import annotations

import json
import logging
import math
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from ...config import StorageConfig, get_config
from ...domain.errors import StateStoreError
from ...domain.models import AppState, Movie, Settings, Showtime, Theater

_SETTINGS_FIELDS = ("trailer_leeway_mins", "travel_mins", "max_results", "beam_width")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # json accepts NaN and Infinity
    return math.isfinite(value)


def state_to_dict(state: AppState) -> Dict[str, Any]:
    """Serialize a state into plain JSON types."""
    return {
        "settings": {name: getattr(state.settings, name) for name in _SETTINGS_FIELDS},
        "movies": [
            {
                "id": movie.id,
                "title": movie.title,
                "runtime_mins": movie.runtime_mins,
                "rank": movie.rank,
            }
            for movie in state.movies
        ],
        "theaters": [{"id": theater.id, "name": theater.name} for theater in state.theaters],
        "showtimes": [
            {
                "id": showtime.id,
                "movie_id": showtime.movie_id,
                "theater_id": showtime.theater_id,
                "start_local": (
                    showtime.start_local.isoformat()
                    if isinstance(showtime.start_local, datetime)
                    else showtime.start_local
                ),
            }
            for showtime in state.showtimes
        ],
    }


def _settings_from(raw: Any, defaults: Settings) -> Settings:
    if not isinstance(raw, Mapping):
        return defaults
    values = {
        name: int(raw[name]) if _is_number(raw.get(name)) else getattr(defaults, name)
        for name in _SETTINGS_FIELDS
    }
    return Settings(**values)


def _movie_from(raw: Any) -> Optional[Movie]:
    if not isinstance(raw, Mapping):
        return None
    movie_id, title, runtime = raw.get("id"), raw.get("title"), raw.get("runtime_mins")
    if not isinstance(movie_id, str) or not isinstance(title, str) or not _is_number(runtime):
        return None
    rank = raw.get("rank")
    return Movie(
        id=movie_id,
        title=title,
        runtime_mins=int(runtime),
        rank=int(rank) if _is_number(rank) else None,
    )


def _theater_from(raw: Any) -> Optional[Theater]:
    if not isinstance(raw, Mapping):
        return None
    theater_id, name = raw.get("id"), raw.get("name")
    if not isinstance(theater_id, str) or not isinstance(name, str):
        return None
    return Theater(id=theater_id, name=name)


def _showtime_from(raw: Any) -> Optional[Showtime]:
    if not isinstance(raw, Mapping):
        return None
    fields_ = (raw.get("id"), raw.get("movie_id"), raw.get("theater_id"), raw.get("start_local"))
    if not all(isinstance(value, str) for value in fields_):
        return None
    showtime_id, movie_id, theater_id, start_local = fields_
    return Showtime(
        id=showtime_id,
        movie_id=movie_id,
        theater_id=theater_id,
        start_local=start_local,
    )


def _entries(raw: Any) -> List[Any]:
    return raw if isinstance(raw, list) else []


def state_from_dict(raw: Mapping[str, Any], defaults: Settings) -> AppState:
    """Rebuild a state from a parsed JSON document, dropping bad entries."""
    movies = (_movie_from(item) for item in _entries(raw.get("movies")))
    theaters = (_theater_from(item) for item in _entries(raw.get("theaters")))
    showtimes = (_showtime_from(item) for item in _entries(raw.get("showtimes")))
    return AppState(
        settings=_settings_from(raw.get("settings"), defaults),
        movies=tuple(m for m in movies if m is not None),
        theaters=tuple(t for t in theaters if t is not None),
        showtimes=tuple(s for s in showtimes if s is not None),
    )


@dataclass
class JSONStateRepository:
    """State repository backed by a JSON file.

    This adapter implements StateRepositoryPort.

    Attributes:
        config: Storage configuration (directory, state key)
        default_settings: Settings used when nothing usable is stored
    """

    config: StorageConfig = field(default_factory=lambda: get_config().storage)
    default_settings: Settings = field(
        default_factory=lambda: get_config().planner.default_settings()
    )
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def default_state(self) -> AppState:
        return AppState(settings=self.default_settings)

    def load(self) -> AppState:
        """Load the state document.

        Returns:
            The stored state, or the default state when the document is
            missing or unreadable.
        """
        path = self.config.state_path
        with self._lock:
            if not path.exists():
                self._logger.debug("No stored state", extra={"path": str(path)})
                return self.default_state()

            try:
                raw = json.loads(path.read_text("utf-8"))
            except (OSError, ValueError) as e:
                self._logger.warning(
                    "Stored state unreadable, using defaults",
                    extra={"path": str(path), "error": str(e)},
                )
                return self.default_state()

        if not isinstance(raw, dict):
            self._logger.warning(
                "Stored state is not an object, using defaults",
                extra={"path": str(path)},
            )
            return self.default_state()

        state = state_from_dict(raw, self.default_settings)
        self._logger.info(
            "State loaded",
            extra={
                "movies": len(state.movies),
                "theaters": len(state.theaters),
                "showtimes": len(state.showtimes),
            },
        )
        return state

    def save(self, state: AppState) -> None:
        """Write the state document atomically.

        Raises:
            StateStoreError: If the document cannot be written.
        """
        path = self.config.state_path
        payload = json.dumps(state_to_dict(state), ensure_ascii=False, indent=2)
        tmp_path = path.with_name(f"{path.name}.tmp")

        with self._lock:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                tmp_path.write_text(payload, "utf-8")
                os.replace(tmp_path, path)
            except OSError as e:
                raise StateStoreError(
                    f"Failed to save state: {e}",
                    file_path=str(path),
                    cause=e,
                )

        self._logger.debug("State saved", extra={"path": str(path)})

    def clear(self) -> bool:
        """Delete the state document if present."""
        path = self.config.state_path
        with self._lock:
            if not path.exists():
                return False
            try:
                path.unlink()
            except OSError as e:
                raise StateStoreError(
                    f"Failed to clear state: {e}",
                    file_path=str(path),
                    cause=e,
                )
        self._logger.info("State cleared", extra={"path": str(path)})
        return True
