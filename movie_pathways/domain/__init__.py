"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    EntityNotFoundError,
    PathwaysError,
    StateStoreError,
    ValidationError,
)
from .models import (
    AppState,
    Itinerary,
    Movie,
    ScheduledShow,
    Settings,
    Showtime,
    Theater,
)

__all__ = [
    # Models
    "Movie",
    "Theater",
    "Showtime",
    "Settings",
    "ScheduledShow",
    "Itinerary",
    "AppState",
    # Errors
    "PathwaysError",
    "EntityNotFoundError",
    "ValidationError",
    "StateStoreError",
    "ConfigurationError",
]
