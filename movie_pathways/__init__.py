"""Top-level package for Movie Pathways.

Movie Pathways plans chains of movie showings, possibly across several
theaters, that one person can attend back to back, and ranks them by
how much the person wants to see each movie.

The planning engine lives in ``movie_pathways.planner``; the service,
storage and configuration layers around it make up the application.
"""

from .domain.models import AppState, Itinerary, Movie, ScheduledShow, Settings, Showtime, Theater
from .planner.engine import generate_itineraries

__all__ = [
    "AppState",
    "Itinerary",
    "Movie",
    "ScheduledShow",
    "Settings",
    "Showtime",
    "Theater",
    "generate_itineraries",
]
