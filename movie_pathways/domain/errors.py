"""Typed domain errors for Movie Pathways.

The planning engine itself never raises: malformed input only shrinks
the candidate pool. These errors belong to the application shell
around it (entity management, persistence and configuration).

All errors inherit from PathwaysError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PathwaysError(Exception):
    """Base error for the Movie Pathways domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class EntityNotFoundError(PathwaysError):
    """A movie, theater or showtime id is unknown.

    Attributes:
        entity_type: Kind of entity looked up ('movie', 'theater', 'showtime')
        entity_id: The identifier that was not found
    """

    entity_type: str = ""
    entity_id: str = ""


@dataclass
class ValidationError(PathwaysError):
    """User-supplied entity data was rejected.

    Attributes:
        field_name: Name of the offending field
    """

    field_name: str = ""


@dataclass
class StateStoreError(PathwaysError):
    """The application state could not be persisted.

    Attributes:
        file_path: Path to the state document if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ConfigurationError(PathwaysError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
