"""Storage port - Abstraction for persisting the application state.

The whole state (settings, movies, theaters, showtimes) is one document
saved under an application-chosen key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import AppState


class StateRepositoryPort(Protocol):
    """Port for loading and saving the application state.

    Implementations:
    - adapters/storage/json_repository.py (JSONStateRepository) - Production
    - adapters/storage/memory_repository.py (InMemoryStateRepository) - Testing
    """

    def load(self) -> AppState:
        """Load the stored state.

        Returns:
            The stored state, or a fresh default state if nothing usable
            is stored.
        """
        ...

    def save(self, state: AppState) -> None:
        """Persist the state, replacing what was stored.

        Args:
            state: The state to store.

        Raises:
            StateStoreError: If the state cannot be written.
        """
        ...

    def clear(self) -> bool:
        """Remove the stored state.

        Returns:
            True if something was stored and has been removed.
        """
        ...
