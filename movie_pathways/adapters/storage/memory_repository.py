"""In-memory state repository for testing.

Keeps the last saved state in process memory. Nothing survives the
process, which keeps tests isolated from each other and from the
user's real state file.

Example:
    @pytest.fixture
    def service():
        return PathwaysService(InMemoryStateRepository(), BeamSearchPlanner())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...domain.models import AppState, Settings


@dataclass
class InMemoryStateRepository:
    """State repository that never touches the filesystem.

    This repository implements the StateRepositoryPort protocol.
    """

    default_settings: Settings = field(default_factory=Settings)
    _state: Optional[AppState] = field(default=None, repr=False)
    saves: int = field(default=0, repr=False)

    def load(self) -> AppState:
        """Return the last saved state, or a default one."""
        if self._state is None:
            return AppState(settings=self.default_settings)
        return self._state

    def save(self, state: AppState) -> None:
        self._state = state
        self.saves += 1

    def clear(self) -> bool:
        had_state = self._state is not None
        self._state = None
        return had_state
