"""Storage adapters - Implementations of the StateRepositoryPort.

Available implementations:
- JSONStateRepository: JSON document on disk, written atomically
- InMemoryStateRepository: Process-local state for testing
"""

from .json_repository import JSONStateRepository, state_from_dict, state_to_dict
from .memory_repository import InMemoryStateRepository

__all__ = [
    "InMemoryStateRepository",
    "JSONStateRepository",
    "state_from_dict",
    "state_to_dict",
]
