"""Services layer - Application orchestration.

Available services:
- PathwaysService: Entity management, persistence and planning
"""

from .pathways import PathwaysService

__all__ = ["PathwaysService"]
