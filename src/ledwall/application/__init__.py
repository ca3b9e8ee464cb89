"""Application layer - use cases and configuration."""

from .commands import PlanWallCommand
from .dtos import WallPlanOutput

__all__ = ["PlanWallCommand", "WallPlanOutput"]
