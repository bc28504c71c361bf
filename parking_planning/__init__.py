# parking_planning/__init__.py
"""Hybrid A* kinodynamic path planner for low-speed parking manoeuvres."""

from .types import Cell, Direction, Pose, SearchResult, SearchStatus, wrap_angle
from .errors import ConfigurationError, PlannerError, PlannerStateError
from .config import PlannerConfig
from .planner import KinodynamicPlanner, PlannerState
from .flow import PlanningFlow

__all__ = [
    "Cell",
    "Direction",
    "Pose",
    "SearchResult",
    "SearchStatus",
    "wrap_angle",
    "ConfigurationError",
    "PlannerError",
    "PlannerStateError",
    "PlannerConfig",
    "KinodynamicPlanner",
    "PlannerState",
    "PlanningFlow",
]
