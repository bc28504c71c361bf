# parking_planning/planning/planners/__init__.py

from .base import PlannerBase
from .hybrid_a_star import HybridAStarPlanner, HybridNode

__all__ = [
    "PlannerBase",
    "HybridAStarPlanner",
    "HybridNode",
]
