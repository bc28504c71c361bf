# parking_planning/planning/heuristics/__init__.py

from .base import Heuristic
from .euclidean import EuclideanHeuristic
from .holonomic import HolonomicHeuristic, build_distance_field
from .reeds_shepp import ReedsSheppHeuristic
from .combined import MaxHeuristic


__all__ = [
    "Heuristic",
    "EuclideanHeuristic",
    "HolonomicHeuristic",
    "build_distance_field",
    "ReedsSheppHeuristic",
    "MaxHeuristic",
]
