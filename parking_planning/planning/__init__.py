# parking_planning/planning/__init__.py

from .discretizer import StateDiscretizer
from .primitives import MotionPrimitive, MotionPrimitiveSet
from .reeds_shepp import path_directions, path_length, sample_poses, shortest_length, shortest_path
from .analytic import AnalyticShot, AnalyticShotGenerator

__all__ = [
    "StateDiscretizer",
    "MotionPrimitive",
    "MotionPrimitiveSet",
    "shortest_path",
    "shortest_length",
    "path_length",
    "path_directions",
    "sample_poses",
    "AnalyticShot",
    "AnalyticShotGenerator",
]
