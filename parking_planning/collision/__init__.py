# parking_planning/collision/__init__.py

from .config import CollisionConfig, CollisionMethod
from .checker import CollisionChecker
from .footprint import FootprintModel

__all__ = [
    "CollisionConfig",
    "CollisionMethod",
    "CollisionChecker",
    "FootprintModel"
]
