# parking_planning/visualization/__init__.py

from .debugger import IDebugger, NoOpDebugger, PlanningDebugger
from .observers import DebugObserver, EfficientObserver

__all__ = [
    "IDebugger",
    "NoOpDebugger",
    "PlanningDebugger",
    "DebugObserver",
    "EfficientObserver",
]
