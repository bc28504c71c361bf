# parking_planning/planning/heuristics/combined.py
from typing import Sequence

from parking_planning.types import Pose
from .base import Heuristic


class MaxHeuristic(Heuristic):
    """多个启发式取最大值，各自可采纳则结果仍可采纳"""
    def __init__(self, heuristics: Sequence[Heuristic]):
        if not heuristics:
            raise ValueError("MaxHeuristic needs at least one heuristic")
        self.heuristics = list(heuristics)

    def prepare(self, goal: Pose) -> None:
        for heuristic in self.heuristics:
            heuristic.prepare(goal)

    def estimate(self, current: Pose, goal: Pose) -> float:
        return max(heuristic.estimate(current, goal) for heuristic in self.heuristics)
