# RS 曲线距离 (Hybrid A*)
# parking_planning/planning/heuristics/reeds_shepp.py
from typing import Optional

from parking_planning.planning.reeds_shepp import shortest_length
from parking_planning.types import Pose
from .base import Heuristic
from .euclidean import EuclideanHeuristic


class ReedsSheppHeuristic(Heuristic):
    """
    无障碍 + 非完整约束的下界：最短 Reeds-Shepp 曲线长度 (rsplan 求解)。
    距离目标超过 max_range 时 RS 长度与欧氏距离差别很小，直接退化为欧氏距离。
    """
    def __init__(self, turning_radius: float, max_range: Optional[float] = None,
                 step_size: float = 1.0):
        # [关键] 依赖的信息在这里注入，Planner 根本不需要知道 radius 的存在
        self.radius = turning_radius
        self.max_range = max_range
        # 只要长度，离散步长取粗一些
        self.step_size = step_size
        self._fallback = EuclideanHeuristic()

    def estimate(self, current: Pose, goal: Pose) -> float:
        euclidean = self._fallback.estimate(current, goal)
        if self.max_range is not None and euclidean > self.max_range:
            return euclidean

        length = shortest_length(current, goal, self.radius, self.step_size)
        if length is None:
            return euclidean
        return length
