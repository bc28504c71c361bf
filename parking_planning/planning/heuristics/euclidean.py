# parking_planning/planning/heuristics/euclidean.py
import math

from parking_planning.types import Pose
from .base import Heuristic


class EuclideanHeuristic(Heuristic):
    """
    欧氏距离启发式
    忽略障碍物和运动学约束，作为 RS 启发式超出计算范围后的兜底 (可采纳但偏松)
    """
    def estimate(self, current: Pose, goal: Pose) -> float:
        return math.hypot(current.x - goal.x, current.y - goal.y)
