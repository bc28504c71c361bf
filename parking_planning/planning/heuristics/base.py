# parking_planning/planning/heuristics/base.py
from abc import ABC, abstractmethod

from parking_planning.types import Pose


class Heuristic(ABC):
    @abstractmethod
    def estimate(self, current: Pose, goal: Pose) -> float:
        """统一接口：只接受当前点和目标点"""
        pass

    def prepare(self, goal: Pose) -> None:
        """每次搜索开始前调用一次，需要预计算的启发式在这里建表"""
        pass
