# parking_planning/planning/planners/base.py
from abc import ABC, abstractmethod
from typing import Callable, Optional

from parking_planning.types import Pose, SearchResult
from parking_planning.visualization.debugger import IDebugger


class PlannerBase(ABC):
    """
    所有路径规划器的抽象基类
    """

    @abstractmethod
    def plan(self,
             start: Pose,
             goal: Pose,
             debugger: Optional[IDebugger] = None,
             should_stop: Optional[Callable[[], bool]] = None) -> SearchResult:
        """
        执行路径规划
        :param start: 起点位姿
        :param goal: 目标位姿
        :param debugger: 调试器钩子 (用于可视化搜索过程)
        :param should_stop: 外部取消回调，返回 True 时提前结束
        :return: SearchResult，失败时 status 说明原因
        """
        pass
