# parking_planning/flow.py
import logging
from collections import deque
from typing import Deque, List, Optional

from parking_planning.map.occupancy import OccupancyGrid, load_occupancy_grid
from parking_planning.planner import KinodynamicPlanner, PoseLike
from parking_planning.types import SearchResult

logger = logging.getLogger(__name__)


class PlanningFlow:
    """
    输入队列 + 规划器的单线程驱动。

    地图、起点、目标分别进入 FIFO 队列；run() 时先加载最新的一张地图
    (更早排队的地图直接丢弃)，然后成对取出起点和目标依次搜索。
    """
    def __init__(self, planner: KinodynamicPlanner, map_resolution: float = 0.2):
        self.planner = planner
        self.map_resolution = map_resolution

        self._maps: Deque[OccupancyGrid] = deque()
        self._starts: Deque[PoseLike] = deque()
        self._goals: Deque[PoseLike] = deque()
        self.current_map: Optional[OccupancyGrid] = None

    def push_map(self, grid: OccupancyGrid):
        self._maps.append(grid)

    def push_start(self, pose: PoseLike):
        self._starts.append(pose)

    def push_goal(self, pose: PoseLike):
        self._goals.append(pose)

    @property
    def pending_pairs(self) -> int:
        return min(len(self._starts), len(self._goals))

    def run(self) -> List[SearchResult]:
        if self._maps:
            newest = self._maps[-1]
            if len(self._maps) > 1:
                logger.info(f"[Flow] discarding {len(self._maps) - 1} stale map(s)")
            self._maps.clear()
            load_occupancy_grid(self.planner, newest, self.map_resolution)
            self.current_map = newest

        if self.current_map is None:
            logger.debug("[Flow] no map yet, waiting")
            return []

        results = []
        while self._starts and self._goals:
            start = self._starts.popleft()
            goal = self._goals.popleft()
            result = self.planner.search(start, goal)
            logger.info(f"[Flow] {start} -> {goal}: {result.status.value}")
            results.append(result)
        return results
