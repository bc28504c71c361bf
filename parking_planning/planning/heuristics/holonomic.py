# parking_planning/planning/heuristics/holonomic.py
import logging
import math
from collections import OrderedDict
from typing import Optional, Tuple

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import dijkstra

from parking_planning.map.grid_map import GridMap
from parking_planning.types import Pose
from .base import Heuristic

logger = logging.getLogger(__name__)


def build_distance_field(grid_map: GridMap, goal_x_idx: int, goal_y_idx: int) -> np.ndarray:
    """
    以目标栅格为源点，在 8-连通的空闲栅格图上求最短距离 [m]。
    返回 shape = (height, width) 的数组，障碍 / 不可达为 inf。
    """
    h, w = grid_map.height, grid_map.width
    res = grid_map.resolution
    free = grid_map.data == 0
    ids = np.arange(h * w).reshape(h, w)

    rows, cols, weights = [], [], []
    # 只需要一半的邻接方向，无向图会自动补全另一半
    for dy, dx, cost in ((0, 1, res), (1, 0, res), (1, 1, res * math.sqrt(2.0)), (1, -1, res * math.sqrt(2.0))):
        y0, y1 = 0, h - dy
        x0, x1 = max(0, -dx), w - max(0, dx)
        a = free[y0:y1, x0:x1]
        b = free[y0 + dy:y1 + dy, x0 + dx:x1 + dx]
        mask = a & b
        rows.append(ids[y0:y1, x0:x1][mask])
        cols.append(ids[y0 + dy:y1 + dy, x0 + dx:x1 + dx][mask])
        weights.append(np.full(int(mask.sum()), cost))

    graph = coo_matrix((np.concatenate(weights), (np.concatenate(rows), np.concatenate(cols))),
                       shape=(h * w, h * w)).tocsr()
    source = goal_y_idx * w + goal_x_idx
    dist = dijkstra(graph, directed=False, indices=source)
    return dist.reshape(h, w)


class HolonomicHeuristic(Heuristic):
    """
    有障碍 + 无运动学约束：目标到各栅格中心的 8-连通最短距离。

    这是 Hybrid A* 常用的近似，并不是严格下界：8-连通折线比真实直线最多长约 8%
    (22.5 deg 方向)，再加上取格子中心带来的不超过一个格子对角线的误差。

    距离场按 (地图版本, 目标栅格) 做 LRU 缓存，最多保留 cache_size 张，
    同一目标重复搜索不重算，大量不同目标也不会让内存无限增长。
    """
    def __init__(self, grid_map: GridMap, cache_size: int = 2):
        if cache_size < 1:
            raise ValueError(f"cache_size must be >= 1, got {cache_size}")
        self.grid_map = grid_map
        self.cache_size = cache_size
        self._field: Optional[np.ndarray] = None
        self._key: Optional[Tuple[int, int, int]] = None
        self._cache: "OrderedDict[Tuple[int, int, int], np.ndarray]" = OrderedDict()

    def prepare(self, goal: Pose) -> None:
        gx, gy = self.grid_map.world_to_grid(goal.x, goal.y)
        key = (self.grid_map.version, gx, gy)
        if key == self._key:
            return
        if key in self._cache:
            self._cache.move_to_end(key)
        else:
            logger.debug(f"[Holonomic] building distance field to cell ({gx}, {gy})")
            self._cache[key] = build_distance_field(self.grid_map, gx, gy)
            while len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        self._field = self._cache[key]
        self._key = key

    def estimate(self, current: Pose, goal: Pose) -> float:
        if self._field is None:
            self.prepare(goal)
        ix, iy = self.grid_map.world_to_grid(current.x, current.y)
        if not (0 <= ix < self.grid_map.width and 0 <= iy < self.grid_map.height):
            return math.inf
        return float(self._field[iy, ix])
