# parking_planning/map/grid_map.py
import logging
import math
from typing import Tuple

import numpy as np

from .base import MapBase
from parking_planning.errors import ConfigurationError

logger = logging.getLogger(__name__)


class GridMap(MapBase):
    """
    二值障碍物栅格，分辨率独立于搜索状态栅格。
    只提供置位操作：地图更新时整体重建，不做增量删除。
    """
    def __init__(self, x_lower: float, x_upper: float, y_lower: float, y_upper: float,
                 resolution: float = 0.2):
        if resolution <= 0:
            raise ConfigurationError(f"map resolution must be > 0, got {resolution}")
        if not (x_upper > x_lower and y_upper > y_lower):
            raise ConfigurationError(
                f"degenerate map bounds x=[{x_lower}, {x_upper}) y=[{y_lower}, {y_upper})")

        self._bounds = (float(x_lower), float(x_upper), float(y_lower), float(y_upper))
        self._resolution = float(resolution)

        # 加一个极小量，避免 20.0 / 0.2 = 99.999... 被截断
        cols = int(math.floor((x_upper - x_lower) / self._resolution + 1e-9))
        rows = int(math.floor((y_upper - y_lower) / self._resolution + 1e-9))
        if cols < 1 or rows < 1:
            raise ConfigurationError("map bounds are smaller than one grid cell")

        # int8 节省内存
        self._grid = np.zeros((rows, cols), dtype=np.int8)
        self._version = 0

        logger.debug("[GridMap] %dx%d cells @ %.3fm", cols, rows, self._resolution)

    @property
    def data(self) -> np.ndarray:
        return self._grid

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return self._bounds

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def version(self) -> int:
        """每次占据状态变化后递增，启发式据此判断缓存是否失效"""
        return self._version

    def set_obstacle(self, x_idx: int, y_idx: int):
        """标记障碍物栅格，重复调用结果不变"""
        if not self.is_valid_index(x_idx, y_idx):
            raise IndexError(f"obstacle index ({x_idx}, {y_idx}) outside {self.width}x{self.height} grid")
        if self._grid[y_idx, x_idx] == 0:
            self._grid[y_idx, x_idx] = 1
            self._version += 1

    def __repr__(self):
        x_lower, x_upper, y_lower, y_upper = self._bounds
        return (f"GridMap(x=[{x_lower}, {x_upper}), y=[{y_lower}, {y_upper}), "
                f"res={self._resolution}, {self.width}x{self.height})")
