# parking_planning/map/occupancy.py
"""
Loading of a native occupancy grid (origin, size, resolution, row-major data)
into the planner's finer obstacle grid.
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from parking_planning.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class OccupancyGrid:
    """
    原生占据栅格描述。
    data 为行优先数组 (index = y * width + x)，非零即障碍 (包括未知 -1)。
    """
    origin_x: float
    origin_y: float
    width: int           # [cells]
    height: int          # [cells]
    resolution: float    # [m/cell]
    data: Sequence[int]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"occupancy grid size must be positive, got {self.width}x{self.height}")
        if self.resolution <= 0:
            raise ConfigurationError(f"occupancy grid resolution must be > 0, got {self.resolution}")
        if len(self.data) != self.width * self.height:
            raise ConfigurationError(
                f"occupancy data has {len(self.data)} cells, expected {self.width * self.height}")

    @property
    def x_upper(self) -> float:
        return self.origin_x + self.width * self.resolution

    @property
    def y_upper(self) -> float:
        return self.origin_y + self.height * self.resolution

    def as_array(self) -> np.ndarray:
        return np.asarray(self.data).reshape(self.height, self.width)


def load_occupancy_grid(planner, grid: OccupancyGrid, map_resolution: float = 0.2) -> int:
    """
    用原生地图初始化规划器并栅格化障碍物。

    1. init: 边界为 origin .. origin + extent，状态栅格分辨率取原生分辨率
    2. 遍历细栅格，细格中心落在被占据的原生格子上则 set_obstacle

    :return: 标记的障碍物细格数量
    """
    planner.init(grid.origin_x, grid.x_upper,
                 grid.origin_y, grid.y_upper,
                 grid.resolution,
                 map_resolution)

    map_w = int(math.floor(grid.width * grid.resolution / map_resolution + 1e-9))
    map_h = int(math.floor(grid.height * grid.resolution / map_resolution + 1e-9))

    # 细格中心 -> 原生格索引
    xs = ((np.arange(map_w) + 0.5) * map_resolution / grid.resolution).astype(int)
    ys = ((np.arange(map_h) + 0.5) * map_resolution / grid.resolution).astype(int)
    xs = np.minimum(xs, grid.width - 1)
    ys = np.minimum(ys, grid.height - 1)

    occupied = grid.as_array()[np.ix_(ys, xs)] != 0   # (map_h, map_w)

    count = 0
    for h, w in zip(*np.nonzero(occupied)):
        planner.set_obstacle(int(w), int(h))
        count += 1

    logger.info("[Occupancy] Loaded %dx%d map, %d obstacle cells at %.2fm",
                grid.width, grid.height, count, map_resolution)
    return count


def yaw_from_quaternion(x: float, y: float, z: float, w: float) -> float:
    """从四元数中提取偏航角"""
    siny_cosp = 2.0 * (w * z + x * y)
    cosy_cosp = 1.0 - 2.0 * (y * y + z * z)
    return math.atan2(siny_cosp, cosy_cosp)
