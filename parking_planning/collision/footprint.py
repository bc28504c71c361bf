# parking_planning/collision/footprint.py
import logging
import math

import numpy as np
from matplotlib.path import Path

from parking_planning.types import Pose, TWO_PI
from parking_planning.vehicles.base import VehicleBase

logger = logging.getLogger(__name__)


class FootprintModel:
    """
    车身足迹查找表：航向分桶 -> 覆盖的栅格偏移 (dx, dy)。
    偏移相对于位姿所在栅格，按格子中心近似位姿位置。
    """
    def __init__(self, vehicle: VehicleBase, resolution: float, angle_step_deg: float = 2.0):
        self.resolution = resolution
        self.angle_step = math.radians(angle_step_deg)
        self.num_bins = int(round(360.0 / angle_step_deg))

        # self.lookup_table[angle_idx] = np.array([[dx, dy], ...])
        self.lookup_table = []

        logger.debug("Pre-computing footprint tables (%d orientations)...", self.num_bins)
        self._precompute_table(vehicle)

    def _precompute_table(self, vehicle: VehicleBase):
        for i in range(self.num_bins):
            # 1. 原点处该角度下的多边形 (世界坐标 = 局部坐标)
            poly = vehicle.get_collision_polygon(Pose(0.0, 0.0, i * self.angle_step))

            # 2. 栅格化，找出所有覆盖的 (dx, dy)
            self.lookup_table.append(self._rasterize_polygon(poly))

    def _rasterize_polygon(self, poly_coords: np.ndarray) -> np.ndarray:
        """将多边形转为 grid index 列表 (dx, dy)"""
        min_x, min_y = np.min(poly_coords, axis=0)
        max_x, max_y = np.max(poly_coords, axis=0)

        min_ix = int(np.floor(min_x / self.resolution))
        max_ix = int(np.ceil(max_x / self.resolution))
        min_iy = int(np.floor(min_y / self.resolution))
        max_iy = int(np.ceil(max_y / self.resolution))

        xs, ys = np.meshgrid(np.arange(min_ix, max_ix + 1), np.arange(min_iy, max_iy + 1))
        candidates = np.column_stack([xs.ravel(), ys.ravel()])

        # 取偏移格子的中心点做包含测试；参考点所在格子始终计入
        inside = Path(poly_coords).contains_points(candidates * self.resolution)
        inside |= (candidates[:, 0] == 0) & (candidates[:, 1] == 0)

        return candidates[inside].astype(np.int32)

    def get_occupied_indices(self, pose: Pose, grid_map) -> np.ndarray:
        """
        运行时调用：返回当前位姿覆盖的绝对网格坐标 (N, 2)
        """
        angle_idx = int(pose.theta_rad % TWO_PI / self.angle_step) % self.num_bins
        offsets = self.lookup_table[angle_idx]

        curr_ix, curr_iy = grid_map.world_to_grid(pose.x, pose.y)

        # 广播加法：绝对坐标 = 中心 + 偏移
        return offsets + np.array([curr_ix, curr_iy])
