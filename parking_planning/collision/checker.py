# parking_planning/collision/checker.py
from typing import Iterable, Optional

import numpy as np

from parking_planning.errors import ConfigurationError
from parking_planning.map.grid_map import GridMap
from parking_planning.types import Pose
from parking_planning.vehicles.base import VehicleBase
from .config import CollisionConfig, CollisionMethod
from .footprint import FootprintModel


class CollisionChecker:
    def __init__(self, grid_map: GridMap, config: Optional[CollisionConfig] = None,
                 vehicle: Optional[VehicleBase] = None):
        self.grid_map = grid_map
        self.config = config if config is not None else CollisionConfig()
        self.vehicle = vehicle
        self.footprint_model = None

        # FOOTPRINT 模式必须预先初始化查找表，这一步计算量大，只做一次
        if self.config.method == CollisionMethod.FOOTPRINT:
            if vehicle is None:
                raise ConfigurationError("Footprint mode requires a vehicle for initialization")
            self.footprint_model = FootprintModel(vehicle, grid_map.resolution,
                                                  self.config.footprint_angle_step_deg)

    def check(self, pose: Pose) -> bool:
        """
        统一入口：检查特定位姿下车辆是否碰撞
        :return: True 表示碰撞 (不安全), False 表示安全
        """
        # 越界视为碰撞
        if self.grid_map.is_occupied(pose.x, pose.y):
            return True

        if self.config.method == CollisionMethod.POINT:
            return False

        indices = self.footprint_model.get_occupied_indices(pose, self.grid_map)
        valid_mask = (indices[:, 0] >= 0) & (indices[:, 0] < self.grid_map.width) & \
                     (indices[:, 1] >= 0) & (indices[:, 1] < self.grid_map.height)
        if not np.all(valid_mask):
            return True

        # data[y, x]：numpy 索引顺序为 (row, col)
        occupied_values = self.grid_map.data[indices[:, 1], indices[:, 0]]
        return bool(np.any(occupied_values == 1))

    def is_free(self, poses: Iterable[Pose]) -> bool:
        """逐点检查采样序列，遇到第一个碰撞点立即返回"""
        for pose in poses:
            if self.check(pose):
                return False
        return True
