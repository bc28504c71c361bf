# parking_planning/vehicles/ackermann.py
import math
from typing import List

import numpy as np

from .base import VehicleBase
from .config import AckermannConfig
from parking_planning.types import Pose, Direction


class AckermannVehicle(VehicleBase):
    """
    自行车模型 (后轴中心为参考点)。
    恒定转角下车辆沿圆弧运动，曲率 kappa = tan(delta) / L。
    """
    def __init__(self, config: AckermannConfig):
        super().__init__(config)
        self.config: AckermannConfig = config

    def curvature(self, steering: float) -> float:
        limit = self.config.max_steer
        steering = max(min(steering, limit), -limit)
        return math.tan(steering) / self.config.wheelbase

    def arc_propagate(self, start: Pose, steering: float, direction: Direction, distance: float) -> Pose:
        # 闭式解，不做数值积分，保证 apply 与 sample 的终点完全一致
        kappa = self.curvature(steering)
        s = int(direction) * distance
        theta = start.theta_rad

        if abs(kappa) < 1e-9:
            return Pose(start.x + s * math.cos(theta),
                        start.y + s * math.sin(theta),
                        theta)

        new_theta = theta + kappa * s
        new_x = start.x + (math.sin(new_theta) - math.sin(theta)) / kappa
        new_y = start.y + (math.cos(theta) - math.cos(new_theta)) / kappa
        return Pose(new_x, new_y, new_theta)

    def sample_arc(self, start: Pose, steering: float, direction: Direction,
                   distance: float, num_samples: int) -> List[Pose]:
        """沿圆弧等间距取 num_samples 个点 (包含终点，不含起点)"""
        step = distance / num_samples
        return [self.arc_propagate(start, steering, direction, step * (i + 1))
                for i in range(num_samples)]

    def get_collision_polygon(self, pose: Pose) -> np.ndarray:
        """
        [物理层] 返回用于碰撞检测的多边形
        当前配置下直接使用车身轮廓。
        """
        return self.transform_points(self.config.outline_coords, pose)
