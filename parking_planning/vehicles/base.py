# parking_planning/vehicles/base.py
import math
from abc import ABC, abstractmethod

import numpy as np

from parking_planning.types import Direction, Pose


class VehicleBase(ABC):
    """
    车辆接口基类：运动学 (圆弧推演) + 几何 (车身多边形)
    """
    def __init__(self, config):
        self.config = config

    @abstractmethod
    def arc_propagate(self, start: Pose, steering: float, direction: Direction, distance: float) -> Pose:
        """以恒定转角沿圆弧行驶 distance 米 (弧长)"""

    @abstractmethod
    def get_collision_polygon(self, pose: Pose) -> np.ndarray:
        """世界坐标系下的车身多边形 (N, 2)，用于足迹栅格化和绘图"""

    @staticmethod
    def transform_points(local_points: np.ndarray, pose: Pose) -> np.ndarray:
        """车体坐标 (后轴中心为原点，x 向前) -> 世界坐标"""
        c = math.cos(pose.theta_rad)
        s = math.sin(pose.theta_rad)
        rotation = np.array([[c, -s], [s, c]])
        return np.asarray(local_points, dtype=float) @ rotation.T + np.array([pose.x, pose.y])
