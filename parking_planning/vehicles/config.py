# [配置] 车辆模块独有的配置数据类
from dataclasses import dataclass, field
import math

import numpy as np

from parking_planning.errors import ConfigurationError


@dataclass
class AckermannConfig:
    """
    阿克曼车辆物理参数配置
    几何参数与碰撞参数分离，派生量在初始化时预计算
    """
    # --- 1. 运动学参数 (核心) ---
    wheelbase: float = 1.0        # [m] 轴距
    max_steer_deg: float = 10.0   # [deg] 最大转向角

    # --- 2. 车身轮廓 (后轴中心为原点，x 轴向前) ---
    length: float = 1.4           # [m] 车长
    width: float = 0.8            # [m] 车宽
    rear_axle_dist: float = 0.2   # [m] 后轴中心到车尾

    # --- 3. 派生属性 (自动计算，外部只读) ---
    max_steer: float = field(init=False)           # [rad]
    max_curvature: float = field(init=False)       # [1/m]
    min_turning_radius: float = field(init=False)  # [m]
    outline_coords: np.ndarray = field(init=False)  # 车身矩形 (5x2, 闭合)

    def __post_init__(self):
        if self.wheelbase <= 0:
            raise ConfigurationError(f"wheelbase must be > 0, got {self.wheelbase}")
        if not 0.0 < self.max_steer_deg < 90.0:
            raise ConfigurationError(f"max_steer_deg must be in (0, 90), got {self.max_steer_deg}")
        if self.length <= 0 or self.width <= 0:
            raise ConfigurationError("vehicle length and width must be > 0")

        # A. 角度转弧度
        self.max_steer = math.radians(self.max_steer_deg)

        # B. 最小转弯半径 R = L / tan(delta_max)
        self.max_curvature = math.tan(self.max_steer) / self.wheelbase
        self.min_turning_radius = 1.0 / self.max_curvature

        # C. 车身轮廓
        front_x = self.length - self.rear_axle_dist
        rear_x = -self.rear_axle_dist
        left_y = self.width / 2.0
        right_y = -self.width / 2.0

        self.outline_coords = np.array([
            [front_x, right_y],
            [rear_x,  right_y],
            [rear_x,  left_y],
            [front_x, left_y],
            [front_x, right_y]  # 闭合
        ])
