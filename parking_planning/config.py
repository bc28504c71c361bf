# [关键] 规划器全局配置定义
# parking_planning/config.py
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from parking_planning.errors import ConfigurationError
from parking_planning.vehicles.config import AckermannConfig


@dataclass
class PlannerConfig:
    # --- 1. 运动学 ---
    steering_angle: float = 10.0             # [deg] 最大转向角
    steering_angle_discrete_num: int = 1     # 单侧转向角离散数
    wheel_base: float = 1.0                  # [m] 轴距

    # --- 2. 运动基元 ---
    segment_length: float = 1.6              # [m] 每个基元的弧长
    segment_length_discrete_num: int = 8     # 每段的碰撞采样数

    # --- 3. 代价 ---
    steering_penalty: float = 1.5
    steering_change_penalty: float = 2.0
    reversing_penalty: float = 2.0

    # --- 4. 解析扩展 ---
    shot_distance: float = 5.0               # [m]

    # --- 5. 离散化 / 搜索 ---
    map_grid_resolution: float = 0.2         # [m] 障碍物栅格分辨率
    heading_bin_num: int = 72                # 航向离散数 (72 -> 5 deg)
    max_iterations: int = 100000
    rs_heuristic_range: Optional[float] = None  # 默认 3 * shot_distance

    # --- 6. 车身轮廓 (仅 FOOTPRINT 碰撞检测使用) ---
    vehicle_length: float = 1.4              # [m]
    vehicle_width: float = 0.8               # [m]
    rear_axle_dist: float = 0.2              # [m] 后轴中心到车尾

    def __post_init__(self):
        if self.wheel_base <= 0:
            raise ConfigurationError(f"wheel_base must be > 0, got {self.wheel_base}")
        if not 0.0 < self.steering_angle < 90.0:
            raise ConfigurationError(f"steering_angle must be in (0, 90) degrees, got {self.steering_angle}")
        if self.steering_angle_discrete_num < 1:
            raise ConfigurationError("steering_angle_discrete_num must be >= 1")
        if self.segment_length <= 0:
            raise ConfigurationError(f"segment_length must be > 0, got {self.segment_length}")
        if self.segment_length_discrete_num < 1:
            raise ConfigurationError("segment_length_discrete_num must be >= 1")
        for name in ("steering_penalty", "reversing_penalty"):
            if getattr(self, name) < 1.0:
                # 乘性惩罚小于 1 会让启发式失去可采纳性
                raise ConfigurationError(f"{name} must be >= 1.0, got {getattr(self, name)}")
        if self.steering_change_penalty < 0:
            raise ConfigurationError("steering_change_penalty must be >= 0")
        if self.shot_distance < 0:
            raise ConfigurationError("shot_distance must be >= 0")
        if self.map_grid_resolution <= 0:
            raise ConfigurationError(f"map_grid_resolution must be > 0, got {self.map_grid_resolution}")
        if self.heading_bin_num < 1:
            raise ConfigurationError("heading_bin_num must be >= 1")
        if self.max_iterations < 1:
            raise ConfigurationError("max_iterations must be >= 1")
        if self.rs_heuristic_range is not None and self.rs_heuristic_range < 0:
            raise ConfigurationError("rs_heuristic_range must be >= 0")

    @property
    def effective_rs_range(self) -> float:
        """RS 启发式的计算范围，未显式设置时跟随 shot_distance"""
        if self.rs_heuristic_range is None:
            return 3.0 * self.shot_distance
        return self.rs_heuristic_range

    def vehicle_config(self) -> AckermannConfig:
        """派生车辆物理参数"""
        return AckermannConfig(
            wheelbase=self.wheel_base,
            max_steer_deg=self.steering_angle,
            length=self.vehicle_length,
            width=self.vehicle_width,
            rear_axle_dist=self.rear_axle_dist,
        )

    @classmethod
    def from_params(cls, params: Mapping[str, Any], prefix: str = "planner/") -> "PlannerConfig":
        """
        从扁平参数表构造配置，键名沿用 "planner/<name>" 形式。
        缺省的键使用默认值，未知键被忽略。
        """
        kwargs = {}
        for f in fields(cls):
            key = prefix + f.name
            if key in params:
                kwargs[f.name] = params[key]
        return cls(**kwargs)
