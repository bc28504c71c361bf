# parking_planning/planning/primitives.py
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from parking_planning.errors import ConfigurationError
from parking_planning.types import Direction, Pose
from parking_planning.vehicles.ackermann import AckermannVehicle


@dataclass(frozen=True)
class MotionPrimitive:
    """一个 (转向角, 方向) 组合，沿恒定曲率圆弧行驶固定弧长"""
    steering_index: int   # -n .. n，0 为直行
    steering: float       # [rad]
    direction: Direction

    @property
    def is_straight(self) -> bool:
        return self.steering_index == 0


class MotionPrimitiveSet:
    """
    运动基元集合。

    转向角在 [-max_steer, max_steer] 上均匀取 2n+1 个 (n = steering_angle_discrete_num)，
    每个分别配前进 / 倒车，共 2(2n+1) 个基元。顺序固定：先前进，转向索引从 -n 到 n。
    """
    def __init__(self,
                 vehicle: AckermannVehicle,
                 steering_angle_discrete_num: int = 1,
                 segment_length: float = 1.6,
                 segment_length_discrete_num: int = 8,
                 steering_penalty: float = 1.5,
                 reversing_penalty: float = 2.0,
                 steering_change_penalty: float = 2.0):
        if steering_angle_discrete_num < 1:
            raise ConfigurationError("steering_angle_discrete_num must be >= 1")
        if segment_length <= 0 or segment_length_discrete_num < 1:
            raise ConfigurationError("segment_length and its discrete num must be positive")

        self.vehicle = vehicle
        self.segment_length = segment_length
        self.segment_length_discrete_num = segment_length_discrete_num

        # Costs
        self.steering_penalty = steering_penalty
        self.reversing_penalty = reversing_penalty
        self.steering_change_penalty = steering_change_penalty

        n = steering_angle_discrete_num
        max_steer = vehicle.config.max_steer
        # e.g. n = 1: -max, 0, max
        steers = np.linspace(-max_steer, max_steer, 2 * n + 1)

        self.primitives: List[MotionPrimitive] = [
            MotionPrimitive(index, float(steer), direction)
            for direction in (Direction.FORWARD, Direction.REVERSE)
            for index, steer in zip(range(-n, n + 1), steers)
        ]

    def __iter__(self):
        return iter(self.primitives)

    def __len__(self):
        return len(self.primitives)

    def apply(self, pose: Pose, primitive: MotionPrimitive) -> Pose:
        """圆弧终点位姿"""
        return self.vehicle.arc_propagate(pose, primitive.steering, primitive.direction,
                                          self.segment_length)

    def sample(self, pose: Pose, primitive: MotionPrimitive) -> List[Pose]:
        """
        沿圆弧等间距采样 segment_length_discrete_num 个位姿 (包含终点)，
        用于碰撞检测。最后一个元素与 apply 的结果一致。
        """
        return self.vehicle.sample_arc(pose, primitive.steering, primitive.direction,
                                       self.segment_length, self.segment_length_discrete_num)

    def step_cost(self, primitive: MotionPrimitive, previous_steering_index: Optional[int] = 0) -> float:
        """
        单步代价 (三种效应叠加):
        - 基础代价 segment_length
        - 转向 (steering != 0) 乘 steering_penalty
        - 倒车乘 reversing_penalty
        - 转向角与前驱不同，加 steering_change_penalty
        """
        cost = self.segment_length

        if not primitive.is_straight:
            cost *= self.steering_penalty

        if primitive.direction == Direction.REVERSE:
            cost *= self.reversing_penalty

        if previous_steering_index is not None and primitive.steering_index != previous_steering_index:
            cost += self.steering_change_penalty

        return cost
