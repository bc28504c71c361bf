# parking_planning/planning/analytic.py
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import rsplan

from parking_planning.collision.checker import CollisionChecker
from parking_planning.errors import ConfigurationError
from parking_planning.types import Pose
from .reeds_shepp import coincident, path_length, sample_poses, shortest_path

logger = logging.getLogger(__name__)

# 末尾采样点与目标相距小于该值时直接替换为目标 [m]
_SNAP_DISTANCE = 1e-3


@dataclass
class AnalyticShot:
    """
    一次成功的解析连接。poses 不含出发位姿 start，最后一个元素恰为目标位姿。
    起终点重合时 path 为 None，poses 为空。
    """
    start: Pose
    path: Optional[rsplan.Path] = None
    poses: List[Pose] = field(default_factory=list)

    @property
    def length(self) -> float:
        if self.path is None:
            return 0.0
        return path_length(self.path)


class AnalyticShotGenerator:
    """
    Analytic Shot：在距离目标足够近时，尝试用最短 Reeds-Shepp 曲线直接连到目标。
    只校验最短那条曲线，碰撞则本次放弃 (下次扩展还会再试)。
    """
    def __init__(self, collision_checker: CollisionChecker, turning_radius: float,
                 shot_distance: float, step_size: float):
        if turning_radius <= 0 or step_size <= 0:
            raise ConfigurationError("turning_radius and step_size must be positive")
        self.collision_checker = collision_checker
        self.turning_radius = turning_radius
        self.shot_distance = shot_distance
        self.step_size = step_size

        # 统计
        self.attempts = 0
        self.rejected = 0

    def in_range(self, pose: Pose, goal: Pose) -> bool:
        return pose.distance_to(goal) <= self.shot_distance

    def try_shot(self, pose: Pose, goal: Pose) -> Optional[AnalyticShot]:
        if not self.in_range(pose, goal):
            return None

        self.attempts += 1
        if coincident(pose, goal):
            return AnalyticShot(pose)

        path = shortest_path(pose, goal, self.turning_radius, self.step_size)
        if path is None:
            return None

        poses = sample_poses(path, pose)
        # 终点直接用目标位姿，消除离散误差
        if poses and poses[-1].distance_to(goal) < _SNAP_DISTANCE:
            poses[-1] = goal
        else:
            poses.append(goal)

        if not self.collision_checker.is_free(poses):
            self.rejected += 1
            return None

        shot = AnalyticShot(pose, path, poses)
        logger.debug(f"[Shot] connected {pose} -> goal, length={shot.length:.3f}")
        return shot
