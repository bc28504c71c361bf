# parking_planning/planning/reeds_shepp.py
"""
Reeds-Shepp 曲线 (rsplan 封装)

rsplan 负责求解最短曲线并按弧长离散，这里只做 Pose <-> (x, y, yaw) 的转换，
以及起终点重合这类 rsplan 不处理的情况。
"""
import logging
import math
from typing import List, Optional

import rsplan

from parking_planning.types import Direction, Pose

logger = logging.getLogger(__name__)

# 起终点重合判定
_COINCIDENT_EPS = 1e-9
# 采样点与出发位姿重合判定 [m]
_SAME_POINT_EPS = 1e-6


def _as_tuple(pose: Pose):
    return (pose.x, pose.y, pose.theta_rad)


def coincident(a: Pose, b: Pose) -> bool:
    dtheta = abs((a.theta_rad - b.theta_rad + math.pi) % (2.0 * math.pi) - math.pi)
    return a.distance_to(b) < _COINCIDENT_EPS and dtheta < _COINCIDENT_EPS


def shortest_path(start: Pose, goal: Pose, turning_radius: float,
                  step_size: float) -> Optional[rsplan.Path]:
    """
    最短 Reeds-Shepp 曲线 (忽略障碍物)。
    起终点重合或 rsplan 无解时返回 None。
    """
    if coincident(start, goal):
        return None
    path = rsplan.path(_as_tuple(start), _as_tuple(goal), turning_radius, 0, step_size)
    if path is None:
        logger.warning(f"[RS] rsplan found no curve from {start} to {goal}")
    return path


def shortest_length(start: Pose, goal: Pose, turning_radius: float,
                    step_size: float = 1.0) -> Optional[float]:
    """最短曲线长度 [m]，重合时为 0"""
    if coincident(start, goal):
        return 0.0
    path = shortest_path(start, goal, turning_radius, step_size)
    if path is None:
        return None
    return path_length(path)


def path_length(path: rsplan.Path) -> float:
    """各分段弧长绝对值之和 [m]"""
    return float(path.total_length)


def path_directions(path: rsplan.Path) -> List[Direction]:
    """每个非零长度分段的行驶方向"""
    return [Direction(segment.direction) for segment in path.segments
            if abs(segment.length) > _COINCIDENT_EPS]


def sample_poses(path: rsplan.Path, start: Pose) -> List[Pose]:
    """
    rsplan 按 step_size 离散出的位姿，不含出发位姿本身。
    """
    xs, ys, yaws = path.coordinates_tuple()
    poses = [Pose(float(x), float(y), float(yaw)) for x, y, yaw in zip(xs, ys, yaws)]
    while poses and poses[0].distance_to(start) < _SAME_POINT_EPS:
        poses.pop(0)
    return poses
