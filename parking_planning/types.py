# parking_planning/types.py
import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List, NamedTuple, Optional

TWO_PI = 2.0 * math.pi


def wrap_angle(angle: float) -> float:
    """将角度归一化到 [0, 2π)"""
    wrapped = angle % TWO_PI
    # 对极小的负数取模会得到 2π 本身
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


@dataclass(frozen=True)
class Pose:
    """
    统一的车辆位姿定义 (不可变)
    """
    x: float             # [m]
    y: float             # [m]
    theta_rad: float     # [rad] 构造时归一化到 [0, 2π)

    def __post_init__(self):
        object.__setattr__(self, "theta_rad", wrap_angle(float(self.theta_rad)))

    def distance_to(self, other: "Pose") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class Cell(NamedTuple):
    """搜索网格的离散键 (ix, iy, itheta)"""
    ix: int
    iy: int
    itheta: int


class Direction(IntEnum):
    FORWARD = 1
    REVERSE = -1


class SearchStatus(Enum):
    SUCCEEDED = "succeeded"
    MAP_NOT_LOADED = "map_not_loaded"
    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION_AT_ENDPOINT = "collision_at_endpoint"
    EXHAUSTED = "exhausted"
    LIMIT_REACHED = "limit_reached"


@dataclass
class SearchResult:
    """
    一次 search 的结果。

    path: 每个运动基元一个位姿 (起点 ... 终点)，解析曲线作为最后一段
    trajectory: 稠密轨迹，包含所有采样点，可直接用于可视化
    """
    status: SearchStatus
    path: List[Pose] = field(default_factory=list)
    trajectory: List[Pose] = field(default_factory=list)
    cost: float = math.inf
    iterations: int = 0
    expanded: int = 0
    shot: Optional[Any] = None  # AnalyticShot

    @property
    def success(self) -> bool:
        return self.status is SearchStatus.SUCCEEDED

    def __bool__(self) -> bool:
        return self.success
