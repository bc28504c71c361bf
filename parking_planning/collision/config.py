# parking_planning/collision/config.py
from enum import Enum
from dataclasses import dataclass


class CollisionMethod(Enum):
    # 仅检查后轴中心点 (最快，与障碍物栅格分辨率一致)
    POINT = 0

    # 车身矩形预栅格化查表 (更严格，按航向分桶)
    FOOTPRINT = 1


@dataclass
class CollisionConfig:
    method: CollisionMethod = CollisionMethod.POINT
    # FOOTPRINT 查找表的角度分辨率
    footprint_angle_step_deg: float = 2.0
