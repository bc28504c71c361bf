# [入口] 负责暴露类，让外部调用更简洁

# parking_planning/vehicles/__init__.py

from .base import VehicleBase
from .config import AckermannConfig
from .ackermann import AckermannVehicle

# 定义对外暴露的列表
__all__ = ["VehicleBase", "AckermannConfig", "AckermannVehicle"]
