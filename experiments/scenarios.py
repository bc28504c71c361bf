import os
import sys

# Ensure parking_planning can be imported if this config is used standalone
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parking_planning.config import PlannerConfig
from parking_planning.map.occupancy import OccupancyGrid
from parking_planning.types import Pose


class ScenarioConfig:
    # --- Output Paths ---
    _BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    _PROJECT_DIR = os.path.dirname(_BASE_DIR)
    LOG_DIR = os.path.join(_PROJECT_DIR, "logs", "experiments")

    # --- Native map (1.0 m/cell, 30m x 20m) ---
    MAP_ORIGIN = (0.0, 0.0)
    MAP_SIZE = (30, 20)          # cells
    MAP_RESOLUTION = 1.0         # meters/cell
    FINE_RESOLUTION = 0.2        # obstacle grid used by the planner

    # --- Start & Goal ---
    START_POSE = Pose(3.0, 10.0, 0.0)
    GOAL_POSE = Pose(25.0, 10.0, 0.0)

    # 默认参数
    PLANNER_CONFIG = PlannerConfig()


def build_parking_lot(width: int = 30, height: int = 20, resolution: float = 1.0) -> OccupancyGrid:
    """
    一堵挡在起终点之间的墙 + 目标两侧停着的车
    """
    data = [0] * (width * height)

    def occupy(x, y):
        if 0 <= x < width and 0 <= y < height:
            data[y * width + x] = 100

    # 墙：x = 13, y = 7..12
    for y in range(7, 13):
        occupy(13, y)
    # 目标车位两侧的车
    for x in range(22, 28):
        occupy(x, 7)
        occupy(x, 13)
    # 场地边界
    for x in range(width):
        occupy(x, 0)
        occupy(x, height - 1)

    return OccupancyGrid(0.0, 0.0, width, height, resolution, data)
