import math
import os
import sys

import pytest

# --- 路径设置 ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from parking_planning.errors import ConfigurationError
from parking_planning.map.occupancy import OccupancyGrid, load_occupancy_grid, yaw_from_quaternion
from parking_planning.planner import KinodynamicPlanner


class RecordingPlanner:
    """只记录调用，不做任何规划"""
    def __init__(self):
        self.init_args = None
        self.obstacles = []

    def init(self, *args):
        self.init_args = args

    def set_obstacle(self, map_x, map_y):
        self.obstacles.append((map_x, map_y))


def test_fine_cells_follow_native_cells():
    # 2x2 原生地图，右侧一列被占据 (其中一个为未知 -1)
    grid = OccupancyGrid(origin_x=0.0, origin_y=0.0, width=2, height=2, resolution=1.0,
                         data=[0, 100,
                               0, -1])
    planner = RecordingPlanner()

    count = load_occupancy_grid(planner, grid, map_resolution=0.5)

    assert planner.init_args == (0.0, 2.0, 0.0, 2.0, 1.0, 0.5)
    assert count == 8
    assert sorted(planner.obstacles) == sorted((w, h) for w in (2, 3) for h in range(4))
    # 行优先遍历
    assert planner.obstacles[0] == (2, 0)


def test_origin_offsets_bounds():
    grid = OccupancyGrid(origin_x=-5.0, origin_y=2.0, width=4, height=3, resolution=0.5,
                         data=[0] * 12)
    planner = RecordingPlanner()
    assert load_occupancy_grid(planner, grid, map_resolution=0.25) == 0
    assert planner.init_args == (-5.0, -3.0, 2.0, 3.5, 0.5, 0.25)


def test_loading_into_real_planner():
    data = [0] * 100
    data[5 * 10 + 7] = 100          # 原生格 (7, 5)
    grid = OccupancyGrid(0.0, 0.0, 10, 10, 1.0, data)
    planner = KinodynamicPlanner()

    load_occupancy_grid(planner, grid, map_resolution=0.2)

    assert planner.grid_map.width == 50
    assert planner.is_occupied(7.5, 5.5)
    assert planner.is_occupied(7.01, 5.99)
    assert not planner.is_occupied(6.9, 5.5)
    assert int(planner.grid_map.data.sum()) == 25


def test_bad_occupancy_grid():
    with pytest.raises(ConfigurationError):
        OccupancyGrid(0.0, 0.0, 2, 2, 1.0, [0, 0, 0])
    with pytest.raises(ConfigurationError):
        OccupancyGrid(0.0, 0.0, 0, 2, 1.0, [])
    with pytest.raises(ConfigurationError):
        OccupancyGrid(0.0, 0.0, 1, 1, 0.0, [0])


@pytest.mark.parametrize("yaw", [0.0, 0.5, math.pi / 2, -2.0, 3.0])
def test_yaw_from_quaternion(yaw):
    z = math.sin(yaw / 2.0)
    w = math.cos(yaw / 2.0)
    assert yaw_from_quaternion(0.0, 0.0, z, w) == pytest.approx(yaw)
