import math
import os
import sys

import numpy as np
import pytest

# --- 路径设置 ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from parking_planning.map.grid_map import GridMap
from parking_planning.planning.heuristics import (EuclideanHeuristic, Heuristic, HolonomicHeuristic,
                                                  MaxHeuristic, ReedsSheppHeuristic, build_distance_field)
from parking_planning.types import Pose

RADIUS = 1.0 / math.tan(math.radians(10.0))


@pytest.fixture
def grid_map():
    return GridMap(0.0, 10.0, 0.0, 10.0, resolution=1.0)


def test_distance_field_open_space(grid_map):
    field = build_distance_field(grid_map, 0, 0)
    assert field.shape == (10, 10)
    assert field[0, 0] == 0.0
    assert field[0, 3] == pytest.approx(3.0)
    assert field[3, 3] == pytest.approx(3 * math.sqrt(2.0))
    assert field[5, 2] == pytest.approx(2 * math.sqrt(2.0) + 3.0)


def test_distance_field_wall(grid_map):
    # 一整列墙把地图隔开
    for y in range(10):
        grid_map.set_obstacle(5, y)
    field = build_distance_field(grid_map, 0, 0)
    assert np.isinf(field[:, 5]).all()
    assert np.isinf(field[:, 6:]).all()
    assert np.isfinite(field[:, :5]).all()


def test_distance_field_detour(grid_map):
    # 留一个缺口，必须绕行
    for y in range(9):
        grid_map.set_obstacle(5, y)
    field = build_distance_field(grid_map, 0, 0)
    assert field[0, 9] > 9.0
    assert np.isfinite(field[0, 9])


def test_holonomic_cache(grid_map):
    heuristic = HolonomicHeuristic(grid_map)
    goal = Pose(0.5, 0.5, 0.0)

    heuristic.prepare(goal)
    first = heuristic._field
    heuristic.prepare(Pose(0.9, 0.1, 1.0))   # 同一个格子
    assert heuristic._field is first
    assert heuristic.estimate(Pose(3.5, 0.5, 0.0), goal) == pytest.approx(3.0)

    grid_map.set_obstacle(2, 0)
    heuristic.prepare(goal)
    assert heuristic._field is not first
    assert heuristic.estimate(Pose(2.5, 0.5, 0.0), goal) == math.inf
    assert heuristic.estimate(Pose(-1.0, 0.5, 0.0), goal) == math.inf


def test_holonomic_cache_is_bounded():
    grid_map = GridMap(0.0, 30.0, 0.0, 30.0, resolution=1.0)
    heuristic = HolonomicHeuristic(grid_map, cache_size=2)

    # 一张地图上连续规划很多个不同目标
    for i in range(25):
        heuristic.prepare(Pose(i + 0.5, 29.0 - i, 0.0))
        assert len(heuristic._cache) <= 2
    assert heuristic._key == (grid_map.version, 24, 5)

    # 最近用过的目标仍在缓存里，不会重算
    recent = heuristic._cache[(grid_map.version, 23, 6)]
    heuristic.prepare(Pose(23.5, 6.5, 0.0))
    assert heuristic._field is recent

    with pytest.raises(ValueError):
        HolonomicHeuristic(grid_map, cache_size=0)


def test_holonomic_overestimate_is_bounded(grid_map):
    # 8-连通距离与直线距离之差：最多约 8% 外加一个格子对角线
    field = build_distance_field(grid_map, 0, 0)
    for ix in range(10):
        for iy in range(10):
            straight = math.hypot(ix, iy)
            assert field[iy, ix] >= straight - 1e-9
            assert field[iy, ix] <= 1.0824 * straight + math.sqrt(2.0)
    # 22.5 deg 附近误差最大
    assert field[4, 9] / math.hypot(9, 4) > 1.07


def test_reeds_shepp_heuristic_range():
    goal = Pose(0.0, 0.0, 0.0)
    heuristic = ReedsSheppHeuristic(RADIUS, max_range=15.0)

    far = Pose(20.0, 0.0, math.pi / 2)
    assert heuristic.estimate(far, goal) == pytest.approx(20.0)

    near = Pose(0.0, 3.0, 0.0)
    assert heuristic.estimate(near, goal) > 3.0

    unlimited = ReedsSheppHeuristic(RADIUS)
    assert unlimited.estimate(far, goal) > 20.0


def test_euclidean():
    assert EuclideanHeuristic().estimate(Pose(0.0, 0.0, 0.0), Pose(3.0, 4.0, 1.0)) == pytest.approx(5.0)


class ConstantHeuristic(Heuristic):
    def __init__(self, value):
        self.value = value
        self.prepared = None

    def prepare(self, goal):
        self.prepared = goal

    def estimate(self, current, goal):
        return self.value


def test_max_heuristic():
    a, b = ConstantHeuristic(1.0), ConstantHeuristic(4.0)
    combined = MaxHeuristic([a, b])
    goal = Pose(1.0, 1.0, 0.0)
    combined.prepare(goal)
    assert a.prepared == goal and b.prepared == goal
    assert combined.estimate(Pose(0.0, 0.0, 0.0), goal) == 4.0

    with pytest.raises(ValueError):
        MaxHeuristic([])
