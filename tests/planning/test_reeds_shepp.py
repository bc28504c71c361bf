import math
import os
import sys

import pytest

# --- 路径设置 ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from parking_planning.planning.reeds_shepp import (
    coincident, path_directions, path_length, sample_poses, shortest_length, shortest_path,
)
from parking_planning.types import Direction, Pose

RADIUS = 1.0 / math.tan(math.radians(10.0))   # 默认车辆的最小转弯半径
STEP = 0.2

POSE_PAIRS = [
    (Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0)),
    (Pose(0.0, 0.0, 0.0), Pose(-3.0, 0.0, 0.0)),
    (Pose(0.0, 0.0, 0.0), Pose(4.0, 3.0, math.pi / 2)),
    (Pose(1.0, 2.0, 0.7), Pose(-2.0, 5.0, 2.5)),
    (Pose(0.0, 0.0, 0.0), Pose(0.0, 2.0, 0.0)),
    (Pose(10.0, 10.0, 4.0), Pose(12.0, 8.0, 1.0)),
]


def _angle_diff(a, b):
    return abs((a - b + math.pi) % (2 * math.pi) - math.pi)


def test_straight_forward():
    path = shortest_path(Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0), RADIUS, STEP)
    assert path_length(path) == pytest.approx(5.0)
    assert path_directions(path) == [Direction.FORWARD]


def test_straight_reverse():
    path = shortest_path(Pose(0.0, 0.0, 0.0), Pose(-3.0, 0.0, 0.0), RADIUS, STEP)
    assert path_length(path) == pytest.approx(3.0)
    assert path_directions(path) == [Direction.REVERSE]


def test_quarter_turn():
    goal = Pose(RADIUS, RADIUS, math.pi / 2)
    assert shortest_length(Pose(0.0, 0.0, 0.0), goal, RADIUS) == pytest.approx(RADIUS * math.pi / 2)


def test_coincident_poses():
    p = Pose(3.0, 4.0, 1.0)
    assert coincident(p, Pose(3.0, 4.0, 1.0 + 2 * math.pi))
    assert shortest_path(p, p, RADIUS, STEP) is None
    assert shortest_length(p, p, RADIUS) == 0.0


@pytest.mark.parametrize("start, goal", POSE_PAIRS)
def test_samples_reach_goal(start, goal):
    path = shortest_path(start, goal, RADIUS, STEP)
    poses = sample_poses(path, start)

    assert poses
    assert poses[0] != start
    # 最后一个采样点距目标不超过一个步长
    end = poses[-1]
    assert end.distance_to(goal) <= STEP + 1e-6
    assert _angle_diff(end.theta_rad, goal.theta_rad) <= STEP / RADIUS + 1e-6


@pytest.mark.parametrize("start, goal", POSE_PAIRS)
def test_length_bounded_by_euclidean(start, goal):
    length = shortest_length(start, goal, RADIUS)
    assert length >= start.distance_to(goal) - 1e-9


def test_sampling_step():
    start = Pose(1.0, 2.0, 0.7)
    goal = Pose(-2.0, 5.0, 2.5)
    path = shortest_path(start, goal, RADIUS, STEP)
    poses = [start] + sample_poses(path, start)

    # 弦长不超过弧长步长
    for a, b in zip(poses[:-1], poses[1:]):
        assert a.distance_to(b) <= STEP + 1e-6
    assert len(poses) >= path_length(path) / STEP


def test_deterministic():
    start, goal = POSE_PAIRS[3]
    a = shortest_path(start, goal, RADIUS, STEP)
    b = shortest_path(start, goal, RADIUS, STEP)
    assert path_length(a) == path_length(b)
    assert sample_poses(a, start) == sample_poses(b, start)
