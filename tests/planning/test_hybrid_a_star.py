import math
import os
import sys

import pytest

# --- Path Setup ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from parking_planning.collision import CollisionChecker
from parking_planning.config import PlannerConfig
from parking_planning.map.grid_map import GridMap
from parking_planning.planning.analytic import AnalyticShotGenerator
from parking_planning.planning.discretizer import StateDiscretizer
from parking_planning.planning.heuristics import HolonomicHeuristic, MaxHeuristic, ReedsSheppHeuristic
from parking_planning.planning.planners import HybridAStarPlanner
from parking_planning.planning.planners.hybrid_a_star import HybridNode
from parking_planning.planning.primitives import MotionPrimitiveSet
from parking_planning.types import Cell, Direction, Pose, SearchStatus
from parking_planning.vehicles import AckermannVehicle
from parking_planning.visualization.debugger import PlanningDebugger


def build_planner(grid_map, config=None, state_resolution=1.0):
    config = config if config is not None else PlannerConfig()
    vehicle = AckermannVehicle(config.vehicle_config())
    primitives = MotionPrimitiveSet(vehicle,
                                    steering_angle_discrete_num=config.steering_angle_discrete_num,
                                    segment_length=config.segment_length,
                                    segment_length_discrete_num=config.segment_length_discrete_num,
                                    steering_penalty=config.steering_penalty,
                                    reversing_penalty=config.reversing_penalty,
                                    steering_change_penalty=config.steering_change_penalty)
    x_lower, _, y_lower, _ = grid_map.bounds
    discretizer = StateDiscretizer(x_lower, y_lower, state_resolution, config.heading_bin_num)
    checker = CollisionChecker(grid_map)
    radius = vehicle.config.min_turning_radius
    shot = AnalyticShotGenerator(checker, radius, config.shot_distance, grid_map.resolution)
    heuristic = MaxHeuristic([HolonomicHeuristic(grid_map), ReedsSheppHeuristic(radius, config.effective_rs_range)])
    return HybridAStarPlanner(grid_map, discretizer, primitives, checker, shot, heuristic, config.max_iterations)


@pytest.fixture
def open_map():
    return GridMap(-5.0, 15.0, -5.0, 5.0, resolution=0.2)


def test_direct_shot(open_map):
    planner = build_planner(open_map)
    start, goal = Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0)

    result = planner.plan(start, goal)

    assert result.status is SearchStatus.SUCCEEDED
    assert result.path == [start, goal]
    assert result.cost == pytest.approx(5.0)
    assert result.iterations == 1
    assert result.trajectory[0] == start
    assert result.trajectory[-1] == goal
    assert len(result.trajectory) >= 26


def test_start_equals_goal(open_map):
    planner = build_planner(open_map)
    p = Pose(1.0, 1.0, 1.0)
    result = planner.plan(p, p)
    assert result.success
    assert result.path == [p]
    assert result.cost == pytest.approx(0.0, abs=1e-9)


def test_straight_expansion_then_shot(open_map):
    planner = build_planner(open_map)
    start, goal = Pose(0.0, 0.0, 0.0), Pose(12.0, 0.0, 0.0)

    result = planner.plan(start, goal)

    assert result.success
    assert result.cost == pytest.approx(12.0)
    assert result.path[0] == start
    assert result.path[-1] == goal
    for pose in result.path:
        assert pose.y == pytest.approx(0.0, abs=1e-9)
    # 直行基元间距 1.6
    for a, b in zip(result.path[:-2], result.path[1:-1]):
        assert a.distance_to(b) == pytest.approx(1.6)


def test_goal_outside_map(open_map):
    planner = build_planner(open_map)
    # 上界不包含
    result = planner.plan(Pose(0.0, 0.0, 0.0), Pose(15.0, 0.0, 0.0))
    assert result.status is SearchStatus.OUT_OF_BOUNDS
    assert result.path == []
    assert result.iterations == 0


def test_occupied_start(open_map):
    ix, iy = open_map.world_to_grid(0.0, 0.0)
    open_map.set_obstacle(ix, iy)
    planner = build_planner(open_map)
    result = planner.plan(Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0))
    assert result.status is SearchStatus.COLLISION_AT_ENDPOINT
    assert not result


def test_exhausted_when_enclosed():
    grid_map = GridMap(0.0, 20.0, 0.0, 10.0, resolution=0.2)
    # 把起点围在一个 4m 的方框里
    for i in range(15, 36):
        grid_map.set_obstacle(i, 15)
        grid_map.set_obstacle(i, 35)
        grid_map.set_obstacle(15, i)
        grid_map.set_obstacle(35, i)
    planner = build_planner(grid_map)

    result = planner.plan(Pose(5.0, 5.0, 0.0), Pose(15.0, 5.0, 0.0))

    assert result.status is SearchStatus.EXHAUSTED
    assert result.expanded > 1
    assert result.path == []


def test_iteration_limit(open_map):
    planner = build_planner(open_map, PlannerConfig(max_iterations=1))
    result = planner.plan(Pose(0.0, 0.0, 0.0), Pose(12.0, 0.0, 0.0))
    assert result.status is SearchStatus.LIMIT_REACHED
    assert result.iterations == 1


def test_should_stop(open_map):
    planner = build_planner(open_map)
    calls = []

    def should_stop():
        calls.append(1)
        return len(calls) > 2

    result = planner.plan(Pose(0.0, 0.0, 0.0), Pose(12.0, 0.0, math.pi / 2), should_stop=should_stop)
    assert result.status is SearchStatus.LIMIT_REACHED
    assert result.iterations == 2


def test_debugger_and_searched_tree(open_map):
    planner = build_planner(open_map)
    debugger = PlanningDebugger()

    result = planner.plan(Pose(0.0, 0.0, 0.0), Pose(12.0, 0.0, 0.0), debugger=debugger)

    assert result.success
    assert debugger.cost_map is open_map
    assert len(debugger.expanded_nodes) == result.expanded
    assert len(debugger.edges) == len(debugger.open_set_history)

    tree = planner.searched_tree()
    assert len(tree) == len(debugger.edges)
    for edge in tree:
        # 父节点 + 8 个采样点
        assert len(edge) == 9


def test_new_plan_clears_previous_tree(open_map):
    planner = build_planner(open_map)
    planner.plan(Pose(0.0, 0.0, 0.0), Pose(12.0, 0.0, 0.0))
    assert planner.searched_tree()
    planner.plan(Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0))
    assert planner.searched_tree() == []


def _node(ix, g, h, changes=0):
    return HybridNode(Cell(ix, 0, 0), Pose(float(ix), 0.0, 0.0), g, h,
                      direction=Direction.REVERSE if changes else Direction.FORWARD,
                      direction_changes=changes)


def test_open_set_tie_breaking(open_map):
    planner = build_planner(open_map)
    planner.reset()
    planner._push(_node(0, 2.0, 3.0))               # f=5, h=3
    planner._push(_node(1, 3.0, 2.0))               # f=5, h=2
    planner._push(_node(2, 3.0, 2.0, changes=1))    # f=5, h=2, 多一次换向
    planner._push(_node(3, 3.0, 2.0))               # 与 1 完全相同，后入堆
    planner._push(_node(4, 1.0, 3.0))               # f=4

    order = [planner._pop() for _ in range(5)]
    # f 小者优先；f 相同比 h；再比换向次数；最后按入堆顺序
    assert order == [4, 1, 3, 2, 0]
    assert not planner._open_set


def test_stale_entry_is_discarded(open_map):
    planner = build_planner(open_map)
    planner.reset()
    planner._push(_node(7, 5.0, 1.0))
    better = planner._push(_node(7, 3.0, 1.0))   # 同一 cell，更优的条目重新入堆

    assert planner._pop() == better
    assert planner._pop() is None                # 旧条目出堆时丢弃
    assert planner._closed[Cell(7, 0, 0)] == 3.0


def test_closed_cell_is_not_reexpanded_at_equal_or_worse_cost(open_map):
    planner = build_planner(open_map)
    planner.reset()
    first = planner._push(_node(5, 3.0, 1.0))
    assert planner._pop() == first

    planner._push(_node(5, 3.0, 1.0))
    assert planner._pop() is None
    planner._push(_node(5, 4.0, 1.0))
    assert planner._pop() is None
    assert planner._closed[Cell(5, 0, 0)] == 3.0

    # 严格更优时允许再次扩展
    improved = planner._push(_node(5, 2.0, 1.0))
    assert planner._pop() == improved
    assert planner._closed[Cell(5, 0, 0)] == 2.0


def test_closed_costs_match_best_known_after_search():
    grid_map = GridMap(0.0, 24.0, 0.0, 20.0, resolution=0.2)
    for ix in range(50, 53):
        for iy in range(38, 62):
            grid_map.set_obstacle(ix, iy)
    planner = build_planner(grid_map, PlannerConfig(steering_angle=25.0))
    result = planner.plan(Pose(3.0, 10.0, 0.0), Pose(20.0, 10.0, 0.0))

    assert result.status is SearchStatus.SUCCEEDED
    assert result.expanded >= len(planner._closed)
    for cell, g in planner._closed.items():
        # 已扩展的 cell 之后只会接受严格更优的节点
        assert planner._best_g[cell] <= g + 1e-9
