# parking_planning/planner.py
"""
KinodynamicPlanner: the public entry point.

Typical use::

    planner = KinodynamicPlanner(PlannerConfig())
    planner.init(0.0, 30.0, 0.0, 20.0, state_grid_resolution=1.0)
    planner.set_obstacle(60, 50)
    result = planner.search(Pose(2.0, 10.0, 0.0), Pose(24.0, 10.0, 0.0))
    if result.success:
        poses = planner.get_path()
"""
import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from parking_planning.collision.checker import CollisionChecker
from parking_planning.collision.config import CollisionConfig
from parking_planning.config import PlannerConfig
from parking_planning.errors import PlannerStateError
from parking_planning.map.grid_map import GridMap
from parking_planning.planning.analytic import AnalyticShotGenerator
from parking_planning.planning.discretizer import StateDiscretizer
from parking_planning.planning.heuristics import HolonomicHeuristic, MaxHeuristic, ReedsSheppHeuristic
from parking_planning.planning.planners.hybrid_a_star import HybridAStarPlanner
from parking_planning.planning.primitives import MotionPrimitiveSet
from parking_planning.types import Pose, SearchResult, SearchStatus
from parking_planning.vehicles.ackermann import AckermannVehicle
from parking_planning.visualization.debugger import IDebugger

logger = logging.getLogger(__name__)

PoseLike = Union[Pose, Sequence[float]]


class PlannerState(Enum):
    INIT = "init"              # 尚未加载地图
    READY = "ready"
    SEARCHING = "searching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _as_pose(value: PoseLike) -> Pose:
    if isinstance(value, Pose):
        return value
    x, y, theta = value
    return Pose(float(x), float(y), float(theta))


class KinodynamicPlanner:
    """
    组装各个模块并管理生命周期。

    - init 之后地图、离散器、碰撞检测、启发式、搜索引擎一次性建好
    - set_obstacle 只在两次搜索之间调用，搜索过程中地图只读
    - search 不可重入
    """
    def __init__(self, config: Optional[PlannerConfig] = None,
                 collision_config: Optional[CollisionConfig] = None):
        self.config = config if config is not None else PlannerConfig()
        self.collision_config = collision_config if collision_config is not None else CollisionConfig()

        self.vehicle = AckermannVehicle(self.config.vehicle_config())
        self.primitives = MotionPrimitiveSet(
            self.vehicle,
            steering_angle_discrete_num=self.config.steering_angle_discrete_num,
            segment_length=self.config.segment_length,
            segment_length_discrete_num=self.config.segment_length_discrete_num,
            steering_penalty=self.config.steering_penalty,
            reversing_penalty=self.config.reversing_penalty,
            steering_change_penalty=self.config.steering_change_penalty,
        )

        self.grid_map: Optional[GridMap] = None
        self.discretizer: Optional[StateDiscretizer] = None
        self.collision_checker: Optional[CollisionChecker] = None
        self._engine: Optional[HybridAStarPlanner] = None

        self._state = PlannerState.INIT
        self._last_result: Optional[SearchResult] = None

    @property
    def state(self) -> PlannerState:
        return self._state

    @property
    def last_result(self) -> Optional[SearchResult]:
        return self._last_result

    @property
    def is_map_loaded(self) -> bool:
        return self.grid_map is not None

    def init(self, x_lower: float, x_upper: float, y_lower: float, y_upper: float,
             state_grid_resolution: float, map_grid_resolution: Optional[float] = None):
        """
        建立地图与搜索结构。重复调用会整体替换之前的地图。
        :raises ConfigurationError: 边界退化或分辨率非法
        """
        self._ensure_idle("init")
        if map_grid_resolution is None:
            map_grid_resolution = self.config.map_grid_resolution

        # 先全部构造成功再替换，失败时保持原状态
        grid_map = GridMap(x_lower, x_upper, y_lower, y_upper, map_grid_resolution)
        discretizer = StateDiscretizer(x_lower, y_lower, state_grid_resolution, self.config.heading_bin_num)
        checker = CollisionChecker(grid_map, self.collision_config, self.vehicle)

        turning_radius = self.vehicle.config.min_turning_radius
        sample_step = min(map_grid_resolution,
                          self.config.segment_length / self.config.segment_length_discrete_num)
        shot_generator = AnalyticShotGenerator(checker, turning_radius, self.config.shot_distance, sample_step)
        heuristic = MaxHeuristic([
            HolonomicHeuristic(grid_map),
            ReedsSheppHeuristic(turning_radius, self.config.effective_rs_range),
        ])

        self.grid_map = grid_map
        self.discretizer = discretizer
        self.collision_checker = checker
        self._engine = HybridAStarPlanner(grid_map, discretizer, self.primitives, checker,
                                          shot_generator, heuristic, self.config.max_iterations)
        self._last_result = None
        self._state = PlannerState.READY

        logger.info(f"[Planner] init: x=[{x_lower}, {x_upper}) y=[{y_lower}, {y_upper}) "
                    f"state_res={state_grid_resolution} map_res={map_grid_resolution}")

    def set_obstacle(self, map_x: int, map_y: int):
        """标记一个障碍物栅格 (障碍物栅格索引，不是米)"""
        self._ensure_idle("set_obstacle")
        if self.grid_map is None:
            raise PlannerStateError("set_obstacle called before init")
        self.grid_map.set_obstacle(map_x, map_y)

    def is_occupied(self, x: float, y: float) -> bool:
        if self.grid_map is None:
            raise PlannerStateError("is_occupied called before init")
        return self.grid_map.is_occupied(x, y)

    def search(self, start: PoseLike, goal: PoseLike,
               debugger: Optional[IDebugger] = None,
               should_stop: Optional[Callable[[], bool]] = None) -> SearchResult:
        if self._state is PlannerState.SEARCHING:
            raise PlannerStateError("search is not re-entrant")

        start_pose = _as_pose(start)
        goal_pose = _as_pose(goal)

        if self._engine is None:
            logger.warning("[Planner] search requested before a map was loaded")
            self._last_result = SearchResult(SearchStatus.MAP_NOT_LOADED)
            return self._last_result

        self._state = PlannerState.SEARCHING
        try:
            result = self._engine.plan(start_pose, goal_pose, debugger, should_stop)
        except Exception:
            self._state = PlannerState.READY
            raise

        self._last_result = result
        self._state = PlannerState.SUCCEEDED if result.success else PlannerState.FAILED
        return result

    def get_path(self) -> List[Pose]:
        """最近一次成功搜索的路径，否则为空"""
        if self._last_result is None or not self._last_result.success:
            return []
        return list(self._last_result.path)

    def get_trajectory(self) -> List[Pose]:
        if self._last_result is None or not self._last_result.success:
            return []
        return list(self._last_result.trajectory)

    def get_searched_tree(self) -> List[List[Pose]]:
        if self._engine is None:
            return []
        return self._engine.searched_tree()

    def reset(self):
        """丢弃上一次搜索的结果与搜索树，地图保留"""
        self._ensure_idle("reset")
        if self._engine is not None:
            self._engine.reset()
        self._last_result = None
        self._state = PlannerState.READY if self._engine is not None else PlannerState.INIT

    def _ensure_idle(self, operation: str):
        if self._state is PlannerState.SEARCHING:
            raise PlannerStateError(f"{operation} called while a search is running")
