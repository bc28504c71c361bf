# parking_planning/planning/planners/hybrid_a_star.py
import heapq
import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from parking_planning.collision.checker import CollisionChecker
from parking_planning.map.grid_map import GridMap
from parking_planning.planning.analytic import AnalyticShot, AnalyticShotGenerator
from parking_planning.planning.discretizer import StateDiscretizer
from parking_planning.planning.heuristics.base import Heuristic
from parking_planning.planning.primitives import MotionPrimitiveSet
from parking_planning.types import Cell, Direction, Pose, SearchResult, SearchStatus
from parking_planning.visualization.debugger import IDebugger, NoOpDebugger
from .base import PlannerBase

logger = logging.getLogger(__name__)

# 代价比较容差
_EPS = 1e-9


@dataclass
class HybridNode:
    cell: Cell                 # (ix, iy, itheta)
    pose: Pose                 # 连续位姿
    g: float
    h: float
    direction: Direction = Direction.FORWARD
    steering_index: int = 0
    parent: int = -1           # 父节点在 node 数组中的下标，-1 为起点
    samples: List[Pose] = field(default_factory=list)  # 父节点 -> 本节点的采样 (不含父节点)
    direction_changes: int = 0

    @property
    def f(self) -> float:
        return self.g + self.h


class HybridAStarPlanner(PlannerBase):
    """
    Hybrid A* Planner for Ackermann Vehicles.
    Combines discrete heuristics with continuous kinematic expansion.

    - 节点按 (ix, iy, itheta) 分桶去重，但保存真实的连续位姿
    - OpenSet 为 heapq，不做 decrease-key：更优的节点重新入堆，旧条目出堆时丢弃
    - 每次扩展都尝试一次 Analytic Shot，第一次成功即结束
    """

    def __init__(self,
                 grid_map: GridMap,
                 discretizer: StateDiscretizer,
                 primitives: MotionPrimitiveSet,
                 collision_checker: CollisionChecker,
                 shot_generator: AnalyticShotGenerator,
                 heuristic: Heuristic,
                 max_iterations: int = 100000):
        self.grid_map = grid_map
        self.discretizer = discretizer
        self.primitives = primitives
        self.collision_checker = collision_checker
        self.shot_generator = shot_generator
        self.heuristic = heuristic
        self.max_iterations = max_iterations

        self._nodes: List[HybridNode] = []
        self._open_set: List[Tuple[float, float, int, int, int]] = []
        self._best_g: Dict[Cell, float] = {}
        self._closed: Dict[Cell, float] = {}
        self._seq = 0

    def reset(self):
        """清空上一次搜索留下的全部数据"""
        self._nodes = []
        self._open_set = []
        self._best_g = {}
        self._closed = {}
        self._seq = 0

    def plan(self,
             start: Pose,
             goal: Pose,
             debugger: Optional[IDebugger] = None,
             should_stop: Optional[Callable[[], bool]] = None) -> SearchResult:
        logger.info(f"[HybridA*] Plan requested: {start} -> {goal}")

        if debugger is None:
            debugger = NoOpDebugger()
        debugger.set_cost_map(self.grid_map)

        self.reset()

        # 1. Endpoint validity
        for name, pose in (("start", start), ("goal", goal)):
            if not self.grid_map.is_inside(pose.x, pose.y):
                logger.warning(f"[HybridA*] {name} {pose} is outside the map")
                debugger.log(f"{name} outside map", 'WARN', {"pose": pose})
                return SearchResult(SearchStatus.OUT_OF_BOUNDS)
            if self.collision_checker.check(pose):
                logger.warning(f"[HybridA*] {name} {pose} is in collision")
                debugger.log(f"{name} in collision", 'WARN', {"pose": pose})
                return SearchResult(SearchStatus.COLLISION_AT_ENDPOINT)

        # 2. Initialization
        self.heuristic.prepare(goal)
        start_node = HybridNode(self.discretizer.to_cell(start), start, 0.0,
                                self.heuristic.estimate(start, goal))
        self._push(start_node)

        iterations = 0
        expanded = 0

        while self._open_set:
            if iterations >= self.max_iterations:
                logger.warning(f"[HybridA*] Max iterations ({self.max_iterations}) reached.")
                return SearchResult(SearchStatus.LIMIT_REACHED, iterations=iterations, expanded=expanded)
            if should_stop is not None and should_stop():
                logger.info("[HybridA*] Search cancelled.")
                return SearchResult(SearchStatus.LIMIT_REACHED, iterations=iterations, expanded=expanded)
            iterations += 1

            index = self._pop()
            if index is None:
                continue
            current = self._nodes[index]
            expanded += 1

            debugger.record_current_expansion(current.pose)

            # 3. Analytic Expansion
            shot = self.shot_generator.try_shot(current.pose, goal)
            if shot is not None:
                result = self._reconstruct(index, shot, goal)
                result.iterations = iterations
                result.expanded = expanded
                logger.info(f"[HybridA*] Path found: {len(result.path)} poses, cost={result.cost:.3f}, "
                            f"iterations={iterations}")
                debugger.log("path found", 'INFO', {"cost": result.cost, "iterations": iterations})
                return result

            # 4. Kinematic Expansion
            self._expand(index, goal, debugger)

        logger.info(f"[HybridA*] Open set exhausted after {iterations} iterations, no path.")
        debugger.log("open set exhausted", 'WARN', {"iterations": iterations})
        return SearchResult(SearchStatus.EXHAUSTED, iterations=iterations, expanded=expanded)

    def _expand(self, index: int, goal: Pose, debugger: IDebugger):
        current = self._nodes[index]
        for primitive in self.primitives:
            samples = self.primitives.sample(current.pose, primitive)
            if not self.collision_checker.is_free(samples):
                continue

            end_pose = samples[-1]
            cell = self.discretizer.to_cell(end_pose)
            g = current.g + self.primitives.step_cost(primitive, current.steering_index)

            # 只有严格更优才入堆
            if g + _EPS >= self._best_g.get(cell, math.inf):
                continue

            changes = current.direction_changes + (1 if primitive.direction != current.direction else 0)
            child = HybridNode(cell, end_pose, g, self.heuristic.estimate(end_pose, goal),
                               direction=primitive.direction,
                               steering_index=primitive.steering_index,
                               parent=index,
                               samples=samples,
                               direction_changes=changes)
            self._push(child)

            debugger.record_open_set_node(end_pose, child.f, child.h)
            debugger.record_edge(current.pose, end_pose)

    def _push(self, node: HybridNode) -> int:
        index = len(self._nodes)
        self._nodes.append(node)
        self._best_g[node.cell] = node.g
        # 平局依次比较 h、换向次数、入堆顺序，保证结果确定
        heapq.heappush(self._open_set, (node.f, node.h, node.direction_changes, self._seq, index))
        self._seq += 1
        return index

    def _pop(self) -> Optional[int]:
        """
        弹出堆顶并标记为已扩展，返回节点下标。
        Lazy deletion：同一 cell 已有更优的条目入堆，或已经以不高于当前的代价扩展过，
        则该条目作废，返回 None。
        """
        _, _, _, _, index = heapq.heappop(self._open_set)
        node = self._nodes[index]
        if node.g > self._best_g.get(node.cell, math.inf) + _EPS:
            return None
        finalized = self._closed.get(node.cell)
        if finalized is not None and finalized <= node.g + _EPS:
            return None
        self._closed[node.cell] = node.g
        return index

    def _reconstruct(self, index: int, shot: AnalyticShot, goal: Pose) -> SearchResult:
        chain: List[HybridNode] = []
        i = index
        while i != -1:
            chain.append(self._nodes[i])
            i = self._nodes[i].parent
        chain.reverse()

        path = [node.pose for node in chain]
        trajectory = [chain[0].pose]
        for node in chain[1:]:
            trajectory.extend(node.samples)

        if shot.poses:
            path.append(goal)
            trajectory.extend(shot.poses)
        elif path[-1] != goal:
            # 节点与目标只差浮点误差时，终点仍然用目标位姿
            path.append(goal)
            trajectory.append(goal)

        return SearchResult(SearchStatus.SUCCEEDED,
                            path=path,
                            trajectory=trajectory,
                            cost=chain[-1].g + shot.length,
                            shot=shot)

    def searched_tree(self) -> List[List[Pose]]:
        """
        搜索树的所有边，每条边为 [父节点位姿, 采样点...]，最后一个元素是子节点位姿
        """
        return [[self._nodes[node.parent].pose] + list(node.samples)
                for node in self._nodes if node.parent != -1]

    @property
    def node_count(self) -> int:
        return len(self._nodes)
