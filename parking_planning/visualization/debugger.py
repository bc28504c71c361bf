# parking_planning/visualization/debugger.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from parking_planning.types import Pose


class IDebugger(ABC):
    """调试器接口，搜索过程中的各个关键点都会回调"""
    @abstractmethod
    def record_open_set_node(self, pose: Pose, f: float = 0.0, h: float = 0.0):
        """记录加入 OpenSet 的节点及其代价"""
        pass

    @abstractmethod
    def record_current_expansion(self, pose: Pose):
        """记录当前正在扩展的节点"""
        pass

    @abstractmethod
    def record_edge(self, start_pose: Pose, end_pose: Pose):
        """记录搜索树的一条边 (父节点 -> 子节点)"""
        pass

    @abstractmethod
    def set_cost_map(self, cost_map: Any):
        """设置底图"""
        pass

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        pass


class NoOpDebugger(IDebugger):
    """
    空对象 (Null Object)：规划器未传入 debugger 时默认使用它，
    搜索循环里无需判断 debugger 是否为 None。
    """
    def record_open_set_node(self, pose: Pose, f: float = 0.0, h: float = 0.0): pass
    def record_current_expansion(self, pose: Pose): pass
    def record_edge(self, start_pose: Pose, end_pose: Pose): pass
    def set_cost_map(self, cost_map: Any): pass


class PlanningDebugger(IDebugger):
    """
    真正的记录器
    用于开发和演示，记录的数据可以直接交给 plotter 回放。
    """
    def __init__(self):
        # 存储格式: List[Tuple[x, y, f, h]]
        self.open_set_history: List[Tuple[float, float, float, float]] = []
        self.expanded_nodes: List[Pose] = []
        self.edges: List[Tuple[Pose, Pose]] = []
        self.cost_map = None
        self.messages: List[Tuple[str, str]] = []

    def record_open_set_node(self, pose: Pose, f: float = 0.0, h: float = 0.0):
        # 存下 f 和 h，以后可以按 f 值着色画热力图
        self.open_set_history.append((pose.x, pose.y, f, h))

    def record_current_expansion(self, pose: Pose):
        self.expanded_nodes.append(pose)

    def record_edge(self, start_pose: Pose, end_pose: Pose):
        self.edges.append((start_pose, end_pose))

    def set_cost_map(self, cost_map: Any):
        self.cost_map = cost_map

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        self.messages.append((level, message))

    def clear(self):
        self.open_set_history.clear()
        self.expanded_nodes.clear()
        self.edges.clear()
        self.messages.clear()
