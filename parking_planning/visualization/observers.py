# parking_planning/visualization/observers.py
import logging
import os
import time
from typing import Any, Dict, Optional

from parking_planning.types import Pose
from .debugger import NoOpDebugger, PlanningDebugger

logger = logging.getLogger(__name__)

# 调试器字符串级别 -> logging 级别
_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'ERROR': logging.ERROR,
}


class EfficientObserver(NoOpDebugger):
    """
    高效运行模式
    不记录搜索过程，只把 ERROR 转发给模块 logger。
    """
    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        if level == 'ERROR':
            logger.error(message)


class DebugObserver(PlanningDebugger):
    """
    Debug 模式
    分析一次规划为什么失败或效果不好：每个扩展节点和搜索事件都写进独立的日志文件，
    同时保留 PlanningDebugger 的回放数据，方便与图对照。
    """
    def __init__(self, log_dir: str = "logs/planning_debug"):
        super().__init__()

        os.makedirs(log_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        self.log_file = os.path.join(log_dir, f"plan_debug_{timestamp}.log")

        # 名字带对象 id：同一秒内的两个 observer 不共用 handler
        self.logger = logging.getLogger(f"parking_planning.debug.{timestamp}.{id(self)}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        handler = logging.FileHandler(self.log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        self.logger.addHandler(handler)

        self.logger.info("=== Debug Session Started ===")

    def record_current_expansion(self, pose: Pose):
        super().record_current_expansion(pose)
        self.logger.debug(f"Expanding: {pose}")

    def set_cost_map(self, cost_map: Any):
        super().set_cost_map(cost_map)
        self.logger.info(f"Map: {cost_map}")

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        super().log(message, level, payload)
        text = f"{message} | Payload: {payload}" if payload else message
        self.logger.log(_LEVELS.get(level, logging.INFO), text)

    def close(self):
        """释放文件句柄"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
