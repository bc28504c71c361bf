# parking_planning/errors.py


class PlannerError(Exception):
    """规划模块的异常基类"""


class ConfigurationError(PlannerError, ValueError):
    """
    配置错误 (边界退化、分辨率 <= 0、轴距 <= 0 等)。
    在构造 / init 阶段直接抛出，保证搜索开始前暴露问题。
    """


class PlannerStateError(PlannerError, RuntimeError):
    """在错误的生命周期阶段调用了规划器 (例如搜索过程中再次调用 search)"""
