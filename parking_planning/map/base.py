# parking_planning/map/base.py
import math
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class MapBase(ABC):
    """
    轴对齐矩形区域上的规则栅格。
    子类只负责存储 (data / set_obstacle)，坐标换算在这里统一实现。
    """

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """占据矩阵 (row = y)，0 空闲，1 障碍"""

    @property
    @abstractmethod
    def bounds(self) -> Tuple[float, float, float, float]:
        """(x_lower, x_upper, y_lower, y_upper)，上界不包含"""

    @property
    @abstractmethod
    def resolution(self) -> float:
        """[m/cell]"""

    @abstractmethod
    def set_obstacle(self, x_idx: int, y_idx: int):
        pass

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def world_to_grid(self, x: float, y: float) -> Tuple[int, int]:
        """
        [关键接口] 物理坐标 -> 栅格索引
        向下取整：floor((x - x_lower) / res)，不做越界检查
        """
        x_lower, _, y_lower, _ = self.bounds
        return (int(math.floor((x - x_lower) / self.resolution)),
                int(math.floor((y - y_lower) / self.resolution)))

    def grid_to_world(self, x_idx: int, y_idx: int) -> Tuple[float, float]:
        """栅格索引 -> 格子中心的物理坐标"""
        x_lower, _, y_lower, _ = self.bounds
        return (x_lower + (x_idx + 0.5) * self.resolution,
                y_lower + (y_idx + 0.5) * self.resolution)

    def is_valid_index(self, x_idx: int, y_idx: int) -> bool:
        return 0 <= x_idx < self.width and 0 <= y_idx < self.height

    def is_inside(self, x: float, y: float) -> bool:
        x_lower, x_upper, y_lower, y_upper = self.bounds
        if not (x_lower <= x < x_upper and y_lower <= y < y_upper):
            return False
        # 范围不是分辨率整数倍时，最后半个格子不算
        return self.is_valid_index(*self.world_to_grid(x, y))

    def is_obstacle(self, x_idx: int, y_idx: int) -> bool:
        """按索引查询，越界视为障碍"""
        if not self.is_valid_index(x_idx, y_idx):
            return True
        return bool(self.data[y_idx, x_idx] != 0)

    def is_occupied(self, x: float, y: float) -> bool:
        """按物理坐标查询，越界视为障碍"""
        if not self.is_inside(x, y):
            return True
        return self.is_obstacle(*self.world_to_grid(x, y))
