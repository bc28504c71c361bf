# parking_planning/planning/discretizer.py
import math

from parking_planning.errors import ConfigurationError
from parking_planning.types import Cell, Pose, TWO_PI


class StateDiscretizer:
    """
    连续位姿 (x, y, theta) <-> 搜索网格 Cell (ix, iy, itheta)。
    状态栅格分辨率与障碍物栅格分辨率相互独立。
    """
    def __init__(self, x_lower: float, y_lower: float, resolution: float, heading_bin_num: int = 72):
        if resolution <= 0:
            raise ConfigurationError(f"state grid resolution must be > 0, got {resolution}")
        if heading_bin_num < 1:
            raise ConfigurationError(f"heading_bin_num must be >= 1, got {heading_bin_num}")
        self.x_lower = x_lower
        self.y_lower = y_lower
        self.resolution = resolution
        self.heading_bin_num = heading_bin_num
        self.heading_resolution = TWO_PI / heading_bin_num

    def to_cell(self, pose: Pose) -> Cell:
        ix = int(math.floor((pose.x - self.x_lower) / self.resolution))
        iy = int(math.floor((pose.y - self.y_lower) / self.resolution))
        itheta = int(math.floor(pose.theta_rad / self.heading_resolution)) % self.heading_bin_num
        return Cell(ix, iy, itheta)

    def cell_center_pose(self, cell: Cell) -> Pose:
        return Pose(self.x_lower + (cell.ix + 0.5) * self.resolution,
                    self.y_lower + (cell.iy + 0.5) * self.resolution,
                    (cell.itheta % self.heading_bin_num + 0.5) * self.heading_resolution)
