# parking_planning/map/__init__.py

from .base import MapBase
from .grid_map import GridMap
from .occupancy import OccupancyGrid, load_occupancy_grid, yaw_from_quaternion

__all__ = ["MapBase", "GridMap", "OccupancyGrid", "load_occupancy_grid", "yaw_from_quaternion"]
