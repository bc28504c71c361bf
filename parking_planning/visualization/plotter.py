# 绘图逻辑 (Matplotlib)
# parking_planning/visualization/plotter.py
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Polygon

from parking_planning.map.grid_map import GridMap
from parking_planning.types import Pose, SearchResult
from parking_planning.vehicles.base import VehicleBase


def draw_grid(ax, grid_map: GridMap):
    x_lower, x_upper, y_lower, y_upper = grid_map.bounds
    # 只画完整格子覆盖的范围
    x_max = x_lower + grid_map.width * grid_map.resolution
    y_max = y_lower + grid_map.height * grid_map.resolution
    ax.imshow(grid_map.data, cmap='Greys', origin='lower',
              extent=[x_lower, x_max, y_lower, y_max],
              vmin=0, vmax=1, alpha=0.8)
    ax.set_xlim(x_lower, x_upper)
    ax.set_ylim(y_lower, y_upper)


def draw_tree(ax, edges: Sequence[Sequence[Pose]], color: str = 'tab:cyan'):
    for edge in edges:
        ax.plot([p.x for p in edge], [p.y for p in edge], color=color, linewidth=0.4, alpha=0.6)


def draw_vehicle(ax, vehicle: VehicleBase, pose: Pose, color: str = 'tab:blue'):
    poly = vehicle.get_collision_polygon(pose)
    ax.add_patch(Polygon(poly, closed=True, fill=False, edgecolor=color, linewidth=0.8))


def plot_search_result(grid_map: GridMap,
                       start: Pose,
                       goal: Pose,
                       result: Optional[SearchResult] = None,
                       searched_tree: Optional[List[List[Pose]]] = None,
                       vehicle: Optional[VehicleBase] = None,
                       ax=None,
                       title: Optional[str] = None):
    """
    底图 + 搜索树 + 轨迹 + 起终点。
    传入 vehicle 时在 path 的每个位姿上画车身轮廓。
    :return: (fig, ax)
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 8))
    else:
        fig = ax.figure

    draw_grid(ax, grid_map)

    if searched_tree:
        draw_tree(ax, searched_tree)

    if result is not None and result.success:
        ax.plot([p.x for p in result.trajectory], [p.y for p in result.trajectory],
                'r-', linewidth=1.5, label='Trajectory')
        ax.plot([p.x for p in result.path], [p.y for p in result.path],
                'r.', markersize=4)
        if vehicle is not None:
            for pose in result.path:
                draw_vehicle(ax, vehicle, pose)

    ax.plot(start.x, start.y, 'go', markersize=8, label='Start')
    ax.plot(goal.x, goal.y, 'mx', markersize=8, label='Goal')

    if title is None and result is not None:
        title = f"{result.status.value}  cost={result.cost:.2f}  expanded={result.expanded}"
    if title:
        ax.set_title(title)
    ax.set_aspect('equal')
    ax.legend(loc='upper right')
    return fig, ax
