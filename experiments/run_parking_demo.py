import argparse
import logging
import math
import os
import sys
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# --- Path Setup ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parking_planning.collision import CollisionConfig, CollisionMethod
from parking_planning.config import PlannerConfig
from parking_planning.flow import PlanningFlow
from parking_planning.planner import KinodynamicPlanner
from parking_planning.types import Pose
from parking_planning.visualization.observers import DebugObserver
from parking_planning.visualization.plotter import plot_search_result
from experiments.scenarios import ScenarioConfig as cfg, build_parking_lot


def run_demo(footprint=False, debug=False, goal_yaw_deg=0.0, output="parking_demo.png"):
    print(f"=== Parking Demo (footprint={footprint}, goal_yaw={goal_yaw_deg} deg) ===")

    collision_config = CollisionConfig(method=CollisionMethod.FOOTPRINT if footprint else CollisionMethod.POINT)
    planner = KinodynamicPlanner(PlannerConfig(), collision_config)
    flow = PlanningFlow(planner, map_resolution=cfg.FINE_RESOLUTION)

    goal = Pose(cfg.GOAL_POSE.x, cfg.GOAL_POSE.y, math.radians(goal_yaw_deg))
    flow.push_map(build_parking_lot(*cfg.MAP_SIZE, resolution=cfg.MAP_RESOLUTION))
    # 先加载地图，再单独搜索一次以便挂调试器
    flow.run()

    observer = DebugObserver(log_dir=cfg.LOG_DIR) if debug else None
    if observer is not None:
        print(f"Debug Log initialized: {observer.log_file}")

    t0 = time.perf_counter()
    result = planner.search(cfg.START_POSE, goal, debugger=observer)
    duration_ms = (time.perf_counter() - t0) * 1000

    print(f"Planning Finished. Status: {result.status.value}, Time: {duration_ms:.2f} ms, "
          f"Expanded: {result.expanded}, Cost: {result.cost:.2f}")

    fig, _ = plot_search_result(planner.grid_map, cfg.START_POSE, goal, result,
                                searched_tree=planner.get_searched_tree(),
                                vehicle=planner.vehicle if footprint else None)
    fig.savefig(output, dpi=150)
    plt.close(fig)
    print(f"Saved figure to {output}")

    if observer is not None:
        observer.close()
    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Hybrid A* parking demo")
    parser.add_argument("--footprint", action="store_true", help="Use full footprint collision checking")
    parser.add_argument("--debug", action="store_true", help="Write a detailed debug log under logs/")
    parser.add_argument("--goal-yaw", type=float, default=0.0, help="Goal heading in degrees")
    parser.add_argument("--output", type=str, default="parking_demo.png", help="Output PNG path")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")

    run_demo(footprint=args.footprint, debug=args.debug, goal_yaw_deg=args.goal_yaw, output=args.output)
