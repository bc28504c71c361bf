import argparse
import logging
import os
import sys
import time
from dataclasses import replace

import pandas as pd

# --- 路径设置 ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parking_planning.flow import PlanningFlow
from parking_planning.planner import KinodynamicPlanner
from parking_planning.types import Direction
from experiments.scenarios import ScenarioConfig as cfg, build_parking_lot

logger = logging.getLogger("benchmark_penalties")


def count_maneuvers(planner, path):
    """统计路径上的转向段数、倒车段数 (不含最后的解析段)"""
    steering, reversing = 0, 0
    for a, b in zip(path[:-1], path[1:]):
        for primitive in planner.primitives:
            end = planner.primitives.apply(a, primitive)
            if abs(end.x - b.x) < 1e-6 and abs(end.y - b.y) < 1e-6:
                steering += 0 if primitive.is_straight else 1
                reversing += 1 if primitive.direction == Direction.REVERSE else 0
                break
    return steering, reversing


def run_benchmark(penalties, output_csv):
    grid = build_parking_lot(*cfg.MAP_SIZE, resolution=cfg.MAP_RESOLUTION)
    results = []

    print(f"{'Penalty':<10} | {'Status':<12} | {'Time(ms)':<10} | {'Expanded':<10} | {'Cost':<10} | {'Steer':<6}")
    print("-" * 72)

    for penalty in penalties:
        config = replace(cfg.PLANNER_CONFIG, steering_penalty=penalty)
        planner = KinodynamicPlanner(config)
        flow = PlanningFlow(planner, map_resolution=cfg.FINE_RESOLUTION)
        flow.push_map(grid)
        flow.push_start(cfg.START_POSE)
        flow.push_goal(cfg.GOAL_POSE)

        t0 = time.perf_counter()
        result = flow.run()[0]
        duration_ms = (time.perf_counter() - t0) * 1000

        steering, reversing = count_maneuvers(planner, planner.get_path())
        row = {
            "steering_penalty": penalty,
            "status": result.status.value,
            "time_ms": duration_ms,
            "expanded": result.expanded,
            "cost": result.cost,
            "path_poses": len(result.path),
            "steering_segments": steering,
            "reversing_segments": reversing,
        }
        results.append(row)
        print(f"{penalty:<10.2f} | {row['status']:<12} | {duration_ms:<10.1f} | "
              f"{row['expanded']:<10} | {row['cost']:<10.2f} | {steering:<6}")

    df = pd.DataFrame(results)
    os.makedirs(os.path.dirname(os.path.abspath(output_csv)), exist_ok=True)
    df.to_csv(output_csv, index=False)
    logger.info(f"Saved results to {output_csv}")
    return df


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sweep steering_penalty on the parking-lot scenario")
    parser.add_argument("--penalties", type=float, nargs="+", default=[1.0, 1.5, 2.0, 3.0])
    parser.add_argument("--output", type=str, default=os.path.join(cfg.LOG_DIR, "penalty_sweep.csv"))
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    run_benchmark(args.penalties, args.output)
