#!/usr/bin/env python3
"""
Fuzzy navigation simulation
===========================

Simulates every configured vehicle type once from a random start pose in the
bottom band of the map and saves the trajectories as a JSON document.

Usage:
    python run_navigation.py
    python run_navigation.py --vehicles Heavy Agile --seed 42 --export-membership
"""
import argparse
import logging
import sys
from datetime import datetime

from fuzzynav.config import load_config, DEFAULT_CONFIG_PATH
from fuzzynav.errors import FuzzyNavError
from fuzzynav.simulation.simulator import simulate_vehicles
from fuzzynav.utils.log_utils import setup_logging
from fuzzynav.utils.save import save_multi_vehicle, export_membership_curves

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Fuzzy-logic vehicle navigation simulation")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="scenario JSON file")
    parser.add_argument("--vehicles", nargs="+", default=None, help="vehicle types (Heavy, Standard, Agile, UltraAgile)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--dt", type=float, default=None)
    parser.add_argument("--max_time", type=float, default=None)
    parser.add_argument("--output", default="output")
    parser.add_argument("--export-membership", action="store_true", help="write membership curves as CSV")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")
    args = parser.parse_args()
    setup_logging(args.verbose, args.quiet)

    try:
        config = load_config(args.config, vehicle_types=args.vehicles, dt=args.dt, max_time=args.max_time)

        print("=" * 60)
        print("FUZZY NAVIGATION SIMULATION")
        print("=" * 60)
        print(f"Vehicles: {', '.join(config.vehicle_types)}")
        print(f"Target: ({config.target_x}, {config.target_y}) @ {config.required_heading_deg} deg")
        print()

        start_time = datetime.now()
        results = simulate_vehicles(config, seed=args.seed)
        path = save_multi_vehicle(results, folder=args.output)

        if args.export_membership:
            for vtype in config.vehicle_types:
                export_membership_curves(vtype, folder=f"{args.output}/membership")

        print()
        print(f"{'Vehicle':<12} {'Status':<8} {'Time (s)':>9} {'Distance':>9} {'Final dist':>10} {'Angle err':>9}")
        for r in results:
            m = r.metrics
            t = f"{m.arrival_time:.2f}" if m.success else "-"
            print(f"{r.vehicle_type:<12} {r.status.value:<8} {t:>9} {m.distance_traveled:>9.1f} "
                  f"{m.final_distance_to_target:>10.1f} {m.final_angle_error:>9.2f}")
        print()
        print(f"Duration: {datetime.now() - start_time}")
        print(f"Results saved to: {path}")

    except FuzzyNavError as e:
        logger.error(f"Invalid setup: {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
