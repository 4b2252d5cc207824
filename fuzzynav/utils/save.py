"""
Persistence of simulation results, benchmarks and membership curves.

JSON documents for single and multi-vehicle runs, CSV (pandas) for raw
benchmark records, per-vehicle summaries and sampled membership curves.
"""
import os
import json
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pandas as pd

from fuzzynav.core.vehicle import get_preset, parse_vehicle_type
from fuzzynav.navigation.rulebase import engine_for
from fuzzynav.fuzzy.variables import CURVE_POINTS
from fuzzynav.utils.log_utils import append_jsonl
from fuzzynav.utils.metrics import records_frame

logger = logging.getLogger(__name__)


def _write_json(doc: dict, path: str) -> str:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    logger.info(f"[SAVE] {path}")
    return path


def multi_vehicle_document(results) -> dict:
    """{vehicles: [...], total_simulation_time}; total is the longest run."""
    return {
        "vehicles": [r.to_dict() for r in results],
        "total_simulation_time": max((r.elapsed for r in results), default=0.0),
    }


def save_result_json(result, path: str) -> str:
    """Save a single SimulationResult as a JSON document."""
    return _write_json(result.to_dict(), path)


def save_multi_vehicle(results, folder: str = "output", filename: str = "simulation_results.json") -> str:
    return _write_json(multi_vehicle_document(results), os.path.join(folder, filename))


def save_benchmark(records, summary: pd.DataFrame, sim_config, iterations: int,
                   folder: str = "output", tag: Optional[str] = None) -> Dict[str, str]:
    """
    Write a benchmark to `folder`:
        - benchmark_<tag>.json        config, iterations, per-vehicle aggregate
        - benchmark_<tag>_raw.csv     one row per run
        - benchmark_<tag>_summary.csv one row per vehicle type
        - benchmark_<tag>_runs.jsonl  one JSON record per run

    Returns the written paths keyed by kind.
    """
    os.makedirs(folder, exist_ok=True)
    tag = tag or f"{iterations}iterations_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    base = os.path.join(folder, f"benchmark_{tag}")
    records = list(records)

    doc = {
        "config": sim_config.to_dict(),
        "iterations": iterations,
        "aggregate": summary.to_dict(orient="records"),
    }
    paths = {"json": _write_json(doc, base + ".json")}

    paths["raw"] = base + "_raw.csv"
    records_frame(records).to_csv(paths["raw"], index=False)
    paths["summary"] = base + "_summary.csv"
    summary.to_csv(paths["summary"], index=False)

    paths["runs"] = base + "_runs.jsonl"
    if os.path.exists(paths["runs"]):
        os.remove(paths["runs"])
    for r in records:
        append_jsonl(paths["runs"], r.to_dict())

    logger.info(f"[SAVE] Benchmark saved: {paths['raw']}, {paths['summary']}")
    return paths


def export_membership_curves(vehicle_type, folder: str = "output/membership",
                             points: int = CURVE_POINTS) -> List[str]:
    """
    One CSV per controller variable (x column + one column per set), with the
    output universe scaled to the vehicle's maneuverability.
    """
    vtype = parse_vehicle_type(vehicle_type)
    engine = engine_for(get_preset(vtype))
    os.makedirs(folder, exist_ok=True)
    paths = []
    for var in list(engine.inputs.values()) + list(engine.outputs.values()):
        curves = var.membership_curves(points)
        xs = next(iter(curves.values()))[0]
        df = pd.DataFrame({"x": xs})
        for name, (_, ys) in curves.items():
            df[name] = ys
        path = os.path.join(folder, f"{vtype.value}_{var.name}.csv")
        df.to_csv(path, index=False)
        paths.append(path)
    logger.info(f"[SAVE] Membership curves for {vtype.value}: {len(paths)} files in {folder}")
    return paths


__all__ = ['multi_vehicle_document', 'save_result_json', 'save_multi_vehicle',
           'save_benchmark', 'export_membership_curves']
