"""
Summary statistics over many simulation runs.

Per vehicle type: success rate (percentage), arrival time statistics over
the successful runs only (0.0 when there are none), distance travelled,
final distance and final angle error. Standard deviations are population
standard deviations.
"""
from __future__ import annotations
from typing import Iterable, Tuple

import numpy as np
import pandas as pd

SUMMARY_COLUMNS = [
    'vehicle_type', 'total_runs', 'successes', 'success_rate',
    'avg_arrival_time', 'std_arrival_time', 'min_arrival_time', 'max_arrival_time',
    'avg_distance_traveled', 'std_distance_traveled',
    'avg_final_distance', 'avg_final_angle_error',
]


def calculate_stats(values) -> Tuple[float, float, float, float]:
    """(mean, std, min, max); all zero for an empty sample."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0, 0.0, 0.0, 0.0
    return float(np.mean(arr)), float(np.std(arr)), float(np.min(arr)), float(np.max(arr))


def records_frame(records: Iterable) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in records])


def summarize(records: Iterable) -> pd.DataFrame:
    """Aggregate RunRecords into one row per vehicle type (first-seen order)."""
    df = records_frame(records)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    rows = []
    for vtype, group in df.groupby('vehicle_type', sort=False):
        total = len(group)
        successes = int(group['success'].sum())
        arrivals = group.loc[group['success'].astype(bool), 'arrival_time'].astype(float)
        avg_t, std_t, min_t, max_t = calculate_stats(arrivals)
        avg_d, std_d, _, _ = calculate_stats(group['distance_traveled'])
        rows.append({
            'vehicle_type': vtype,
            'total_runs': total,
            'successes': successes,
            'success_rate': successes / total * 100.0,
            'avg_arrival_time': avg_t,
            'std_arrival_time': std_t,
            'min_arrival_time': min_t,
            'max_arrival_time': max_t,
            'avg_distance_traveled': avg_d,
            'std_distance_traveled': std_d,
            'avg_final_distance': calculate_stats(group['final_distance'])[0],
            'avg_final_angle_error': calculate_stats(group['final_angle_error'])[0],
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
