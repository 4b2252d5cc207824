"""
Value types produced by the kinematic simulator.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class SimStatus(Enum):
    RUNNING = "running"
    ARRIVED = "arrived"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class TrajectoryPoint:
    t: float
    x: float
    y: float
    angle: float                # deg
    velocity: float
    distance_to_target: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationMetrics:
    success: bool
    arrival_time: Optional[float]
    distance_traveled: float
    final_angle_error: float    # deg
    final_distance_to_target: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SimulationResult:
    vehicle_type: str
    trajectory: List[TrajectoryPoint]
    metrics: SimulationMetrics
    status: SimStatus
    initial_state: Dict[str, float] = field(default_factory=dict)
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed(self) -> float:
        return self.trajectory[-1].t if self.trajectory else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """JSON document: vehicle_type, trajectory, metrics (+ initial_state, diagnostics)."""
        return {
            "vehicle_type": self.vehicle_type,
            "trajectory": [p.to_dict() for p in self.trajectory],
            "metrics": self.metrics.to_dict(),
            "initial_state": dict(self.initial_state),
            "diagnostics": dict(self.diagnostics),
        }


__all__ = ['SimStatus', 'TrajectoryPoint', 'SimulationMetrics', 'SimulationResult']
