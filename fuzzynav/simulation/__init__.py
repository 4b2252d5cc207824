"""Kinematic simulation of a constant-velocity vehicle driven by the fuzzy controller."""
from .types import SimStatus, TrajectoryPoint, SimulationMetrics, SimulationResult
from .simulator import Simulator, simulate_vehicles
