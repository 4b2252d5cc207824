"""
Kinematic simulator.

State machine: RUNNING -> ARRIVED | TIMEOUT. Each tick (fixed dt):

    1. ask the controller for an angular rate (deg/s)
    2. clamp it to +/- maneuverability, i.e. at most m * dt of heading change
    3. integrate heading, then position at constant velocity
    4. accumulate distance travelled (v * dt)
    5. append a TrajectoryPoint
    6. check termination: ARRIVED when distance < arrival_distance and the
       arrival-heading error < arrival_angle; TIMEOUT when elapsed >= max_time

Metrics are computed once, when the run terminates.
"""
from __future__ import annotations
from dataclasses import replace
import logging
import math
from typing import List, Optional, Union

import numpy as np

from fuzzynav.config import SimulationConfig
from fuzzynav.core.geometry import distance, normalize_angle, clamp
from fuzzynav.core.vehicle import VehicleType, VehicleState, get_preset, parse_vehicle_type
from fuzzynav.core.world import World
from fuzzynav.errors import InvalidParameter
from fuzzynav.navigation.controller import NavigationController, APPROACH_RADIUS, OFFSET_SCALE
from fuzzynav.simulation.types import SimStatus, TrajectoryPoint, SimulationMetrics, SimulationResult

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL_S = 5.0


class Simulator:
    def __init__(self, vehicle_type: Union[str, VehicleType], world: World, dt: float = 0.05,
                 max_time: float = 600.0, arrival_distance: float = 25.0, arrival_angle_deg: float = 2.0,
                 initial_state: Optional[VehicleState] = None, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None, approach_radius: float = APPROACH_RADIUS,
                 offset_scale: float = OFFSET_SCALE, controller: Optional[NavigationController] = None):
        if dt <= 0 or max_time <= 0:
            raise InvalidParameter(f"dt and max_time must be positive, got dt={dt}, max_time={max_time}")
        self.vehicle_type = parse_vehicle_type(vehicle_type)
        self.preset = get_preset(self.vehicle_type)
        self.world = world
        self.dt = dt
        self.max_time = max_time
        self.max_ticks = max(1, math.ceil(max_time / dt - 1e-9))
        self.arrival_distance = arrival_distance
        self.arrival_angle = math.radians(arrival_angle_deg)
        self.controller = controller or NavigationController(
            self.preset, world.target, approach_radius=approach_radius, offset_scale=offset_scale)

        if initial_state is None:
            initial_state = world.random_start(rng if rng is not None else np.random.default_rng(seed))
        self.initial_state = replace(initial_state, heading=normalize_angle(initial_state.heading))
        self.state = replace(self.initial_state)

        self.status = SimStatus.RUNNING
        self.ticks = 0
        self.time = 0.0
        self.trajectory: List[TrajectoryPoint] = []
        self._result: Optional[SimulationResult] = None

    @classmethod
    def from_config(cls, config: SimulationConfig, vehicle_type: Union[str, VehicleType],
                    seed: Optional[int] = None, initial_state: Optional[VehicleState] = None,
                    rng: Optional[np.random.Generator] = None) -> "Simulator":
        return cls(
            vehicle_type, config.world(), dt=config.dt, max_time=config.max_time,
            arrival_distance=config.arrival_distance, arrival_angle_deg=config.arrival_angle_deg,
            initial_state=initial_state, rng=rng, seed=seed,
            approach_radius=config.approach_radius, offset_scale=config.offset_scale,
        )

    @property
    def name(self) -> str:
        return self.vehicle_type.value

    def distance_to_target(self) -> float:
        return distance(self.state.position, self.world.target.position)

    def arrival_angle_error(self) -> float:
        """|required heading - heading| in radians, wrapped."""
        return abs(normalize_angle(self.world.target.required_heading - self.state.heading))

    def step(self) -> SimStatus:
        if self.status is not SimStatus.RUNNING:
            return self.status

        control = self.controller.compute(self.state)
        m = self.preset.maneuverability
        rate = clamp(control.adjustment, -m, m)

        v = self.preset.constant_velocity
        s = self.state
        s.heading = normalize_angle(s.heading + math.radians(rate) * self.dt)
        s.x += v * math.cos(s.heading) * self.dt
        s.y += v * math.sin(s.heading) * self.dt
        s.distance_traveled += v * self.dt

        self.ticks += 1
        self.time = self.ticks * self.dt
        dist = self.distance_to_target()
        self.trajectory.append(TrajectoryPoint(
            t=self.time, x=s.x, y=s.y, angle=math.degrees(s.heading),
            velocity=v, distance_to_target=dist,
        ))

        if dist < self.arrival_distance and self.arrival_angle_error() < self.arrival_angle:
            self.status = SimStatus.ARRIVED
            logger.info(f"[SIM] {self.name} arrived at t={self.time:.2f}s "
                        f"(distance={dist:.2f}, angle error={math.degrees(self.arrival_angle_error()):.2f} deg)")
        elif self.ticks >= self.max_ticks:
            self.status = SimStatus.TIMEOUT
            logger.info(f"[SIM] {self.name} timed out at t={self.time:.2f}s (distance={dist:.2f})")
        return self.status

    def run(self) -> SimulationResult:
        """Step until ARRIVED or TIMEOUT and return the result (computed once)."""
        if self._result is not None:
            return self._result
        s0 = self.initial_state
        logger.info(f"[SIM] {self.name}: start=({s0.x:.1f}, {s0.y:.1f}) @ {math.degrees(s0.heading):.1f} deg, "
                    f"v={self.preset.constant_velocity:.1f}, m={self.preset.maneuverability:.1f} deg/s, "
                    f"dt={self.dt}, max_time={self.max_time}")
        progress_every = max(1, round(PROGRESS_INTERVAL_S / self.dt))
        while self.step() is SimStatus.RUNNING:
            if self.ticks % progress_every == 0:
                logger.debug(f"[SIM] t={self.time:7.2f}s pos=({self.state.x:6.1f}, {self.state.y:6.1f}) "
                             f"dist={self.distance_to_target():6.1f} angle={math.degrees(self.state.heading):6.1f}")
        self._result = self._finish()
        return self._result

    def metrics(self) -> SimulationMetrics:
        arrived = self.status is SimStatus.ARRIVED
        return SimulationMetrics(
            success=arrived,
            arrival_time=self.time if arrived else None,
            distance_traveled=self.state.distance_traveled,
            final_angle_error=math.degrees(self.arrival_angle_error()),
            final_distance_to_target=self.distance_to_target(),
        )

    def _finish(self) -> SimulationResult:
        return SimulationResult(
            vehicle_type=self.name,
            trajectory=list(self.trajectory),
            metrics=self.metrics(),
            status=self.status,
            initial_state=self.initial_state.to_dict(),
            diagnostics={
                "ticks": self.ticks,
                "defuzzification_fallbacks": self.controller.fallback_count,
            },
        )


def simulate_vehicles(config: SimulationConfig, seed: Optional[int] = None) -> List[SimulationResult]:
    """Run every configured vehicle type once, each with its own random start."""
    children = np.random.SeedSequence(seed).spawn(len(config.vehicle_types))
    results = []
    for vtype, child in zip(config.vehicle_types, children):
        sim = Simulator.from_config(config, vtype, rng=np.random.default_rng(child))
        results.append(sim.run())
    return results


__all__ = ['Simulator', 'simulate_vehicles']
