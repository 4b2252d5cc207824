"""
Navigation controller.

Turns a vehicle pose and a target into the three crisp fuzzy inputs, runs the
inference engine and reads back an angular rate in deg/s.

Final approach: within `approach_radius` of the target the heading error is
measured against an aim point pulled back along the arrival-heading axis
(see `geometry.approach_point`), so the vehicle converges onto the required
arrival heading instead of a straight-line approach.

When no rule fires (DefuzzificationUndefined) the controller holds the current
heading for that tick and counts the event in `fallback_count`.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from typing import Optional

from fuzzynav.core.geometry import Point, distance, angular_error, approach_point
from fuzzynav.core.vehicle import VehiclePreset, VehicleState
from fuzzynav.core.world import Target
from fuzzynav.errors import DefuzzificationUndefined, InvalidParameter
from fuzzynav.fuzzy.engine import InferenceEngine
from fuzzynav.navigation.rulebase import (
    DISTANCE, ANGULAR_ERROR, RELATIVE_VELOCITY, STEERING, engine_for,
)

logger = logging.getLogger(__name__)

APPROACH_RADIUS = 120.0
OFFSET_SCALE = 100.0


@dataclass(frozen=True)
class ControlOutput:
    adjustment: float       # deg/s
    distance: float         # to the literal target
    angular_error: float    # deg, against the aim point
    aim: Point
    fallback: bool = False


class NavigationController:
    def __init__(self, preset: VehiclePreset, target: Target, engine: Optional[InferenceEngine] = None,
                 approach_radius: float = APPROACH_RADIUS, offset_scale: float = OFFSET_SCALE):
        if approach_radius <= 0:
            raise InvalidParameter(f"approach_radius must be positive, got {approach_radius}")
        if offset_scale < 0:
            raise InvalidParameter(f"offset_scale must be non-negative, got {offset_scale}")
        self.preset = preset
        self.target = target
        self.engine = engine if engine is not None else engine_for(preset)
        self.approach_radius = approach_radius
        self.offset_scale = offset_scale
        self.relative_velocity = preset.relative_velocity
        self.fallback_count = 0

    def aim_point(self, dist: float) -> Point:
        return approach_point(self.target.position, self.target.required_heading, dist,
                              self.approach_radius, self.offset_scale)

    def compute(self, state: VehicleState) -> ControlOutput:
        """Angular adjustment (deg/s) for the current pose. Never mutates `state`."""
        position = state.position
        dist = distance(position, self.target.position)
        aim = self.aim_point(dist)
        error_deg = math.degrees(angular_error(position, state.heading, aim))
        try:
            out = self.engine.compute({
                DISTANCE: dist,
                ANGULAR_ERROR: error_deg,
                RELATIVE_VELOCITY: self.relative_velocity,
            })
        except DefuzzificationUndefined:
            self.fallback_count += 1
            logger.debug(f"[NAV] No rule fired (distance={dist:.1f}, error={error_deg:.2f} deg): holding heading")
            return ControlOutput(0.0, dist, error_deg, aim, fallback=True)
        return ControlOutput(out[STEERING], dist, error_deg, aim)


__all__ = ['NavigationController', 'ControlOutput', 'APPROACH_RADIUS', 'OFFSET_SCALE']
