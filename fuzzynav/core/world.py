"""
Map, target and start band.

Vehicles start inside a horizontal band along the bottom of the map
(`start_band` fraction of the height) with a uniformly random heading, and
must reach the target travelling along `required_heading`.
"""
from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

from fuzzynav.core.geometry import Point, TWO_PI, normalize_angle
from fuzzynav.core.vehicle import VehicleState
from fuzzynav.errors import InvalidParameter


@dataclass(frozen=True)
class Target:
    x: float
    y: float
    required_heading: float = math.pi / 2.0   # radians, 90 deg = "up"

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class World:
    width: float
    height: float
    target: Target
    start_band: float = 0.08

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidParameter(f"Map size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.start_band <= 1.0:
            raise InvalidParameter(f"start_band must be in (0, 1], got {self.start_band}")

    def random_start(self, rng: np.random.Generator) -> VehicleState:
        x = float(rng.uniform(0.0, self.width))
        y = float(rng.uniform(0.0, self.height * self.start_band))
        heading = normalize_angle(float(rng.uniform(0.0, TWO_PI)))
        return VehicleState(x=x, y=y, heading=heading)


__all__ = ['Target', 'World']
