"""
Vehicle presets and the mutable kinematic state.

Presets are a fixed table selected before a run starts. Velocity is held at
`constant_velocity` (30 % of the top speed) for the whole run; the
acceleration figure is part of the preset data but no acceleration model
is exercised.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
import math
from typing import Union

from fuzzynav.core.geometry import Point
from fuzzynav.errors import InvalidParameter


class VehicleType(Enum):
    HEAVY = "Heavy"
    STANDARD = "Standard"
    AGILE = "Agile"
    ULTRA_AGILE = "UltraAgile"


@dataclass(frozen=True)
class VehiclePreset:
    size: float
    max_speed: float
    constant_velocity: float
    maneuverability: float      # deg/s, maximum turning rate
    max_acceleration: float

    @property
    def relative_velocity(self) -> float:
        return self.constant_velocity / self.max_speed


PRESETS = {
    VehicleType.HEAVY: VehiclePreset(size=15.0, max_speed=50.0, constant_velocity=15.0,
                                     maneuverability=20.0, max_acceleration=10.0),
    VehicleType.STANDARD: VehiclePreset(size=10.0, max_speed=80.0, constant_velocity=24.0,
                                        maneuverability=35.0, max_acceleration=20.0),
    VehicleType.AGILE: VehiclePreset(size=6.0, max_speed=100.0, constant_velocity=30.0,
                                     maneuverability=60.0, max_acceleration=30.0),
    VehicleType.ULTRA_AGILE: VehiclePreset(size=8.0, max_speed=70.0, constant_velocity=21.0,
                                           maneuverability=90.0, max_acceleration=25.0),
}


def parse_vehicle_type(name: Union[str, VehicleType]) -> VehicleType:
    """Case-insensitive lookup by display name ("Heavy", "ultraagile", "ULTRA_AGILE"...)."""
    if isinstance(name, VehicleType):
        return name
    key = str(name).strip().lower().replace("_", "").replace("-", "")
    for vtype in VehicleType:
        if key in (vtype.value.lower(), vtype.name.lower().replace("_", "")):
            return vtype
    valid = ", ".join(v.value for v in VehicleType)
    raise InvalidParameter(f"Unknown vehicle type: {name}. Valid types: {valid}")


def get_preset(vehicle_type: Union[str, VehicleType]) -> VehiclePreset:
    return PRESETS[parse_vehicle_type(vehicle_type)]


@dataclass
class VehicleState:
    x: float
    y: float
    heading: float                  # radians, (-pi, pi]
    distance_traveled: float = 0.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["heading_deg"] = math.degrees(self.heading)
        return d


__all__ = ['VehicleType', 'VehiclePreset', 'PRESETS', 'parse_vehicle_type', 'get_preset', 'VehicleState']
