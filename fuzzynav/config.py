"""
Load the simulation scenario configuration.

Keys of the JSON file mirror the fields of `SimulationConfig`; missing keys
fall back to the defaults below, unknown keys are ignored with a warning.
A missing file yields the defaults.
"""
from __future__ import annotations
from dataclasses import dataclass, fields, asdict
import json
import logging
import math
import os
from typing import Any, Optional, Tuple

from fuzzynav.core.vehicle import parse_vehicle_type
from fuzzynav.core.world import Target, World
from fuzzynav.errors import InvalidParameter

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("data", "navigation", "scenario.json")


@dataclass(frozen=True)
class SimulationConfig:
    map_width: float = 1000.0
    map_height: float = 800.0
    target_x: float = 500.0
    target_y: float = 700.0
    required_heading_deg: float = 90.0
    start_band: float = 0.08
    dt: float = 0.05
    max_time: float = 600.0
    arrival_distance: float = 25.0
    arrival_angle_deg: float = 2.0
    approach_radius: float = 120.0
    offset_scale: float = 100.0
    vehicle_types: Tuple[str, ...] = ("Heavy", "Standard", "Agile")

    def __post_init__(self):
        object.__setattr__(self, 'vehicle_types', tuple(self.vehicle_types))
        validate(self)

    def target(self) -> Target:
        return Target(self.target_x, self.target_y, math.radians(self.required_heading_deg))

    def world(self) -> World:
        return World(self.map_width, self.map_height, self.target(), self.start_band)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["vehicle_types"] = list(self.vehicle_types)
        return d


def validate(cfg: SimulationConfig) -> None:
    positive = ("map_width", "map_height", "dt", "max_time", "arrival_distance",
                "arrival_angle_deg", "approach_radius")
    for name in positive:
        value = getattr(cfg, name)
        if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
            raise InvalidParameter(f"{name} must be a positive number, got {value!r}")
    if cfg.offset_scale < 0:
        raise InvalidParameter(f"offset_scale must be non-negative, got {cfg.offset_scale}")
    if not 0.0 < cfg.start_band <= 1.0:
        raise InvalidParameter(f"start_band must be in (0, 1], got {cfg.start_band}")
    if cfg.dt > cfg.max_time:
        raise InvalidParameter(f"dt ({cfg.dt}) larger than max_time ({cfg.max_time})")
    if not cfg.vehicle_types:
        raise InvalidParameter("At least one vehicle type must be specified")
    for name in cfg.vehicle_types:
        parse_vehicle_type(name)


def safe_get(d: dict, key: str, default: Any) -> Any:
    """Get dictionary value with default fallback."""
    return d[key] if key in d else default


def load_config(path: Optional[str] = DEFAULT_CONFIG_PATH, **overrides: Any) -> SimulationConfig:
    """Load a SimulationConfig from JSON, or return defaults. Keyword overrides win over the file."""
    data: dict = {}
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"[CONFIG] Loaded scenario from {path}")
    elif path:
        logger.info(f"[CONFIG] {path} not found, using defaults")
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning(f"[CONFIG] Ignoring unknown keys: {unknown}")
    defaults = SimulationConfig()
    values = {name: safe_get(data, name, getattr(defaults, name)) for name in known}
    values.update({k: v for k, v in overrides.items() if v is not None})
    return SimulationConfig(**values)


__all__ = ['SimulationConfig', 'load_config', 'DEFAULT_CONFIG_PATH']
