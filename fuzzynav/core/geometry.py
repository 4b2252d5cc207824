"""
Plane geometry helpers.

Angles are radians, measured counter-clockwise from the +x axis. Headings and
angular errors are kept in the half-open interval (-pi, pi].
"""
from __future__ import annotations
import math
from typing import NamedTuple

TWO_PI = 2.0 * math.pi


class Point(NamedTuple):
    x: float
    y: float


def distance(p: Point, q: Point) -> float:
    return math.hypot(q[0] - p[0], q[1] - p[1])


def normalize_angle(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, TWO_PI)
    if wrapped <= 0.0:
        wrapped += TWO_PI
    return wrapped - math.pi


def bearing(origin: Point, aim: Point) -> float:
    return math.atan2(aim[1] - origin[1], aim[0] - origin[0])


def angular_error(origin: Point, heading: float, aim: Point) -> float:
    """Signed turn from `heading` towards `aim`; positive is counter-clockwise."""
    return normalize_angle(bearing(origin, aim) - heading)


def approach_point(target: Point, arrival_heading: float, distance_to_target: float,
                   approach_radius: float, offset_scale: float) -> Point:
    """
    Aim point used on final approach.

    Inside `approach_radius` the aim is pulled back from the target along the
    arrival-heading axis by offset_scale * (d / approach_radius) ** 1.5, so the
    vehicle lines up with the arrival heading instead of cutting straight in.
    Outside the radius the target itself is returned.
    """
    if distance_to_target > approach_radius:
        return Point(target[0], target[1])
    offset = offset_scale * (distance_to_target / approach_radius) ** 1.5
    return Point(target[0] - offset * math.cos(arrival_heading),
                 target[1] - offset * math.sin(arrival_heading))


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


__all__ = ['Point', 'TWO_PI', 'distance', 'normalize_angle', 'bearing', 'angular_error', 'approach_point', 'clamp']
