# python -m pytest -q tests/test_controller.py
"""
Tests for geometry helpers and the navigation controller.
"""
import math

import pytest

from fuzzynav.core.geometry import Point, normalize_angle, angular_error, approach_point, distance
from fuzzynav.core.vehicle import VehicleState, get_preset, parse_vehicle_type, VehicleType, PRESETS
from fuzzynav.core.world import Target
from fuzzynav.errors import InvalidParameter
from fuzzynav.navigation.controller import NavigationController

TARGET = Target(500.0, 700.0, math.pi / 2)

# 1) Angle normalisation into (-pi, pi]
def test_normalize_angle():
    assert normalize_angle(0.0) == 0.0
    assert normalize_angle(math.pi) == pytest.approx(math.pi)
    assert normalize_angle(-math.pi) == pytest.approx(math.pi)
    assert normalize_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
    assert normalize_angle(5 * math.pi / 2) == pytest.approx(math.pi / 2)
    assert -math.pi < normalize_angle(-5.0) <= math.pi

# 2) Sign convention: counter-clockwise is positive
def test_angular_error_sign():
    origin = Point(0.0, 0.0)
    # heading east, target north: turn counter-clockwise
    assert angular_error(origin, 0.0, Point(0.0, 10.0)) == pytest.approx(math.pi / 2)
    assert angular_error(origin, 0.0, Point(0.0, -10.0)) == pytest.approx(-math.pi / 2)

# 3) Aim point on final approach
def test_approach_point():
    target = Point(500.0, 700.0)
    assert approach_point(target, math.pi / 2, 200.0, 120.0, 100.0) == target
    pulled = approach_point(target, math.pi / 2, 120.0, 120.0, 100.0)
    assert pulled[0] == pytest.approx(500.0)
    assert pulled[1] == pytest.approx(600.0)
    assert approach_point(target, math.pi / 2, 0.0, 120.0, 100.0) == (pytest.approx(500.0), pytest.approx(700.0))
    half = approach_point(target, 0.0, 60.0, 120.0, 100.0)
    assert half[0] == pytest.approx(500.0 - 100.0 * 0.5 ** 1.5)

# 4) Presets
def test_presets():
    standard = get_preset("standard")
    assert standard.maneuverability == 35
    assert standard.constant_velocity == pytest.approx(0.3 * standard.max_speed)
    for preset in PRESETS.values():
        assert preset.constant_velocity == pytest.approx(0.3 * preset.max_speed)
    assert parse_vehicle_type("ULTRAAGILE") is VehicleType.ULTRA_AGILE
    with pytest.raises(InvalidParameter):
        get_preset("Hovercraft")

# 5) Aligned and far: no correction
def test_controller_aligned_far():
    ctrl = NavigationController(get_preset("Standard"), TARGET)
    out = ctrl.compute(VehicleState(500.0, 100.0, math.pi / 2))
    assert out.distance == pytest.approx(600.0)
    assert out.angular_error == pytest.approx(0.0)
    assert out.adjustment == pytest.approx(0.0, abs=1e-6)
    assert not out.fallback

# 6) Target on the left of the heading (counter-clockwise): positive adjustment
def test_controller_turns_toward_target():
    preset = get_preset("Agile")
    ctrl = NavigationController(preset, TARGET)
    ccw = ctrl.compute(VehicleState(500.0, 100.0, 0.0))          # heading east, target north
    cw = ctrl.compute(VehicleState(500.0, 100.0, math.pi))       # heading west, target north
    assert ccw.angular_error == pytest.approx(90.0)
    assert 0 < ccw.adjustment <= preset.maneuverability
    assert cw.adjustment == pytest.approx(-ccw.adjustment, abs=1e-9)

# 7) Inside the approach radius the error is measured against the pulled-back aim
def test_controller_uses_aim_point():
    ctrl = NavigationController(get_preset("Standard"), TARGET)
    out = ctrl.compute(VehicleState(400.0, 640.0, 0.0))
    dist = distance(Point(400.0, 640.0), TARGET.position)
    assert dist < ctrl.approach_radius
    assert out.aim == ctrl.aim_point(dist)
    assert out.aim[1] < TARGET.y

# 8) No rule fires beyond the distance universe: hold heading, count fallback
def test_controller_fallback():
    ctrl = NavigationController(get_preset("Heavy"), Target(0.0, 0.0, 0.0))
    state = VehicleState(1100.0, 0.0, math.pi)
    out = ctrl.compute(state)
    assert out.fallback
    assert out.adjustment == 0.0
    assert ctrl.fallback_count == 1
    # state is never mutated by the controller
    assert (state.x, state.y, state.heading) == (1100.0, 0.0, math.pi)

# 9) Invalid approach parameters
def test_controller_invalid_parameters():
    with pytest.raises(InvalidParameter):
        NavigationController(get_preset("Heavy"), TARGET, approach_radius=0.0)
    with pytest.raises(InvalidParameter):
        NavigationController(get_preset("Heavy"), TARGET, offset_scale=-1.0)
