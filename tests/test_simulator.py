# python -m pytest -q tests/test_simulator.py
"""
Tests for the kinematic simulator.
"""
import math

import pytest

from fuzzynav.config import SimulationConfig
from fuzzynav.core.geometry import normalize_angle, distance, Point
from fuzzynav.core.vehicle import VehicleState, get_preset
from fuzzynav.errors import InvalidParameter
from fuzzynav.simulation import Simulator, SimStatus, simulate_vehicles

CONFIG = SimulationConfig()


def short_sim(vehicle="Standard", max_time=20.0, **kwargs):
    return Simulator(vehicle, CONFIG.world(), dt=CONFIG.dt, max_time=max_time, **kwargs)

# 1) Heading change per tick never exceeds maneuverability * dt
@pytest.mark.parametrize("vehicle", ["Heavy", "Standard", "Agile", "UltraAgile"])
def test_turn_rate_clamped(vehicle):
    sim = short_sim(vehicle, initial_state=VehicleState(900.0, 20.0, -math.pi / 2))
    result = sim.run()
    limit = math.radians(get_preset(vehicle).maneuverability) * sim.dt + 1e-9
    headings = [sim.initial_state.heading] + [math.radians(p.angle) for p in result.trajectory]
    for before, after in zip(headings, headings[1:]):
        assert abs(normalize_angle(after - before)) <= limit

# 2) Constant velocity along the whole trajectory
def test_constant_velocity():
    sim = short_sim("Agile", initial_state=VehicleState(100.0, 30.0, 0.3))
    result = sim.run()
    v = get_preset("Agile").constant_velocity
    points = [Point(sim.initial_state.x, sim.initial_state.y)] + [Point(p.x, p.y) for p in result.trajectory]
    for p in result.trajectory:
        assert p.velocity == v
    for a, b in zip(points, points[1:]):
        assert distance(a, b) == pytest.approx(v * sim.dt)

# 3) Standard preset from the start band terminates within max_time
def test_standard_run_terminates():
    sim = Simulator.from_config(CONFIG, "Standard", seed=7)
    result = sim.run()
    v = get_preset("Standard").constant_velocity
    assert result.status in (SimStatus.ARRIVED, SimStatus.TIMEOUT)
    assert result.elapsed <= CONFIG.max_time + 1e-9
    assert result.metrics.distance_traveled == pytest.approx(v * result.elapsed, rel=1e-9)
    if result.metrics.success:
        assert result.metrics.final_distance_to_target < CONFIG.arrival_distance
        assert result.metrics.final_angle_error < CONFIG.arrival_angle_deg
        assert result.metrics.arrival_time == pytest.approx(result.elapsed)
    else:
        assert result.metrics.arrival_time is None
        assert len(result.trajectory) == sim.max_ticks

# 4) Arrival is checked after the move
def test_arrival_on_first_tick():
    sim = short_sim("Standard", initial_state=VehicleState(500.0, 690.0, math.pi / 2))
    result = sim.run()
    assert result.status is SimStatus.ARRIVED
    assert result.metrics.success
    assert result.metrics.arrival_time == pytest.approx(sim.dt)
    assert len(result.trajectory) == 1
    assert result.trajectory[0].y == pytest.approx(690.0 + 24.0 * sim.dt)

# 5) Close but on the wrong heading is not an arrival
def test_wrong_heading_is_not_arrival():
    sim = short_sim("Heavy", max_time=0.05, initial_state=VehicleState(500.0, 690.0, 0.0))
    result = sim.run()
    assert result.status is SimStatus.TIMEOUT
    assert result.metrics.final_distance_to_target < CONFIG.arrival_distance

# 6) Timeout after ceil(max_time / dt) ticks
def test_timeout():
    sim = short_sim("Heavy", max_time=1.0, initial_state=VehicleState(100.0, 10.0, 0.0))
    result = sim.run()
    assert result.status is SimStatus.TIMEOUT
    assert len(result.trajectory) == 20
    assert result.elapsed == pytest.approx(1.0)
    assert result.metrics.arrival_time is None
    assert result.diagnostics["ticks"] == 20
    # stepping a finished run changes nothing
    assert sim.step() is SimStatus.TIMEOUT
    assert len(sim.trajectory) == 20
    assert sim.run() is result

# 7) Random start pose lies in the start band, reproducible from the seed
def test_random_start_reproducible():
    a = short_sim("Agile", max_time=2.0, seed=3)
    b = short_sim("Agile", max_time=2.0, seed=3)
    s0 = a.initial_state
    assert 0.0 <= s0.x < CONFIG.map_width
    assert 0.0 <= s0.y < CONFIG.map_height * CONFIG.start_band
    assert -math.pi < s0.heading <= math.pi
    assert a.run().to_dict() == b.run().to_dict()

# 8) Invalid simulation parameters
def test_invalid_parameters():
    with pytest.raises(InvalidParameter):
        short_sim(max_time=0.0)
    with pytest.raises(InvalidParameter):
        Simulator("Standard", CONFIG.world(), dt=-0.1)
    with pytest.raises(InvalidParameter):
        short_sim("Submarine")

# 9) Result document fields
def test_result_document():
    result = short_sim("Heavy", max_time=0.5, initial_state=VehicleState(100.0, 10.0, 0.0)).run()
    doc = result.to_dict()
    assert doc["vehicle_type"] == "Heavy"
    assert set(doc["trajectory"][0]) == {"t", "x", "y", "angle", "velocity", "distance_to_target"}
    assert set(doc["metrics"]) == {"success", "arrival_time", "distance_traveled",
                                   "final_angle_error", "final_distance_to_target"}
    assert doc["diagnostics"]["defuzzification_fallbacks"] == 0

# 10) One run per configured vehicle type, in order
def test_simulate_vehicles():
    config = SimulationConfig(max_time=2.0, vehicle_types=("Heavy", "UltraAgile"))
    results = simulate_vehicles(config, seed=11)
    assert [r.vehicle_type for r in results] == ["Heavy", "UltraAgile"]
    again = simulate_vehicles(config, seed=11)
    assert [r.to_dict() for r in results] == [r.to_dict() for r in again]
