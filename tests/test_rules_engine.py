# python -m pytest -q tests/test_rules_engine.py
"""
Tests for rule trees, engine validation and the navigation rule base.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from fuzzynav.errors import InvalidParameter, UnknownReference, DefuzzificationUndefined
from fuzzynav.fuzzy.engine import InferenceEngine
from fuzzynav.fuzzy.membership import Triangular
from fuzzynav.fuzzy.rules import Is, And, Or, Not, Rule, firing_strength, leaves, render
from fuzzynav.fuzzy.variables import LinguisticVariable
from fuzzynav.navigation.rulebase import build_engine, input_variables, steering_variable

DEGREES = {"d": {"near": 0.3, "far": 0.8}, "e": {"small": 0.6}}


def tiny_system(rules):
    inp = LinguisticVariable.define("x", (0.0, 10.0), {"low": Triangular(0, 0, 10), "high": Triangular(0, 10, 10)})
    out = LinguisticVariable.define("y", (0.0, 1.0), {"off": Triangular(0, 0, 1), "on": Triangular(0, 1, 1)})
    return InferenceEngine([inp], [out], rules)

# 1) Tree folding
def test_firing_strength_tree():
    assert firing_strength(Is("d", "near"), DEGREES) == 0.3
    assert firing_strength(And(Is("d", "far"), Is("e", "small")), DEGREES) == 0.6
    assert firing_strength(Or(Is("d", "near"), Is("e", "small")), DEGREES) == 0.6
    assert firing_strength(Not(Is("d", "far")), DEGREES) == pytest.approx(0.2)

# 2) Operator sugar builds the same tree
def test_operator_sugar():
    expr = Is("d", "far") & ~Is("e", "small") | Is("d", "near")
    assert expr == Or(And(Is("d", "far"), Not(Is("e", "small"))), Is("d", "near"))
    assert [leaf.term for leaf in leaves(expr)] == ["far", "small", "near"]
    assert render(Is("d", "far") & Is("e", "small")) == "(d IS far AND e IS small)"

# 3) Rule rendering
def test_rule_str():
    rule = Rule(Is("x", "low"), Is("y", "off"), label="R1")
    assert str(rule) == "R1: IF x IS low THEN y IS off"

# 4) Undeclared set / variable references fail at construction
@pytest.mark.parametrize("rule", [
    Rule(Is("x", "medium"), Is("y", "on")),
    Rule(Is("z", "low"), Is("y", "on")),
    Rule(Is("x", "low"), Is("y", "maybe")),
    Rule(Is("x", "low"), Is("x", "high")),   # consequent on an input
    Rule(Is("y", "on"), Is("y", "off")),     # antecedent on an output
])
def test_unknown_references(rule):
    with pytest.raises(UnknownReference):
        tiny_system([rule])

# 5) Engine construction errors
def test_engine_invalid_definitions():
    inp = LinguisticVariable.define("x", (0.0, 1.0), {"a": Triangular(0, 0, 1)})
    with pytest.raises(InvalidParameter):
        InferenceEngine([inp], [], [])
    with pytest.raises(InvalidParameter):
        InferenceEngine([inp], [inp], [])

# 6) Missing crisp inputs
def test_missing_input():
    engine = tiny_system([Rule(Is("x", "low"), Is("y", "off"))])
    with pytest.raises(InvalidParameter):
        engine.compute({})

# 7) No rule fired: compute raises, evaluate reports None
def test_undefined_output():
    engine = tiny_system([Rule(Is("x", "low") & Is("x", "high"), Is("y", "on"))])
    with pytest.raises(DefuzzificationUndefined):
        engine.compute({"x": 0.0})
    result = engine.evaluate({"x": 0.0})
    assert result.outputs["y"] is None
    assert result.undefined_outputs == ["y"]
    assert result.activated_rules == []

# 8) Scenario 1: far and aligned, hold
def test_scenario_far_aligned_holds():
    engine = build_engine(35.0)
    inputs = {"distance": 1000.0, "angular_error": 0.0, "relative_velocity": 0.5}
    out = engine.compute(inputs)
    assert out["steering"] == pytest.approx(0.0, abs=1e-6)
    trace = engine.evaluate(inputs)
    assert trace.activated_rules == ["R1"]
    assert trace.strengths["R1"] == pytest.approx(1.0)

# 9) Scenario 2: target far to the right, hard turn
def test_scenario_far_right_hard_turn():
    m = 35.0
    engine = build_engine(m)
    out = engine.compute({"distance": 1000.0, "angular_error": 160.0, "relative_velocity": 0.5})
    steering = out["steering"]
    assert steering > 0
    # R8b alone clips hard_right tri(0.3m, 0.7m, m); its centroid is 2m/3, see DESIGN.md "Scenario 2 value"
    assert 0.6 * m < steering <= m
    assert steering == pytest.approx(2.0 * m / 3.0, rel=1e-3)
    assert engine.evaluate({"distance": 1000.0, "angular_error": 160.0,
                            "relative_velocity": 0.5}).activated_rules == ["R8b"]

# 10) Mirror symmetry of the rule base
def test_left_right_symmetry():
    engine = build_engine(60.0)
    for dist, err in [(1000.0, 30.0), (250.0, 45.0), (60.0, 20.0), (500.0, 150.0)]:
        right = engine.compute({"distance": dist, "angular_error": err, "relative_velocity": 0.3})["steering"]
        left = engine.compute({"distance": dist, "angular_error": -err, "relative_velocity": 0.3})["steering"]
        assert right > 0
        assert left == pytest.approx(-right, abs=1e-9)

# 11) Every heading error inside the map range fires a rule
def test_angular_error_coverage():
    engine = build_engine(35.0)
    for err in range(-180, 181, 1):
        for dist in (10.0, 90.0, 375.0, 800.0):
            engine.compute({"distance": dist, "angular_error": float(err), "relative_velocity": 0.3})

# 12) Determinism and sharing across threads
def test_engine_deterministic_across_threads():
    engine = build_engine(20.0)
    cases = [{"distance": 20.0 * i, "angular_error": -170.0 + 7.0 * i, "relative_velocity": 0.3} for i in range(49)]
    sequential = [engine.compute(c)["steering"] for c in cases]
    with ThreadPoolExecutor(max_workers=8) as pool:
        threaded = list(pool.map(lambda c: engine.compute(c)["steering"], cases))
    assert sequential == threaded
    assert build_engine(20.0) is engine

# 13) Output universe scales with the preset
def test_steering_variable_scale():
    var = steering_variable(90.0)
    assert var.universe == (-90.0, 90.0)
    assert var.term_names == ["hard_left", "soft_left", "hold", "soft_right", "hard_right"]
    assert [v.name for v in input_variables()] == ["distance", "angular_error", "relative_velocity"]

# 14) describe() lists every rule
def test_describe():
    text = build_engine(35.0).describe()
    assert "Navigation Controller" in text
    assert "R8b: IF angular_error IS far_right THEN steering IS hard_right" in text
