"""
Navigation fuzzy system: variables and rule base.

Inputs:
    - distance:          distance to target [0 - 1000 units]
    - angular_error:     signed heading error [-180 deg, 180 deg]
                         (positive = aim point counter-clockwise of heading)
    - relative_velocity: constant_velocity / max_speed [0 - 1]

Output:
    - steering: angular adjustment [-m, +m] deg/s, m = preset maneuverability.
      Set boundaries are fractions of m, so the same topology and rules
      serve every preset; only the physical bounds change.

Rule base:
    R1:  IF distance IS far        AND angular_error IS aligned THEN hold
    R2:  IF distance IS far        AND angular_error IS right   THEN hard_right
    R3:  IF distance IS far        AND angular_error IS left    THEN hard_left
    R4:  IF distance IS medium     AND angular_error IS aligned THEN hold
    R5:  IF distance IS medium     AND angular_error IS right   THEN soft_right
    R6:  IF distance IS medium     AND angular_error IS left    THEN soft_left
    R7:  IF distance IS very_close AND angular_error IS aligned THEN hold
    R8a: IF angular_error IS far_left                           THEN hard_left
    R8b: IF angular_error IS far_right                          THEN hard_right
    R9:  IF distance IS very_close AND angular_error IS left    THEN soft_left
    R10: IF distance IS very_close AND angular_error IS right   THEN soft_right

relative_velocity is fuzzified but no rule consumes it while velocity is
held constant.
"""
from __future__ import annotations
from functools import lru_cache
from typing import List, Tuple

from fuzzynav.core.vehicle import VehiclePreset
from fuzzynav.fuzzy.engine import InferenceEngine
from fuzzynav.fuzzy.membership import Triangular, Trapezoidal
from fuzzynav.fuzzy.rules import Is, Rule
from fuzzynav.fuzzy.variables import LinguisticVariable

DISTANCE = 'distance'
ANGULAR_ERROR = 'angular_error'
RELATIVE_VELOCITY = 'relative_velocity'
STEERING = 'steering'

DISTANCE_UNIVERSE = (0.0, 1000.0)
ANGULAR_ERROR_UNIVERSE = (-180.0, 180.0)
RELATIVE_VELOCITY_UNIVERSE = (0.0, 1.0)


def input_variables() -> Tuple[LinguisticVariable, ...]:
    distance = LinguisticVariable.define(DISTANCE, DISTANCE_UNIVERSE, {
        'very_close': Trapezoidal(0.0, 0.0, 50.0, 100.0),
        'medium': Triangular(80.0, 200.0, 400.0),
        'far': Trapezoidal(350.0, 500.0, 1000.0, 1000.0),
    })
    # aligned overlaps left/right so no heading error between them is left uncovered
    angular_error = LinguisticVariable.define(ANGULAR_ERROR, ANGULAR_ERROR_UNIVERSE, {
        'aligned': Trapezoidal(-12.0, -5.0, 5.0, 12.0),
        'left': Triangular(-90.0, -45.0, -10.0),
        'right': Triangular(10.0, 45.0, 90.0),
        'far_left': Trapezoidal(-180.0, -180.0, -120.0, -70.0),
        'far_right': Trapezoidal(70.0, 120.0, 180.0, 180.0),
    })
    relative_velocity = LinguisticVariable.define(RELATIVE_VELOCITY, RELATIVE_VELOCITY_UNIVERSE, {
        'slow': Triangular(0.0, 0.0, 0.3),
        'medium': Triangular(0.2, 0.5, 0.8),
        'fast': Trapezoidal(0.7, 1.0, 1.0, 1.0),
    })
    return distance, angular_error, relative_velocity


def steering_variable(maneuverability: float) -> LinguisticVariable:
    m = float(maneuverability)
    return LinguisticVariable.define(STEERING, (-m, m), {
        'hard_left': Triangular(-m, -0.7 * m, -0.3 * m),
        'soft_left': Triangular(-0.4 * m, -0.2 * m, 0.0),
        'hold': Triangular(-0.1 * m, 0.0, 0.1 * m),
        'soft_right': Triangular(0.0, 0.2 * m, 0.4 * m),
        'hard_right': Triangular(0.3 * m, 0.7 * m, m),
    })


def navigation_rules() -> List[Rule]:
    far, medium, near = Is(DISTANCE, 'far'), Is(DISTANCE, 'medium'), Is(DISTANCE, 'very_close')
    aligned, left, right = Is(ANGULAR_ERROR, 'aligned'), Is(ANGULAR_ERROR, 'left'), Is(ANGULAR_ERROR, 'right')
    return [
        Rule(far & aligned, Is(STEERING, 'hold'), label='R1'),
        Rule(far & right, Is(STEERING, 'hard_right'), label='R2'),
        Rule(far & left, Is(STEERING, 'hard_left'), label='R3'),
        Rule(medium & aligned, Is(STEERING, 'hold'), label='R4'),
        Rule(medium & right, Is(STEERING, 'soft_right'), label='R5'),
        Rule(medium & left, Is(STEERING, 'soft_left'), label='R6'),
        Rule(near & aligned, Is(STEERING, 'hold'), label='R7'),
        Rule(Is(ANGULAR_ERROR, 'far_left'), Is(STEERING, 'hard_left'), label='R8a'),
        Rule(Is(ANGULAR_ERROR, 'far_right'), Is(STEERING, 'hard_right'), label='R8b'),
        Rule(near & left, Is(STEERING, 'soft_left'), label='R9'),
        Rule(near & right, Is(STEERING, 'soft_right'), label='R10'),
    ]


@lru_cache(maxsize=None)
def build_engine(maneuverability: float) -> InferenceEngine:
    """
    Navigation engine for a given output scale (deg/s).

    Cached: every simulation using the same preset shares one immutable engine.
    """
    return InferenceEngine(
        inputs=input_variables(),
        outputs=[steering_variable(maneuverability)],
        rules=navigation_rules(),
        name="Navigation Controller",
    )


def engine_for(preset: VehiclePreset) -> InferenceEngine:
    return build_engine(float(preset.maneuverability))


__all__ = [
    'DISTANCE', 'ANGULAR_ERROR', 'RELATIVE_VELOCITY', 'STEERING',
    'input_variables', 'steering_variable', 'navigation_rules', 'build_engine', 'engine_for',
]
