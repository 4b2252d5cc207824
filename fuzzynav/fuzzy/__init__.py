"""
Fuzzy inference primitives: membership shapes, fuzzy sets, linguistic
variables, rules and the Mamdani inference engine.
"""
from .membership import Triangular, Trapezoidal, Gaussian, Sigmoidal, MembershipShape, degree, evaluate
from .sets import FuzzySet, fuzzy_and, fuzzy_or, fuzzy_not
from .variables import LinguisticVariable, CENTROID_STEPS
from .rules import Is, And, Or, Not, Rule, firing_strength
from .engine import InferenceEngine, InferenceResult
