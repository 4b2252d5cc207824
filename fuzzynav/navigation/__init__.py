"""Fuzzy navigation controller and its hand-authored rule base."""
from .controller import NavigationController, ControlOutput
from .rulebase import build_engine, engine_for, input_variables, steering_variable, navigation_rules
