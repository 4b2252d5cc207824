"""
Error taxonomy for the fuzzy navigation core.

Construction-time errors (InvalidParameter, UnknownReference) are fatal and
surface to whoever builds the fuzzy system or the simulation. A per-call
DefuzzificationUndefined is recovered locally by the navigation controller.
A timeout is an outcome of the simulation, not an exception.
"""
from __future__ import annotations


class FuzzyNavError(Exception):
    """Base class for all errors raised by fuzzynav."""
    pass


class InvalidParameter(FuzzyNavError, ValueError):
    """Malformed parameters detected while building a shape, variable or configuration."""
    pass


class UnknownReference(FuzzyNavError, KeyError):
    """A rule references a variable or fuzzy set that was never declared."""

    def __init__(self, variable: str, term: str | None = None, reason: str = ""):
        self.variable = variable
        self.term = term
        self.reason = reason
        where = f"'{variable}'" if term is None else f"'{variable}.{term}'"
        super().__init__(f"Unknown reference {where}{': ' + reason if reason else ''}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class DefuzzificationUndefined(FuzzyNavError, ArithmeticError):
    """No rule fired with positive strength for an output variable."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Centroid undefined for '{variable}': aggregated membership is zero everywhere")
