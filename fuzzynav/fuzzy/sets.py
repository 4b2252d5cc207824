"""
Fuzzy sets and the min/max/complement algebra.

AND = min, OR = max, NOT = 1 - x. The same operators combine antecedent
degrees into a firing strength and, pointwise, aggregate rule contributions.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import reduce

import numpy as np

from fuzzynav.errors import InvalidParameter
from fuzzynav.fuzzy.membership import MembershipShape, evaluate, degree


@dataclass(frozen=True)
class FuzzySet:
    name: str
    shape: MembershipShape

    def __post_init__(self):
        if not self.name:
            raise InvalidParameter("Fuzzy set name must be a non-empty string")

    def degree(self, x: float) -> float:
        return degree(self.shape, x)

    def evaluate(self, xs) -> np.ndarray:
        return evaluate(self.shape, xs)


def fuzzy_and(*degrees: float) -> float:
    return reduce(min, degrees)


def fuzzy_or(*degrees: float) -> float:
    return reduce(max, degrees)


def fuzzy_not(a: float) -> float:
    return 1.0 - a


def clip(strength: float, mu: np.ndarray) -> np.ndarray:
    """Mamdani min-implication: cut a membership curve at the firing strength."""
    return np.fmin(strength, mu)


def aggregate(curves) -> np.ndarray:
    """Pointwise max over a non-empty iterable of sampled curves."""
    return reduce(np.fmax, curves)


__all__ = ['FuzzySet', 'fuzzy_and', 'fuzzy_or', 'fuzzy_not', 'clip', 'aggregate']
