"""
Linguistic variables: a bounded universe of discourse holding an ordered
collection of named fuzzy sets.

Centroid defuzzification samples the universe with the midpoint rule:
`steps` equal-width subintervals, each sampled at its centre,

    x_i = lo + (i + 0.5) * (hi - lo) / steps,   i = 0 .. steps - 1

and returns sum(x_i * mu(x_i)) / sum(mu(x_i)). The convention is fixed for
the whole project; a membership function symmetric about m on a universe
symmetric about m therefore defuzzifies to m up to floating point rounding.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
import math
from typing import Callable, Dict, Iterable, List, Mapping, Tuple, Union

import numpy as np

from fuzzynav.errors import InvalidParameter, UnknownReference, DefuzzificationUndefined
from fuzzynav.fuzzy.membership import MembershipShape, evaluate
from fuzzynav.fuzzy.sets import FuzzySet

CENTROID_STEPS = 1000
CURVE_POINTS = 200
_ZERO_AREA = 1e-12


@lru_cache(maxsize=None)
def midpoint_grid(lo: float, hi: float, steps: int) -> np.ndarray:
    """Centres of `steps` equal subintervals of [lo, hi], read-only."""
    width = (hi - lo) / steps
    xs = lo + (np.arange(steps, dtype=float) + 0.5) * width
    xs.setflags(write=False)
    return xs


@lru_cache(maxsize=1024)
def _sampled_curve(shape: MembershipShape, lo: float, hi: float, steps: int) -> np.ndarray:
    mu = evaluate(shape, midpoint_grid(lo, hi, steps))
    mu.setflags(write=False)
    return mu


@dataclass(frozen=True)
class LinguisticVariable:
    name: str
    universe: Tuple[float, float]
    sets: Tuple[FuzzySet, ...]

    def __post_init__(self):
        lo, hi = self.universe
        if not (math.isfinite(lo) and math.isfinite(hi)) or lo >= hi:
            raise InvalidParameter(f"Variable '{self.name}': universe must satisfy min < max, got {self.universe}")
        # normalise to a hashable tuple of floats
        object.__setattr__(self, 'universe', (float(lo), float(hi)))
        object.__setattr__(self, 'sets', tuple(self.sets))
        seen = set()
        for s in self.sets:
            if s.name in seen:
                raise InvalidParameter(f"Variable '{self.name}': duplicate fuzzy set '{s.name}'")
            seen.add(s.name)

    @classmethod
    def define(cls, name: str, universe: Tuple[float, float],
               terms: Mapping[str, MembershipShape]) -> "LinguisticVariable":
        """Build a variable from an ordered {set_name: shape} mapping."""
        return cls(name, tuple(universe), tuple(FuzzySet(k, v) for k, v in terms.items()))

    @property
    def term_names(self) -> List[str]:
        return [s.name for s in self.sets]

    def has_term(self, term: str) -> bool:
        return any(s.name == term for s in self.sets)

    def __getitem__(self, term: str) -> FuzzySet:
        for s in self.sets:
            if s.name == term:
                return s
        raise UnknownReference(self.name, term, "no such fuzzy set")

    def contains(self, x: float) -> bool:
        return self.universe[0] <= x <= self.universe[1]

    def fuzzify(self, x: float) -> Dict[str, float]:
        """Degree of `x` in every set, in declaration order. No clamping to the universe."""
        return {s.name: s.degree(x) for s in self.sets}

    def grid(self, steps: int = CENTROID_STEPS) -> np.ndarray:
        if steps <= 0:
            raise InvalidParameter(f"steps must be positive, got {steps}")
        return midpoint_grid(self.universe[0], self.universe[1], int(steps))

    def sampled(self, term: str, steps: int = CENTROID_STEPS) -> np.ndarray:
        """Membership of one set on the centroid grid (cached, read-only)."""
        self.grid(steps)
        return _sampled_curve(self[term].shape, self.universe[0], self.universe[1], int(steps))

    def defuzzify_centroid(self, aggregated: Union[Callable[[np.ndarray], np.ndarray], np.ndarray],
                           steps: int = CENTROID_STEPS) -> float:
        """
        Centroid of an aggregated output membership function.

        Args:
            aggregated: either a callable mapping an array of x to degrees, or
                the degrees already sampled on `self.grid(steps)`.
            steps: number of midpoint samples.

        Raises:
            DefuzzificationUndefined: if the aggregated membership is ~0 everywhere.
        """
        xs = self.grid(steps)
        mu = np.asarray(aggregated(xs) if callable(aggregated) else aggregated, dtype=float)
        if mu.shape != xs.shape:
            raise InvalidParameter(f"Aggregated samples have shape {mu.shape}, expected {xs.shape}")
        denominator = float(np.sum(mu))
        if not denominator > _ZERO_AREA:
            raise DefuzzificationUndefined(self.name)
        return float(np.sum(xs * mu) / denominator)

    def membership_curves(self, points: int = CURVE_POINTS) -> Dict[str, Tuple[np.ndarray, np.ndarray]]:
        """
        Sampled (x, degree) curve of every set, `points + 1` positions including
        both universe edges. Pure function of the variable.
        """
        if points <= 0:
            raise InvalidParameter(f"points must be positive, got {points}")
        xs = np.linspace(self.universe[0], self.universe[1], points + 1)
        return {s.name: (xs.copy(), s.evaluate(xs)) for s in self.sets}


def index_by_name(variables: Iterable[LinguisticVariable]) -> Dict[str, LinguisticVariable]:
    out: Dict[str, LinguisticVariable] = {}
    for v in variables:
        if v.name in out:
            raise InvalidParameter(f"Duplicate linguistic variable '{v.name}'")
        out[v.name] = v
    return out


__all__ = ['LinguisticVariable', 'CENTROID_STEPS', 'CURVE_POINTS', 'midpoint_grid', 'index_by_name']
