"""
Membership evaluator.

A membership shape is a small immutable descriptor (one of Triangular,
Trapezoidal, Gaussian, Sigmoidal). Evaluation is a single dispatch over the
closed set of variants and delegates the actual curve to scikit-fuzzy, so the
scalar path (fuzzification) and the vectorised path (sampling the output
universe for defuzzification) share exactly the same arithmetic.

Degenerate edges (a == b or c == d) collapse to a step: the membership is 1
at the edge itself and no division by zero takes place.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Union

import numpy as np
import skfuzzy as fuzz

from fuzzynav.errors import InvalidParameter


def _require_finite(kind: str, **params: float) -> None:
    for name, value in params.items():
        if not math.isfinite(value):
            raise InvalidParameter(f"{kind}: parameter {name}={value} must be finite")


@dataclass(frozen=True)
class Triangular:
    a: float
    b: float
    c: float

    def __post_init__(self):
        _require_finite("Triangular", a=self.a, b=self.b, c=self.c)
        if not (self.a <= self.b <= self.c):
            raise InvalidParameter(f"Triangular requires a <= b <= c, got ({self.a}, {self.b}, {self.c})")


@dataclass(frozen=True)
class Trapezoidal:
    a: float
    b: float
    c: float
    d: float

    def __post_init__(self):
        _require_finite("Trapezoidal", a=self.a, b=self.b, c=self.c, d=self.d)
        if not (self.a <= self.b <= self.c <= self.d):
            raise InvalidParameter(
                f"Trapezoidal requires a <= b <= c <= d, got ({self.a}, {self.b}, {self.c}, {self.d})"
            )


@dataclass(frozen=True)
class Gaussian:
    center: float
    sigma: float

    def __post_init__(self):
        _require_finite("Gaussian", center=self.center, sigma=self.sigma)
        if self.sigma <= 0:
            raise InvalidParameter(f"Gaussian requires sigma > 0, got {self.sigma}")


@dataclass(frozen=True)
class Sigmoidal:
    slope: float
    center: float

    def __post_init__(self):
        _require_finite("Sigmoidal", slope=self.slope, center=self.center)
        if self.slope == 0:
            raise InvalidParameter("Sigmoidal requires a non-zero slope")


MembershipShape = Union[Triangular, Trapezoidal, Gaussian, Sigmoidal]


def evaluate(shape: MembershipShape, xs) -> np.ndarray:
    """Evaluate `shape` on a 1-D array of points. Returns degrees in [0, 1]."""
    xs = np.atleast_1d(np.asarray(xs, dtype=float))
    if isinstance(shape, Triangular):
        return fuzz.trimf(xs, [shape.a, shape.b, shape.c])
    if isinstance(shape, Trapezoidal):
        return fuzz.trapmf(xs, [shape.a, shape.b, shape.c, shape.d])
    if isinstance(shape, Gaussian):
        return fuzz.gaussmf(xs, shape.center, shape.sigma)
    if isinstance(shape, Sigmoidal):
        # exp() overflows to inf far on the flat side; 1/(1+inf) is the correct 0
        with np.errstate(over='ignore'):
            return fuzz.sigmf(xs, shape.center, shape.slope)
    raise TypeError(f"Unsupported membership shape: {type(shape).__name__}")


def degree(shape: MembershipShape, x: float) -> float:
    """Membership degree of a single crisp value."""
    return float(evaluate(shape, [x])[0])


def describe(shape: MembershipShape) -> str:
    if isinstance(shape, Triangular):
        return f"tri({shape.a:g}, {shape.b:g}, {shape.c:g})"
    if isinstance(shape, Trapezoidal):
        return f"trap({shape.a:g}, {shape.b:g}, {shape.c:g}, {shape.d:g})"
    if isinstance(shape, Gaussian):
        return f"gauss({shape.center:g}, {shape.sigma:g})"
    return f"sigm({shape.slope:g}, {shape.center:g})"


__all__ = [
    'Triangular', 'Trapezoidal', 'Gaussian', 'Sigmoidal', 'MembershipShape',
    'evaluate', 'degree', 'describe',
]
