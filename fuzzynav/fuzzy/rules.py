"""
Mamdani rules.

An antecedent is a small expression tree:

    Is(variable, term) | And(left, right) | Or(left, right) | Not(operand)

Leaves can be combined with the `&`, `|` and `~` operators, so a rule reads
the way it is written on paper:

    Rule(Is('distance', 'far') & Is('angular_error', 'aligned'),
         Is('steering', 'hold'), label='R1')

The firing strength is a recursive fold of the tree over the precomputed
degrees of the current inference call (AND = min, OR = max, NOT = 1 - x).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Mapping, Union

from fuzzynav.fuzzy.sets import fuzzy_and, fuzzy_or, fuzzy_not

Degrees = Mapping[str, Mapping[str, float]]


class Antecedent:
    """Operator sugar shared by every node of the antecedent tree."""

    def __and__(self, other: "Expr") -> "And":
        return And(self, other)

    def __or__(self, other: "Expr") -> "Or":
        return Or(self, other)

    def __invert__(self) -> "Not":
        return Not(self)


@dataclass(frozen=True)
class Is(Antecedent):
    variable: str
    term: str


@dataclass(frozen=True)
class And(Antecedent):
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Or(Antecedent):
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Not(Antecedent):
    operand: "Expr"


Expr = Union[Is, And, Or, Not]


def firing_strength(expr: Expr, degrees: Degrees) -> float:
    """Evaluate an antecedent tree against {variable: {term: degree}}."""
    if isinstance(expr, Is):
        return degrees[expr.variable][expr.term]
    if isinstance(expr, And):
        return fuzzy_and(firing_strength(expr.left, degrees), firing_strength(expr.right, degrees))
    if isinstance(expr, Or):
        return fuzzy_or(firing_strength(expr.left, degrees), firing_strength(expr.right, degrees))
    if isinstance(expr, Not):
        return fuzzy_not(firing_strength(expr.operand, degrees))
    raise TypeError(f"Unsupported antecedent node: {type(expr).__name__}")


def leaves(expr: Expr) -> Iterator[Is]:
    """All (variable, term) references of a tree, left to right."""
    if isinstance(expr, Is):
        yield expr
    elif isinstance(expr, (And, Or)):
        yield from leaves(expr.left)
        yield from leaves(expr.right)
    elif isinstance(expr, Not):
        yield from leaves(expr.operand)
    else:
        raise TypeError(f"Unsupported antecedent node: {type(expr).__name__}")


def render(expr: Expr) -> str:
    if isinstance(expr, Is):
        return f"{expr.variable} IS {expr.term}"
    if isinstance(expr, And):
        return f"({render(expr.left)} AND {render(expr.right)})"
    if isinstance(expr, Or):
        return f"({render(expr.left)} OR {render(expr.right)})"
    if isinstance(expr, Not):
        return f"NOT {render(expr.operand)}"
    raise TypeError(f"Unsupported antecedent node: {type(expr).__name__}")


@dataclass(frozen=True)
class Rule:
    antecedent: Expr
    consequent: Is
    label: str = ""

    def strength(self, degrees: Degrees) -> float:
        return firing_strength(self.antecedent, degrees)

    def __str__(self) -> str:
        text = f"IF {render(self.antecedent)} THEN {self.consequent.variable} IS {self.consequent.term}"
        return f"{self.label}: {text}" if self.label else text


__all__ = ['Antecedent', 'Is', 'And', 'Or', 'Not', 'Expr', 'Rule', 'firing_strength', 'leaves', 'render']
