"""
Mamdani inference engine.

One call to `evaluate` runs the full pipeline:

    1. Fuzzification   - every input variable maps its crisp value to degrees
    2. Rule evaluation - every antecedent tree is folded into a firing strength
    3. Implication     - consequent sets are clipped at the firing strength (min)
    4. Aggregation     - clipped contributions are combined pointwise (max),
                         independently for each output variable
    5. Defuzzification - centroid of the aggregated function (midpoint rule)

The engine holds only immutable definitions; nothing is written during a call,
so one instance can be shared by any number of concurrent simulations.

Example:
    >>> engine = InferenceEngine(inputs=[distance, error], outputs=[steering], rules=rules)
    >>> engine.compute({'distance': 1000.0, 'angular_error': 0.0})
    {'steering': 0.0}
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from fuzzynav.errors import InvalidParameter, UnknownReference, DefuzzificationUndefined
from fuzzynav.fuzzy.membership import describe as describe_shape
from fuzzynav.fuzzy.rules import Rule, leaves
from fuzzynav.fuzzy.sets import clip, aggregate
from fuzzynav.fuzzy.variables import LinguisticVariable, CENTROID_STEPS, index_by_name

logger = logging.getLogger(__name__)


@dataclass
class InferenceResult:
    """Full trace of one inference call."""
    inputs: Dict[str, float]
    fuzzified: Dict[str, Dict[str, float]]
    strengths: Dict[str, float]
    outputs: Dict[str, Optional[float]]
    activated_rules: List[str] = field(default_factory=list)

    @property
    def undefined_outputs(self) -> List[str]:
        return [name for name, value in self.outputs.items() if value is None]


class InferenceEngine:
    """
    Stateless Mamdani engine over fixed input/output variables and a fixed rule base.

    Raises at construction:
        InvalidParameter: duplicate variable names, or no output variable.
        UnknownReference: a rule references an undeclared variable or set, an
            antecedent references an output, or a consequent references an input.
    """

    def __init__(self, inputs: Iterable[LinguisticVariable], outputs: Iterable[LinguisticVariable],
                 rules: Sequence[Rule], steps: int = CENTROID_STEPS, name: str = "fuzzy system"):
        self.name = name
        self.inputs = index_by_name(inputs)
        self.outputs = index_by_name(outputs)
        if not self.outputs:
            raise InvalidParameter("An inference engine needs at least one output variable")
        clash = set(self.inputs) & set(self.outputs)
        if clash:
            raise InvalidParameter(f"Variables declared both as input and output: {sorted(clash)}")
        if steps <= 0:
            raise InvalidParameter(f"steps must be positive, got {steps}")
        self.steps = int(steps)
        self.rules: Tuple[Rule, ...] = tuple(rules)
        for idx, rule in enumerate(self.rules):
            self._validate_rule(rule, idx)
        self._labels = tuple(rule.label or f"rule_{i + 1}" for i, rule in enumerate(self.rules))

    def _validate_rule(self, rule: Rule, idx: int) -> None:
        for leaf in leaves(rule.antecedent):
            var = self.inputs.get(leaf.variable)
            if var is None:
                reason = "antecedent references an output variable" if leaf.variable in self.outputs \
                    else f"rule #{idx + 1} antecedent references an undeclared input"
                raise UnknownReference(leaf.variable, leaf.term, reason)
            if not var.has_term(leaf.term):
                raise UnknownReference(leaf.variable, leaf.term, f"rule #{idx + 1} antecedent")
        out = self.outputs.get(rule.consequent.variable)
        if out is None:
            reason = "consequent references an input variable" if rule.consequent.variable in self.inputs \
                else f"rule #{idx + 1} consequent references an undeclared output"
            raise UnknownReference(rule.consequent.variable, rule.consequent.term, reason)
        if not out.has_term(rule.consequent.term):
            raise UnknownReference(rule.consequent.variable, rule.consequent.term, f"rule #{idx + 1} consequent")

    def fuzzify(self, inputs: Mapping[str, float]) -> Dict[str, Dict[str, float]]:
        missing = [name for name in self.inputs if name not in inputs]
        if missing:
            raise InvalidParameter(f"Missing crisp inputs: {missing}")
        fuzzified = {}
        for name, var in self.inputs.items():
            x = float(inputs[name])
            if not var.contains(x):
                logger.debug(f"[FUZZY] Input {name}={x:.3f} outside universe {var.universe}")
            fuzzified[name] = var.fuzzify(x)
        return fuzzified

    def firing_strengths(self, fuzzified: Mapping[str, Mapping[str, float]]) -> List[float]:
        return [rule.strength(fuzzified) for rule in self.rules]

    def aggregated(self, output: str, strengths: Sequence[float]) -> np.ndarray:
        """
        Aggregated membership of one output sampled on its centroid grid.

        Zero everywhere when no rule concluding on `output` fired.
        """
        var = self.outputs[output]
        contributions = [
            clip(s, var.sampled(rule.consequent.term, self.steps))
            for rule, s in zip(self.rules, strengths)
            if s > 0.0 and rule.consequent.variable == output
        ]
        if not contributions:
            return np.zeros(self.steps)
        return aggregate(contributions)

    def evaluate(self, inputs: Mapping[str, float]) -> InferenceResult:
        """Run one inference pass and return the full trace. Undefined outputs are None."""
        fuzzified = self.fuzzify(inputs)
        strengths = self.firing_strengths(fuzzified)
        outputs: Dict[str, Optional[float]] = {}
        for name, var in self.outputs.items():
            try:
                outputs[name] = var.defuzzify_centroid(self.aggregated(name, strengths), self.steps)
            except DefuzzificationUndefined:
                outputs[name] = None
        return InferenceResult(
            inputs={name: float(inputs[name]) for name in self.inputs},
            fuzzified=fuzzified,
            strengths=dict(zip(self._labels, strengths)),
            outputs=outputs,
            activated_rules=[label for label, s in zip(self._labels, strengths) if s > 0.0],
        )

    def compute(self, inputs: Mapping[str, float]) -> Dict[str, float]:
        """
        Crisp value of every output variable.

        Raises:
            DefuzzificationUndefined: if no rule fired for one of the outputs.
        """
        fuzzified = self.fuzzify(inputs)
        strengths = self.firing_strengths(fuzzified)
        return {
            name: var.defuzzify_centroid(self.aggregated(name, strengths), self.steps)
            for name, var in self.outputs.items()
        }

    def describe(self) -> str:
        lines = [f"FuzzySystem: {self.name}", "Input variables:"]
        for var in self.inputs.values():
            lines.append(f"  - {var.name} (range: {var.universe})")
            lines.extend(f"      . {s.name}: {describe_shape(s.shape)}" for s in var.sets)
        lines.append("Output variables:")
        for var in self.outputs.values():
            lines.append(f"  - {var.name} (range: {var.universe})")
            lines.extend(f"      . {s.name}: {describe_shape(s.shape)}" for s in var.sets)
        lines.append("Rules:")
        lines.extend(f"  {rule}" for rule in self.rules)
        lines.append(f"Defuzzification: centroid (midpoint rule, {self.steps} samples)")
        return "\n".join(lines)


__all__ = ['InferenceEngine', 'InferenceResult']
