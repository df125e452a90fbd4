# src/pinus_hybrid/classification/rules.py
"""
Base classes for certainty-factor rules.

A rule inspects one (diameter, height) measurement and, when its predicate
holds, contributes a fixed increment to one class's certainty factor.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..dataset import QueryPoint

CF_MAX = 1.0


@dataclass(frozen=True)
class Rule:
    """
    Base rule. Returns (rule_name, increment) when it fires, else None.
    """
    name: str
    increment: float

    def matches(self, point: QueryPoint) -> bool:
        raise NotImplementedError

    def __call__(self, point: QueryPoint) -> Optional[Tuple[str, float]]:
        if self.matches(point):
            return (self.name, self.increment)
        return None


@dataclass(frozen=True)
class RuleSet:
    """The rules that support one class, evaluated independently."""

    label: str
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def evaluate(self, point: QueryPoint) -> "RuleSetOutcome":
        fired: List[str] = []
        raw = 0.0
        for rule in self.rules:
            hit = rule(point)
            if hit is not None:
                name, inc = hit
                fired.append(name)
                raw += inc
        return RuleSetOutcome(
            label=self.label,
            raw_score=raw,
            certainty=cap_certainty(raw),
            fired=tuple(fired),
        )


@dataclass(frozen=True)
class RuleSetOutcome:
    label: str
    raw_score: float
    certainty: float
    fired: Tuple[str, ...]


def cap_certainty(value: float) -> float:
    """Clamp a summed certainty into [0, 1]."""
    return max(0.0, min(CF_MAX, float(value)))


def certainty_map(outcomes: List[RuleSetOutcome]) -> Dict[str, float]:
    return {o.label: o.certainty for o in outcomes}
