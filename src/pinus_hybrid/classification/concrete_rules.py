# src/pinus_hybrid/classification/concrete_rules.py
"""
Field-measurement rules for the two conifer classes and the
certainty-factor classifier that runs them.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import logging

import numpy as np

from ..core.base import BaseClassifier
from ..core.geometry import slenderness
from ..core.species import CLASS_LABELS, DOUGLAS_FIR, WHITE_PINE, argmax_label
from ..dataset import QueryPoint
from .rules import Rule, RuleSet, RuleSetOutcome, certainty_map

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiameterRangeRule(Rule):
    """Diameter within a closed interval."""

    low: float = 0.0
    high: float = 0.0

    def matches(self, point: QueryPoint) -> bool:
        return self.low <= point.diameter <= self.high


@dataclass(frozen=True)
class HeightRangeRule(Rule):
    """Height within a closed interval."""

    low: float = 0.0
    high: float = 0.0

    def matches(self, point: QueryPoint) -> bool:
        return self.low <= point.height <= self.high


@dataclass(frozen=True)
class SlendernessRule(Rule):
    """Height/diameter ratio within a closed interval. Unmet when diameter <= 0."""

    low: float = 0.0
    high: float = 0.0

    def matches(self, point: QueryPoint) -> bool:
        ratio = slenderness(point.diameter, point.height)
        if ratio is None:
            logger.debug("Skipping %s: diameter %.4f has no ratio", self.name, point.diameter)
            return False
        return self.low <= ratio <= self.high


@dataclass(frozen=True)
class ShortStemRule(Rule):
    """Thin trunk below a height ceiling (both strict)."""

    max_diameter: float = 0.0
    max_height: float = 0.0

    def matches(self, point: QueryPoint) -> bool:
        return point.diameter < self.max_diameter and point.height < self.max_height


@dataclass(frozen=True)
class TallStemRule(Rule):
    """Thin trunk above a height floor (both strict)."""

    max_diameter: float = 0.0
    min_height: float = 0.0

    def matches(self, point: QueryPoint) -> bool:
        return point.diameter < self.max_diameter and point.height > self.min_height


DOUGLAS_FIR_RULES = RuleSet(
    label=DOUGLAS_FIR,
    rules=(
        DiameterRangeRule("df_diameter", 0.7, low=0.15, high=0.65),
        HeightRangeRule("df_height", 0.8, low=2.67, high=13.50),
        SlendernessRule("df_slenderness", 0.6, low=10.0, high=30.0),
        ShortStemRule("df_short_stem", 0.5, max_diameter=0.5, max_height=15.0),
    ),
)

WHITE_PINE_RULES = RuleSet(
    label=WHITE_PINE,
    rules=(
        DiameterRangeRule("wp_diameter", 0.6, low=0.17, high=0.45),
        HeightRangeRule("wp_height", 0.9, low=19.72, high=32.51),
        SlendernessRule("wp_slenderness", 0.8, low=50.0, high=120.0),
        TallStemRule("wp_tall_stem", 0.7, max_diameter=0.5, min_height=20.0),
    ),
)

DEFAULT_RULE_SETS: Tuple[RuleSet, ...] = (DOUGLAS_FIR_RULES, WHITE_PINE_RULES)


@dataclass(frozen=True)
class ExpertResult:
    predicted_label: str
    confidence: float
    certainty: Dict[str, float]
    raw_scores: Dict[str, float]
    fired: Dict[str, Tuple[str, ...]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_label": self.predicted_label,
            "confidence": self.confidence,
            "certainty": dict(self.certainty),
            "raw_scores": dict(self.raw_scores),
            "fired": {k: list(v) for k, v in self.fired.items()},
        }


class CertaintyFactorClassifier(BaseClassifier):
    """
    Rule-based classifier. Each class gets the capped sum of its fired
    rule increments; the training set plays no part.
    """

    def __init__(self, rule_sets: Tuple[RuleSet, ...] = DEFAULT_RULE_SETS):
        self.rule_sets = tuple(rule_sets)
        self.labels = tuple(rs.label for rs in self.rule_sets)

    def evaluate(self, point: Any) -> List[RuleSetOutcome]:
        q = self.validate_point(point)
        return [rs.evaluate(q) for rs in self.rule_sets]

    def certainty(self, point: Any) -> Dict[str, float]:
        """Certainty factor per class, each in [0, 1]."""
        return certainty_map(self.evaluate(point))

    def classify(self, point: Any) -> ExpertResult:
        outcomes = self.evaluate(point)
        cf = certainty_map(outcomes)
        order = self.labels if self.labels else CLASS_LABELS
        label, conf = argmax_label(cf, order)
        return ExpertResult(
            predicted_label=label,
            confidence=conf,
            certainty=cf,
            raw_scores={o.label: o.raw_score for o in outcomes},
            fired={o.label: o.fired for o in outcomes},
        )

    def classify_batch(self, points: list) -> List[ExpertResult]:
        """Classify multiple points."""
        return [self.classify(p) for p in points]

    def get_rule_summary(self, results: List[ExpertResult]) -> Dict[str, Any]:
        """
        How often each rule fired across ``results``, plus CF statistics.
        """
        fire_counts: Dict[str, int] = {}
        for rs in self.rule_sets:
            for rule in rs.rules:
                fire_counts[rule.name] = 0
        for r in results:
            for names in r.fired.values():
                for name in names:
                    fire_counts[name] = fire_counts.get(name, 0) + 1

        confidences = [r.confidence for r in results]
        return {
            "total_points": len(results),
            "rule_fire_counts": fire_counts,
            "avg_confidence": float(np.mean(confidences)) if confidences else 0.0,
            "min_confidence": float(np.min(confidences)) if confidences else 0.0,
            "max_confidence": float(np.max(confidences)) if confidences else 0.0,
        }
