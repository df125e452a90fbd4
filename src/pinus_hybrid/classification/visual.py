# src/pinus_hybrid/classification/visual.py
"""
Per-class scores from visual descriptors.

The descriptors arrive already computed (each in [0, 1]); nothing here
looks at pixels.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Sequence
import math

from ..core.species import CLASS_LABELS, DOUGLAS_FIR, WHITE_PINE
from ..exceptions import ValidationError

# (descriptor, threshold, label when above, label otherwise, weight)
VISUAL_RULES = (
    ("bark_texture", 0.6, DOUGLAS_FIR, WHITE_PINE, 0.3),
    ("leaf_density", 0.7, WHITE_PINE, DOUGLAS_FIR, 0.4),
    ("branch_pattern", 0.5, DOUGLAS_FIR, WHITE_PINE, 0.3),
)


def _unit(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number in [0, 1], got {value!r}")
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a number in [0, 1], got {value!r}") from e
    if not math.isfinite(v) or v < 0.0 or v > 1.0:
        raise ValidationError(f"{name} must be in [0, 1], got {value!r}")
    return v


@dataclass(frozen=True)
class VisualFeatures:
    """Visual descriptors of a tree, each normalised to [0, 1]."""

    bark_texture: float
    leaf_density: float
    branch_pattern: float
    tree_shape: float = 0.0

    def __post_init__(self):
        for name in ("bark_texture", "leaf_density", "branch_pattern", "tree_shape"):
            object.__setattr__(self, name, _unit(getattr(self, name), name))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VisualFeatures":
        missing = [n for n in ("bark_texture", "leaf_density", "branch_pattern") if n not in data]
        if missing:
            raise ValidationError(f"Missing visual feature(s): {', '.join(missing)}")
        return cls(
            bark_texture=data["bark_texture"],
            leaf_density=data["leaf_density"],
            branch_pattern=data["branch_pattern"],
            tree_shape=data.get("tree_shape", 0.0),
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


class VisualFeatureScorer:
    """Threshold rules mapping visual descriptors to per-class scores."""

    def __init__(self, rules=VISUAL_RULES):
        self.rules = tuple(rules)

    def score(self, features: VisualFeatures) -> Dict[str, float]:
        scores = {label: 0.0 for label in CLASS_LABELS}
        for name, threshold, above, below, weight in self.rules:
            target = above if getattr(features, name) > threshold else below
            scores[target] = scores.get(target, 0.0) + weight
        return {label: min(v, 1.0) for label, v in scores.items()}


def validate_visual_scores(
    scores: Mapping[str, Any],
    labels: Sequence[str] = CLASS_LABELS,
) -> Dict[str, float]:
    """
    Check an externally supplied score map.

    Every value must be in [0, 1] and every key a known class; classes the
    map leaves out score 0.0.
    """
    if not isinstance(scores, Mapping):
        raise ValidationError(f"Visual scores must be a mapping, got {type(scores).__name__}")
    unknown = [k for k in scores if k not in labels]
    if unknown:
        raise ValidationError(f"Unknown class(es) in visual scores: {', '.join(map(str, unknown))}")
    return {label: _unit(scores.get(label, 0.0), f"visual score for {label}") for label in labels}
