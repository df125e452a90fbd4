# src/pinus_hybrid/classification/fusion.py
"""Weighted fusion of KNN, certainty-factor and visual scores."""
from __future__ import annotations
from typing import Dict, Mapping, Sequence, Tuple

from ..core.species import CLASS_LABELS, argmax_label
from .rules import cap_certainty
from .voting import KNNResult

KNN_WEIGHT = 0.6
EXPERT_WEIGHT = 0.4

ORIGINAL_WEIGHT = 0.8
VISUAL_WEIGHT = 0.2

assert KNN_WEIGHT + EXPERT_WEIGHT == 1.0
assert ORIGINAL_WEIGHT + VISUAL_WEIGHT == 1.0


def knn_component(knn: KNNResult, labels: Sequence[str] = CLASS_LABELS) -> Dict[str, float]:
    """Vote confidence for the KNN winner, 0.0 for every other class."""
    return {label: (knn.confidence if label == knn.predicted_label else 0.0) for label in labels}


def fuse_scores(
    knn: KNNResult,
    certainty: Mapping[str, float],
    labels: Sequence[str] = CLASS_LABELS,
) -> Dict[str, float]:
    """hybrid[c] = 0.6 * knn_component[c] + 0.4 * CF[c]"""
    comp = knn_component(knn, labels)
    return {
        label: cap_certainty(KNN_WEIGHT * comp[label] + EXPERT_WEIGHT * float(certainty.get(label, 0.0)))
        for label in labels
    }


def fuse_visual(
    hybrid: Mapping[str, float],
    visual: Mapping[str, float],
    labels: Sequence[str] = CLASS_LABELS,
) -> Dict[str, float]:
    """final[c] = 0.8 * hybrid[c] + 0.2 * visual[c]"""
    return {
        label: cap_certainty(
            ORIGINAL_WEIGHT * float(hybrid.get(label, 0.0)) + VISUAL_WEIGHT * float(visual.get(label, 0.0))
        )
        for label in labels
    }


def decide(scores: Mapping[str, float], labels: Sequence[str] = CLASS_LABELS) -> Tuple[str, float]:
    """Final label and its score, ties going to the earlier declared class."""
    return argmax_label(scores, labels)
