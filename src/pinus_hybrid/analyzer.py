# src/pinus_hybrid/analyzer.py
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import logging

import numpy as np

from .classification.concrete_rules import CertaintyFactorClassifier, ExpertResult
from .classification.fusion import decide, fuse_scores, fuse_visual
from .classification.visual import VisualFeatureScorer, VisualFeatures, validate_visual_scores
from .classification.voting import KNNClassifier, KNNResult
from .config import EvaluationConfig, KNNConfig
from .core.base import BaseClassifier
from .core.species import CLASS_LABELS
from .dataset import QueryPoint, TrainingSet, as_query_points
from .evaluation import EvaluationReport, evaluate_system
from .exceptions import EmptyTrainingSetError

logger = logging.getLogger(__name__)

VisualInput = Union[VisualFeatures, Mapping[str, float]]


@dataclass(frozen=True)
class ClassificationResult:
    """Hybrid verdict with every intermediate score kept for inspection."""

    point: QueryPoint
    predicted_label: str
    confidence: float
    knn: KNNResult
    expert: ExpertResult
    hybrid_breakdown: Dict[str, float]
    visual_breakdown: Optional[Dict[str, float]] = None
    final_breakdown: Optional[Dict[str, float]] = None

    @property
    def vote_breakdown(self) -> Dict[str, int]:
        return self.knn.votes

    @property
    def cf_breakdown(self) -> Dict[str, float]:
        return self.expert.certainty

    @property
    def k(self) -> int:
        return self.knn.k

    @property
    def visual_enhanced(self) -> bool:
        return self.visual_breakdown is not None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.point.point_id,
            "diameter": self.point.diameter,
            "height": self.point.height,
            "predicted_label": self.predicted_label,
            "confidence": self.confidence,
            "k": self.k,
            "vote_breakdown": dict(self.vote_breakdown),
            "cf_breakdown": dict(self.cf_breakdown),
            "hybrid_breakdown": dict(self.hybrid_breakdown),
            "knn": self.knn.to_dict(),
            "expert": self.expert.to_dict(),
            "visual_enhanced": self.visual_enhanced,
        }
        if self.visual_enhanced:
            out["visual_breakdown"] = dict(self.visual_breakdown)
            out["final_breakdown"] = dict(self.final_breakdown)
        if self.point.label is not None:
            out["true_label"] = self.point.label
        return out


@dataclass(frozen=True)
class BatchResult:
    results: List[ClassificationResult]
    k: int
    training_count: int
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "k": self.k,
            "training_count": self.training_count,
            "test_count": len(self.results),
            "summary": self.summary,
            "results": [r.to_dict() for r in self.results],
        }


class HybridClassifier(BaseClassifier):
    """
    Main engine:
    - KNN vote over the training set
    - Certainty-factor rules over the raw measurements
    - Fixed-weight fusion of both, optionally with visual scores
    - In-sample evaluation
    """

    def __init__(self,
                 training_set: TrainingSet,
                 knn_config: Optional[KNNConfig] = None,
                 evaluation_config: Optional[EvaluationConfig] = None):
        self.training_set = training_set
        self.knn_config = knn_config or KNNConfig()
        self.evaluation_config = evaluation_config or EvaluationConfig()
        self.evaluation_config.validate()
        self.knn = KNNClassifier(training_set, self.knn_config)
        self.expert = CertaintyFactorClassifier()
        self.visual_scorer = VisualFeatureScorer()

    def _require_samples(self) -> None:
        if len(self.training_set) == 0:
            raise EmptyTrainingSetError("Cannot classify without training samples")

    def classify_knn(self, point: Any, k: Optional[int] = None) -> KNNResult:
        return self.knn.classify(point, k=k)

    def classify_expert(self, point: Any) -> ExpertResult:
        return self.expert.classify(point)

    def classify(self, point: Any, k: Optional[int] = None) -> ClassificationResult:
        """Hybrid classification of one point."""
        self._require_samples()
        q = self.validate_point(point)
        knn = self.knn.classify(q, k=k)
        expert = self.expert.classify(q)
        hybrid = fuse_scores(knn, expert.certainty, CLASS_LABELS)
        label, conf = decide(hybrid, CLASS_LABELS)
        return ClassificationResult(
            point=q,
            predicted_label=label,
            confidence=conf,
            knn=knn,
            expert=expert,
            hybrid_breakdown=hybrid,
        )

    def visual_scores(self, visual: VisualInput) -> Dict[str, float]:
        """Score map from descriptors, or a validated copy of a ready map."""
        if isinstance(visual, VisualFeatures):
            return self.visual_scorer.score(visual)
        return validate_visual_scores(visual, CLASS_LABELS)

    def classify_with_visual_features(self,
                                      point: Any,
                                      visual: VisualInput,
                                      k: Optional[int] = None) -> ClassificationResult:
        """Hybrid classification blended with per-class visual scores."""
        base = self.classify(point, k=k)
        visual_map = self.visual_scores(visual)
        final = fuse_visual(base.hybrid_breakdown, visual_map, CLASS_LABELS)
        label, conf = decide(final, CLASS_LABELS)
        return ClassificationResult(
            point=base.point,
            predicted_label=label,
            confidence=conf,
            knn=base.knn,
            expert=base.expert,
            hybrid_breakdown=base.hybrid_breakdown,
            visual_breakdown=visual_map,
            final_breakdown=final,
        )

    def classify_batch(self, points: Sequence[Any], k: Optional[int] = None) -> BatchResult:
        """Classify a test set with one shared k."""
        self._require_samples()
        queries = as_query_points(points)
        k = self.knn.resolve_k(k)
        results = [self.classify(q, k=k) for q in queries]
        summary = summarize(results)
        logger.info("Classified %d points with k=%d", len(results), k)
        return BatchResult(
            results=results,
            k=k,
            training_count=len(self.training_set),
            summary=summary,
        )

    def evaluate(self, k: Optional[int] = None) -> EvaluationReport:
        config = self.evaluation_config
        if k is not None:
            config = EvaluationConfig(k=self.knn.resolve_k(k), keep_rows=config.keep_rows)
        return evaluate_system(self, config)


def summarize(results: List[ClassificationResult]) -> Dict[str, Any]:
    """
    Prediction distribution and mean confidence over a batch.

    Accuracy is included only when every point carries a label.
    """
    total = len(results)
    counts = Counter(r.predicted_label for r in results)
    distribution = {
        label: {"count": n, "percent": round(n / total * 100, 2)}
        for label, n in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    }
    confidences = [r.confidence for r in results]
    out: Dict[str, Any] = {
        "total": total,
        "distribution": distribution,
        "avg_confidence": float(np.mean(confidences)) if confidences else 0.0,
    }
    if results and all(r.point.label is not None for r in results):
        correct = sum(1 for r in results if r.predicted_label == r.point.label)
        out["correct"] = correct
        out["accuracy"] = round(correct / total * 100, 2)
    return out
