# src/pinus_hybrid/evaluation.py
"""
In-sample evaluation.

Every training sample is reclassified against the full training set,
itself included, so the accuracy is a self-consistency figure and says
nothing about unseen trees.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional
import logging

from .config import EvaluationConfig
from .exceptions import EmptyTrainingSetError

if TYPE_CHECKING:
    from .analyzer import HybridClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationRow:
    sample_id: str
    knn_prediction: str
    expert_prediction: str
    expert_confidence: float
    final_confidence: float
    final_prediction: str
    true_label: str

    @property
    def correct(self) -> bool:
        return self.final_prediction == self.true_label

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.sample_id,
            "knn_prediction": self.knn_prediction,
            "expert_prediction": self.expert_prediction,
            "expert_confidence": self.expert_confidence,
            "final_confidence": self.final_confidence,
            "final_prediction": self.final_prediction,
            "true_label": self.true_label,
            "correct": self.correct,
        }


@dataclass(frozen=True)
class EvaluationReport:
    accuracy: float
    correct: int
    total: int
    k: int
    rows: List[EvaluationRow] = field(default_factory=list)

    def to_dict(self, include_rows: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "accuracy": self.accuracy,
            "correct": self.correct,
            "total": self.total,
            "k": self.k,
            "in_sample": True,
        }
        if include_rows:
            out["rows"] = [r.to_dict() for r in self.rows]
        return out


def accuracy_percent(correct: int, total: int) -> float:
    """Percentage correct, rounded to two decimals."""
    if total <= 0:
        raise EmptyTrainingSetError("Cannot compute accuracy over zero samples")
    return round(correct / total * 100, 2)


def evaluate_system(
    classifier: "HybridClassifier",
    config: Optional[EvaluationConfig] = None,
) -> EvaluationReport:
    """Reclassify every training sample and count exact label matches."""
    config = config or EvaluationConfig()
    config.validate()

    training_set = classifier.training_set
    total = len(training_set)
    if total == 0:
        raise EmptyTrainingSetError("Cannot evaluate without training samples")

    k = classifier.knn.resolve_k(config.k)
    rows: List[EvaluationRow] = []
    correct = 0
    for sample in training_set:
        result = classifier.classify(sample.as_query(), k=k)
        row = EvaluationRow(
            sample_id=sample.sample_id,
            knn_prediction=result.knn.predicted_label,
            expert_prediction=result.expert.predicted_label,
            expert_confidence=result.expert.confidence,
            final_confidence=result.confidence,
            final_prediction=result.predicted_label,
            true_label=sample.label,
        )
        if row.correct:
            correct += 1
        else:
            logger.debug(
                "Sample %s: predicted %s, recorded %s",
                sample.sample_id, row.final_prediction, sample.label,
            )
        if config.keep_rows:
            rows.append(row)

    report = EvaluationReport(
        accuracy=accuracy_percent(correct, total),
        correct=correct,
        total=total,
        k=k,
        rows=rows,
    )
    logger.info("In-sample accuracy %.2f%% (%d/%d, k=%d)", report.accuracy, correct, total, k)
    return report
