# src/pinus_hybrid/api.py
"""Public API. Every call takes the training set explicitly."""
from __future__ import annotations
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from .analyzer import BatchResult, ClassificationResult, HybridClassifier, VisualInput
from .classification.concrete_rules import ExpertResult
from .classification.visual import VisualFeatures
from .classification.voting import KNNResult
from .config import EvaluationConfig, KNNConfig
from .dataset import TrainingSet, load_training_set
from .evaluation import EvaluationReport
from .neighbors import choose_k_auto

TrainingInput = Union[TrainingSet, str, Path, Iterable[Any]]


def _as_training_set(training: TrainingInput) -> TrainingSet:
    if isinstance(training, TrainingSet):
        return training
    if isinstance(training, (str, Path)):
        return load_training_set(training)
    return TrainingSet.from_records(training)


def _engine(training: TrainingInput,
            knn_config: Optional[KNNConfig] = None,
            evaluation_config: Optional[EvaluationConfig] = None) -> HybridClassifier:
    return HybridClassifier(_as_training_set(training), knn_config, evaluation_config)


def choose_k(training: TrainingInput) -> int:
    """
    K picked automatically for a training set.

    Examples
    --------
    ::

        k = choose_k("training.csv")
    """
    return choose_k_auto(len(_as_training_set(training)))


def classify(
        point: Any,
        training: TrainingInput,
        k: Optional[int] = None,
        knn_config: Optional[KNNConfig] = None,
) -> ClassificationResult:
    """
    Hybrid KNN + certainty-factor classification of one tree.

    Parameters
    ----------
    point : QueryPoint or (diameter, height)
        Measurement to classify
    training : TrainingSet, path, or iterable of records
        Labeled reference samples
    k : int, optional
        Neighbor count (automatic from the training-set size if None)
    knn_config : KNNConfig, optional
        Strict-k and confidence-denominator choices

    Returns
    -------
    ClassificationResult
        predicted_label, confidence, vote_breakdown, cf_breakdown,
        hybrid_breakdown plus the KNN and expert sub-results

    Examples
    --------
    ::

        r = classify((0.28, 5.5), "training.csv", k=3)
        print(r.predicted_label, r.confidence)
    """
    return _engine(training, knn_config).classify(point, k=k)


def classify_knn(point: Any, training: TrainingInput, k: Optional[int] = None,
                 knn_config: Optional[KNNConfig] = None) -> KNNResult:
    """KNN vote only."""
    return _engine(training, knn_config).classify_knn(point, k=k)


def classify_expert(point: Any) -> ExpertResult:
    """
    Certainty-factor rules only. No training set is involved.

    Examples
    --------
    ::

        r = classify_expert((0.3, 5.0))
        print(r.certainty)   # {'Douglas Fir': 1.0, 'White Pine': 0.6}
    """
    return HybridClassifier(TrainingSet()).classify_expert(point)


def classify_with_visual_features(
        point: Any,
        training: TrainingInput,
        visual: Union[VisualInput, Mapping[str, float]],
        k: Optional[int] = None,
        knn_config: Optional[KNNConfig] = None,
) -> ClassificationResult:
    """
    Hybrid classification blended 80/20 with visual scores.

    Parameters
    ----------
    visual : VisualFeatures or dict
        Either descriptors (bark_texture, leaf_density, branch_pattern,
        tree_shape) or a ready per-class score map like
        ``{"Douglas Fir": 0.7, "White Pine": 0.3}``

    Examples
    --------
    ::

        r = classify_with_visual_features(
            (0.3, 5.0), "training.csv",
            {"bark_texture": 0.8, "leaf_density": 0.2, "branch_pattern": 0.9},
        )
        print(r.final_breakdown)
    """
    if isinstance(visual, Mapping) and "bark_texture" in visual:
        visual = VisualFeatures.from_mapping(visual)
    return _engine(training, knn_config).classify_with_visual_features(point, visual, k=k)


def classify_batch(points: Sequence[Any], training: TrainingInput, k: Optional[int] = None,
                   knn_config: Optional[KNNConfig] = None) -> BatchResult:
    """
    Classify a test set with one shared k.

    Examples
    --------
    ::

        batch = classify_batch([(0.2, 5.0), (0.4, 27.0)], "training.csv")
        print(batch.k, batch.summary["distribution"])
    """
    return _engine(training, knn_config).classify_batch(points, k=k)


def evaluate(training: TrainingInput, k: Optional[int] = None,
             knn_config: Optional[KNNConfig] = None,
             evaluation_config: Optional[EvaluationConfig] = None) -> EvaluationReport:
    """
    In-sample accuracy: every training sample reclassified against the
    whole training set, itself included. Not a generalization estimate.

    Returns
    -------
    EvaluationReport
        accuracy (percent, 2 decimals), correct, total, k, rows

    Examples
    --------
    ::

        rep = evaluate("training.csv")
        print(f"{rep.accuracy}% ({rep.correct}/{rep.total})")
    """
    return _engine(training, knn_config, evaluation_config).evaluate(k=k)

