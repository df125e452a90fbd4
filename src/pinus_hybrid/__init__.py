# src/pinus_hybrid/__init__.py
from .api import (
    classify,
    classify_knn,
    classify_expert,
    classify_with_visual_features,
    classify_batch,
    evaluate,
    choose_k,
)
from .analyzer import HybridClassifier, ClassificationResult, BatchResult
from .classification.visual import VisualFeatures
from .config import KNNConfig, EvaluationConfig, ConfidenceDenominator
from .core.species import CLASS_LABELS, DOUGLAS_FIR, WHITE_PINE
from .dataset import QueryPoint, TrainingSample, TrainingSet, load_training_set, load_query_points
from .evaluation import EvaluationReport
from .exceptions import (
    PinusError,
    EmptyTrainingSetError,
    InvalidKError,
    ValidationError,
    ConfigurationError,
    DatasetLoadError,
)
from .__version__ import __version__

__all__ = [
    "classify",
    "classify_knn",
    "classify_expert",
    "classify_with_visual_features",
    "classify_batch",
    "evaluate",
    "choose_k",
    "HybridClassifier",
    "ClassificationResult",
    "BatchResult",
    "EvaluationReport",
    "VisualFeatures",
    "KNNConfig",
    "EvaluationConfig",
    "ConfidenceDenominator",
    "CLASS_LABELS",
    "DOUGLAS_FIR",
    "WHITE_PINE",
    "QueryPoint",
    "TrainingSample",
    "TrainingSet",
    "load_training_set",
    "load_query_points",
    "PinusError",
    "EmptyTrainingSetError",
    "InvalidKError",
    "ValidationError",
    "ConfigurationError",
    "DatasetLoadError",
    "__version__",
]
