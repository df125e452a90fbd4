# src/pinus_hybrid/classification/voting.py
"""Majority vote over the k nearest training samples."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from ..config import ConfidenceDenominator, KNNConfig
from ..core.base import BaseClassifier
from ..core.species import declaration_order
from ..dataset import TrainingSet
from ..exceptions import EmptyTrainingSetError
from ..neighbors import NeighborCandidate, resolve_k, select_neighbors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KNNResult:
    predicted_label: str
    confidence: float
    votes: Dict[str, int]
    k: int
    neighbors: List[NeighborCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_label": self.predicted_label,
            "confidence": self.confidence,
            "votes": dict(self.votes),
            "k": self.k,
            "neighbors": [
                {
                    "id": n.sample.sample_id,
                    "diameter": n.sample.diameter,
                    "height": n.sample.height,
                    "label": n.label,
                    "distance": n.distance,
                }
                for n in self.neighbors
            ],
        }


def tally_votes(neighbors: List[NeighborCandidate]) -> Dict[str, int]:
    """
    Count labels among ``neighbors``.

    Keys follow declaration order (known classes first, then other labels
    as they first appear), so iteration order is stable across calls.
    """
    order = declaration_order(n.label for n in neighbors)
    counts = {label: 0 for label in order}
    for n in neighbors:
        counts[n.label] += 1
    # unseen known classes stay in the tally with zero votes
    return counts


def majority_label(votes: Dict[str, int]) -> str:
    """Highest count wins; ties go to the earliest label in ``votes`` order."""
    best_label = None
    best_count = -1
    for label, count in votes.items():
        if count > best_count:
            best_label, best_count = label, count
    return best_label


def vote(
    neighbors: List[NeighborCandidate],
    k: int,
    denominator: ConfidenceDenominator = ConfidenceDenominator.REQUESTED_K,
) -> KNNResult:
    """Turn a neighbor set into a prediction and a vote-ratio confidence."""
    if not neighbors:
        raise EmptyTrainingSetError("No neighbors to vote with")
    votes = tally_votes(neighbors)
    label = majority_label(votes)
    if denominator == ConfidenceDenominator.NEIGHBOR_COUNT:
        denom = len(neighbors)
    else:
        denom = k
    confidence = votes[label] / float(denom)
    return KNNResult(
        predicted_label=label,
        confidence=confidence,
        votes=votes,
        k=k,
        neighbors=list(neighbors),
    )


class KNNClassifier(BaseClassifier):
    """K-nearest-neighbor classifier over a fixed training set."""

    def __init__(self, training_set: TrainingSet, config: Optional[KNNConfig] = None):
        self.training_set = training_set
        self.config = config or KNNConfig()
        self.config.validate()

    def resolve_k(self, k: Optional[int] = None) -> int:
        if k is None:
            k = self.config.default_k
        return resolve_k(k, len(self.training_set), strict=self.config.strict_k)

    def classify(self, point: Any, k: Optional[int] = None) -> KNNResult:
        if len(self.training_set) == 0:
            raise EmptyTrainingSetError("Cannot classify without training samples")
        q = self.validate_point(point)
        k = self.resolve_k(k)
        neighbors = select_neighbors(q, self.training_set, k)
        if len(neighbors) < k:
            logger.debug(
                "Only %d neighbors available for k=%d (%s denominator)",
                len(neighbors), k, self.config.confidence_denominator.value,
            )
        return vote(neighbors, k, self.config.confidence_denominator)
