# src/pinus_hybrid/neighbors.py
"""Distance ranking, neighbor selection and automatic k."""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import logging

import numpy as np

from .core.geometry import distances_to
from .dataset import QueryPoint, TrainingSample, TrainingSet
from .exceptions import EmptyTrainingSetError, InvalidKError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NeighborCandidate:
    """A training sample paired with its distance to the query."""

    sample: TrainingSample
    distance: float

    @property
    def label(self) -> str:
        return self.sample.label


def choose_k_auto(n: int) -> int:
    """
    Pick k from the training-set size.

    Half of n (floored), bumped to the next odd number when even, never
    above n and never below 1.
    """
    if n <= 0:
        return 1
    k = n // 2
    if k % 2 == 0:
        k += 1
    if k > n:
        k = n
    return max(1, k)


def validate_k(k, n: int, strict: bool = False) -> int:
    """Check a caller-supplied k. Only ``strict`` rejects k above n."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidKError(f"k must be an integer, got {k!r}")
    k = int(k)
    if k <= 0:
        raise InvalidKError(f"k must be > 0, got {k}")
    if strict and k > n:
        raise InvalidKError(f"k={k} exceeds training-set size {n}")
    return k


def resolve_k(k: Optional[int], n: int, strict: bool = False) -> int:
    """Return a validated k, choosing one automatically when ``k`` is None."""
    if k is None:
        chosen = choose_k_auto(n)
        logger.debug("Automatic k=%d for n=%d", chosen, n)
        return chosen
    return validate_k(k, n, strict=strict)


def rank_by_distance(point: QueryPoint, training_set: TrainingSet) -> List[NeighborCandidate]:
    """
    Every training sample ordered by distance to ``point``.

    The sort is stable: equal distances keep training-set order.
    """
    if len(training_set) == 0:
        raise EmptyTrainingSetError("Training set is empty")
    dists = distances_to(point, training_set.features())
    order = np.argsort(dists, kind="stable")
    return [NeighborCandidate(training_set[int(i)], float(dists[i])) for i in order]


def select_neighbors(point: QueryPoint, training_set: TrainingSet, k: int) -> List[NeighborCandidate]:
    """The first ``k`` candidates from :func:`rank_by_distance`."""
    if k <= 0:
        raise InvalidKError(f"k must be > 0, got {k}")
    return rank_by_distance(point, training_set)[:k]
