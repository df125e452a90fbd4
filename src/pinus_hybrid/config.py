# src/pinus_hybrid/config.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import ConfigurationError


class ConfidenceDenominator(str, Enum):
    """How the KNN vote confidence is normalised."""

    # votes / requested k, even when fewer neighbors exist
    REQUESTED_K = "requested_k"
    # votes / number of neighbors actually selected
    NEIGHBOR_COUNT = "neighbor_count"


def _check_k(value: Optional[int], name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an int or None, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0")


@dataclass
class KNNConfig:
    """Neighbor selection and voting parameters."""

    # None selects k from the training-set size
    default_k: Optional[int] = None

    # Reject k larger than the training set instead of using every sample
    strict_k: bool = False

    confidence_denominator: ConfidenceDenominator = ConfidenceDenominator.REQUESTED_K

    def validate(self) -> None:
        """Validate configuration parameters."""
        _check_k(self.default_k, "default_k")
        if not isinstance(self.confidence_denominator, ConfidenceDenominator):
            try:
                self.confidence_denominator = ConfidenceDenominator(self.confidence_denominator)
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown confidence_denominator: {self.confidence_denominator!r}"
                ) from e


@dataclass
class EvaluationConfig:
    """In-sample evaluation parameters."""

    k: Optional[int] = None
    keep_rows: bool = True

    def validate(self) -> None:
        """Validate evaluation configuration."""
        _check_k(self.k, "k")
