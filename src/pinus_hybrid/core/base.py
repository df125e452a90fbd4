# src/pinus_hybrid/core/base.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from ..dataset import QueryPoint
from ..exceptions import ValidationError


class BaseClassifier(ABC):
    """Abstract base class for all classifiers over (diameter, height)."""

    def validate_point(self, point: Any) -> QueryPoint:
        """Coerce ``point`` into a QueryPoint and check it is finite."""
        if isinstance(point, QueryPoint):
            return point
        if point is None:
            raise ValidationError("Query point is None")
        if hasattr(point, "diameter") and hasattr(point, "height"):
            return QueryPoint(point.diameter, point.height)
        try:
            d, h = point
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Query point must be (diameter, height), got {point!r}"
            ) from e
        return QueryPoint(d, h)

    @abstractmethod
    def classify(self, point: Any, *args, **kwargs):
        """Classify one query point."""
        ...
