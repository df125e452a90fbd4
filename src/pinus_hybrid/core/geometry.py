# src/pinus_hybrid/core/geometry.py
from __future__ import annotations
from typing import Tuple, Union
import math
import numpy as np

Point = Tuple[float, float]


def _as_pair(p) -> Point:
    if hasattr(p, "diameter") and hasattr(p, "height"):
        return float(p.diameter), float(p.height)
    d, h = p
    return float(d), float(h)


def distance(a, b) -> float:
    """Euclidean distance over (diameter, height)."""
    ad, ah = _as_pair(a)
    bd, bh = _as_pair(b)
    dd = ad - bd
    dh = ah - bh
    return math.sqrt(dd * dd + dh * dh)


def distances_to(point, features: np.ndarray) -> np.ndarray:
    """
    Distance from ``point`` to every row of an ``(n, 2)`` feature array.

    Returns a float64 array of length n in row order.
    """
    d, h = _as_pair(point)
    feats = np.asarray(features, dtype=np.float64)
    if feats.size == 0:
        return np.zeros(0, dtype=np.float64)
    dd = feats[:, 0] - d
    dh = feats[:, 1] - h
    return np.sqrt(dd * dd + dh * dh)


def slenderness(diameter: float, height: float) -> Union[float, None]:
    """Height-to-diameter ratio, or None when the diameter is not positive."""
    if diameter <= 0:
        return None
    return height / diameter
