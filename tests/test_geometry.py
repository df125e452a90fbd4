"""Tests for the distance metric."""

import numpy as np
import pytest

from pinus_hybrid.core.geometry import distance, distances_to, slenderness
from pinus_hybrid.dataset import QueryPoint, TrainingSample


class TestDistance:
    def test_pythagorean_triple(self):
        assert distance((0.0, 0.0), (3.0, 4.0)) == 5.0

    def test_zero_for_same_point(self):
        assert distance((0.3, 6.0), (0.3, 6.0)) == 0.0

    @pytest.mark.parametrize("a,b", [
        ((0.2, 5.0), (0.5, 25.0)),
        ((0.28, 5.5), (0.3, 6.0)),
        ((1.7, 0.0), (-2.3, 41.9)),
        ((0.15, 13.5), (0.65, 2.67)),
    ])
    def test_symmetry(self, a, b):
        assert distance(a, b) == distance(b, a)

    def test_accepts_points_and_samples(self):
        q = QueryPoint(0.28, 5.5)
        s = TrainingSample("3", 0.30, 6.0, "Douglas Fir")
        assert distance(q, s) == pytest.approx(0.5003998, rel=1e-6)


class TestDistancesTo:
    def test_matches_scalar_distance(self):
        feats = np.array([[0.2, 5.0], [0.5, 25.0], [0.3, 6.0]])
        q = (0.28, 5.5)
        out = distances_to(q, feats)
        assert out.shape == (3,)
        for row, d in zip(feats, out):
            assert d == pytest.approx(distance(q, tuple(row)))

    def test_empty_features(self):
        out = distances_to((0.3, 5.0), np.zeros((0, 2)))
        assert out.size == 0


class TestSlenderness:
    def test_ratio(self):
        assert slenderness(0.3, 6.0) == pytest.approx(20.0)

    @pytest.mark.parametrize("diameter", [0.0, -0.1])
    def test_non_positive_diameter_has_no_ratio(self, diameter):
        assert slenderness(diameter, 5.0) is None
