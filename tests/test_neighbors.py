"""Tests for neighbor ranking, selection and automatic k."""

import pytest

from pinus_hybrid.dataset import QueryPoint, TrainingSample, TrainingSet
from pinus_hybrid.exceptions import EmptyTrainingSetError, InvalidKError
from pinus_hybrid.neighbors import (
    choose_k_auto,
    rank_by_distance,
    resolve_k,
    select_neighbors,
    validate_k,
)


class TestChooseKAuto:
    @pytest.mark.parametrize("n,expected", [
        (-3, 1),
        (0, 1),
        (1, 1),
        (2, 1),
        (3, 1),
        (4, 3),
        (5, 3),
        (6, 3),
        (7, 3),
        (8, 5),
        (10, 5),
        (12, 7),
        (100, 51),
    ])
    def test_heuristic(self, n, expected):
        assert choose_k_auto(n) == expected

    @pytest.mark.parametrize("n", range(1, 40))
    def test_always_odd_positive_and_within_n(self, n):
        k = choose_k_auto(n)
        assert 1 <= k <= n
        assert k % 2 == 1


class TestValidateK:
    @pytest.mark.parametrize("bad", [0, -1, 2.5, "3", None, True])
    def test_rejects_invalid(self, bad):
        with pytest.raises(InvalidKError):
            validate_k(bad, 5)

    def test_strict_rejects_k_above_n(self):
        with pytest.raises(InvalidKError):
            validate_k(6, 5, strict=True)

    def test_lenient_keeps_k_above_n(self):
        assert validate_k(6, 5) == 6

    def test_resolve_none_uses_heuristic(self):
        assert resolve_k(None, 5) == 3
        assert resolve_k(4, 5) == 4


class TestRanking:
    def test_orders_by_distance(self, scenario_set):
        ranked = rank_by_distance(QueryPoint(0.28, 5.5), scenario_set)
        assert [c.sample.sample_id for c in ranked] == ["3", "1", "5", "2", "4"]
        dists = [c.distance for c in ranked]
        assert dists == sorted(dists)

    def test_ties_keep_training_order(self):
        a = TrainingSample("a", 0.3, 12.0, "Douglas Fir")
        b = TrainingSample("b", 0.3, 8.0, "White Pine")
        q = QueryPoint(0.3, 10.0)

        forward = rank_by_distance(q, TrainingSet((a, b)))
        assert [c.sample.sample_id for c in forward] == ["a", "b"]

        backward = rank_by_distance(q, TrainingSet((b, a)))
        assert [c.sample.sample_id for c in backward] == ["b", "a"]

    def test_select_first_k(self, scenario_set):
        chosen = select_neighbors(QueryPoint(0.28, 5.5), scenario_set, 3)
        assert [c.sample.sample_id for c in chosen] == ["3", "1", "5"]

    def test_k_above_n_returns_everything(self, scenario_set):
        chosen = select_neighbors(QueryPoint(0.28, 5.5), scenario_set, 50)
        assert len(chosen) == len(scenario_set)

    def test_empty_training_set(self):
        with pytest.raises(EmptyTrainingSetError):
            rank_by_distance(QueryPoint(0.3, 5.0), TrainingSet())
