"""Tests for the module-level API."""

import pytest

import pinus_hybrid
from pinus_hybrid import api
from pinus_hybrid.exceptions import EmptyTrainingSetError


DF = "Douglas Fir"
WP = "White Pine"

ROWS = [
    ("1", 0.20, 5.0, DF),
    ("2", 0.50, 25.0, WP),
    ("3", 0.30, 6.0, DF),
    ("4", 0.40, 28.0, WP),
    ("5", 0.25, 4.0, DF),
]


def test_package_exports():
    assert pinus_hybrid.classify is api.classify
    assert pinus_hybrid.CLASS_LABELS == (DF, WP)
    assert isinstance(pinus_hybrid.__version__, str)


class TestTrainingInputs:
    def test_from_path(self, training_csv):
        assert api.classify((0.28, 5.5), training_csv, k=3).predicted_label == DF

    def test_from_str_path(self, training_csv):
        assert api.choose_k(str(training_csv)) == 3

    def test_from_records(self):
        r = api.classify((0.45, 27.0), ROWS)
        assert r.predicted_label == WP
        assert r.confidence == pytest.approx(0.8)

    def test_from_training_set(self, scenario_set):
        assert api.classify_knn((0.28, 5.5), scenario_set, k=3).votes == {DF: 3, WP: 0}

    def test_empty_records(self):
        with pytest.raises(EmptyTrainingSetError):
            api.classify((0.28, 5.5), [])


def test_classify_expert():
    r = api.classify_expert((0.3, 5.0))
    assert r.certainty == pytest.approx({DF: 1.0, WP: 0.6})


def test_visual_descriptor_dict(scenario_set):
    r = api.classify_with_visual_features(
        (0.28, 5.5),
        scenario_set,
        {"bark_texture": 0.8, "leaf_density": 0.2, "branch_pattern": 0.9},
        k=3,
    )
    assert r.visual_breakdown == pytest.approx({DF: 1.0, WP: 0.0})
    assert r.final_breakdown[WP] == pytest.approx(0.8 * 0.24)


def test_visual_score_map(scenario_set):
    r = api.classify_with_visual_features((0.28, 5.5), scenario_set, {WP: 1.0}, k=3)
    assert r.final_breakdown == pytest.approx({DF: 0.8, WP: 0.392})


def test_batch(scenario_set):
    batch = api.classify_batch([(0.28, 5.5), (0.45, 27.0)], scenario_set)
    assert batch.k == 3
    assert [r.predicted_label for r in batch.results] == [DF, WP]


def test_evaluate(training_csv):
    assert api.evaluate(training_csv).accuracy == 100.0
    assert api.evaluate(training_csv, k=5).accuracy == 60.0
