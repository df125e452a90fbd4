"""End-to-end tests for the hybrid engine."""

import pytest

from pinus_hybrid.analyzer import HybridClassifier, summarize
from pinus_hybrid.classification.visual import VisualFeatures
from pinus_hybrid.config import ConfidenceDenominator, KNNConfig
from pinus_hybrid.dataset import QueryPoint
from pinus_hybrid.exceptions import EmptyTrainingSetError, InvalidKError, ValidationError

DF = "Douglas Fir"
WP = "White Pine"

QUERY = (0.28, 5.5)


class TestClassify:
    def test_scenario(self, engine):
        r = engine.classify(QUERY, k=3)
        assert r.predicted_label == DF
        assert r.confidence == pytest.approx(1.0)
        assert r.k == 3
        assert r.vote_breakdown == {DF: 3, WP: 0}
        assert r.cf_breakdown == pytest.approx({DF: 1.0, WP: 0.6})
        assert r.hybrid_breakdown == pytest.approx({DF: 1.0, WP: 0.24})
        assert [n.sample.sample_id for n in r.knn.neighbors] == ["3", "1", "5"]
        assert not r.visual_enhanced

    def test_auto_k(self, engine):
        assert engine.classify(QUERY).k == 3

    def test_default_k_from_config(self, scenario_set):
        engine = HybridClassifier(scenario_set, KNNConfig(default_k=5))
        r = engine.classify(QUERY)
        assert r.k == 5
        assert r.knn.confidence == pytest.approx(0.6)

    def test_deterministic(self, engine):
        assert engine.classify(QUERY, k=3).to_dict() == engine.classify(QUERY, k=3).to_dict()

    def test_accepts_query_point(self, engine):
        r = engine.classify(QueryPoint(0.28, 5.5, point_id="q1"))
        assert r.to_dict()["id"] == "q1"

    def test_large_k_uses_every_sample(self, engine):
        r = engine.classify(QUERY, k=10)
        assert len(r.knn.neighbors) == 5
        assert r.knn.confidence == pytest.approx(0.3)

    def test_neighbor_count_denominator(self, scenario_set):
        cfg = KNNConfig(confidence_denominator=ConfidenceDenominator.NEIGHBOR_COUNT)
        r = HybridClassifier(scenario_set, cfg).classify(QUERY, k=10)
        assert r.knn.confidence == pytest.approx(0.6)

    def test_strict_k(self, scenario_set):
        engine = HybridClassifier(scenario_set, KNNConfig(strict_k=True))
        with pytest.raises(InvalidKError):
            engine.classify(QUERY, k=10)

    @pytest.mark.parametrize("k", [0, -1, 2.5, True])
    def test_invalid_k(self, engine, k):
        with pytest.raises(InvalidKError):
            engine.classify(QUERY, k=k)

    def test_empty_training_set(self, empty_engine):
        with pytest.raises(EmptyTrainingSetError):
            empty_engine.classify(QUERY)

    def test_expert_needs_no_training(self, empty_engine):
        r = empty_engine.classify_expert(QUERY)
        assert r.predicted_label == DF

    def test_bad_point(self, engine):
        with pytest.raises(ValidationError):
            engine.classify(("wide", 5.0))

    def test_to_dict(self, engine):
        d = engine.classify(QueryPoint(0.28, 5.5, label=DF), k=3).to_dict()
        assert d["predicted_label"] == DF
        assert d["true_label"] == DF
        assert d["knn"]["k"] == 3
        assert d["expert"]["fired"][DF]
        assert "visual_breakdown" not in d


class TestVisual:
    def test_score_map(self, engine):
        r = engine.classify_with_visual_features(QUERY, {DF: 0.0, WP: 1.0}, k=3)
        assert r.visual_enhanced
        assert r.final_breakdown[DF] == pytest.approx(0.8)
        assert r.final_breakdown[WP] == pytest.approx(0.392)
        assert r.predicted_label == DF
        assert r.confidence == pytest.approx(0.8)
        # hybrid scores are kept untouched
        assert r.hybrid_breakdown == pytest.approx({DF: 1.0, WP: 0.24})

    def test_descriptors(self, engine):
        r = engine.classify_with_visual_features(QUERY, VisualFeatures(0.6, 0.7, 0.5), k=3)
        assert r.visual_breakdown == pytest.approx({DF: 0.4, WP: 0.6})
        assert r.final_breakdown[DF] == pytest.approx(0.8 + 0.08)

    def test_invalid_map(self, engine):
        with pytest.raises(ValidationError):
            engine.classify_with_visual_features(QUERY, {DF: 2.0})


class TestBatch:
    def test_batch(self, engine):
        points = [QueryPoint(0.28, 5.5, label=DF), QueryPoint(0.45, 27.0, label=WP)]
        batch = engine.classify_batch(points)
        assert batch.k == 3
        assert batch.training_count == 5
        assert [r.predicted_label for r in batch.results] == [DF, WP]
        assert batch.results[1].hybrid_breakdown == pytest.approx({DF: 0.28, WP: 0.8})
        summary = batch.summary
        assert summary["distribution"][DF] == {"count": 1, "percent": 50.0}
        assert summary["distribution"][WP] == {"count": 1, "percent": 50.0}
        assert summary["avg_confidence"] == pytest.approx(0.9)
        assert summary["accuracy"] == 100.0
        assert summary["correct"] == 2

    def test_tuples_get_row_ids(self, engine):
        batch = engine.classify_batch([(0.28, 5.5), (0.45, 27.0)])
        assert [r.point.point_id for r in batch.results] == ["1", "2"]
        assert "accuracy" not in batch.summary

    def test_batch_invalid_k(self, engine):
        with pytest.raises(InvalidKError):
            engine.classify_batch([QUERY], k=0)

    def test_batch_empty_training(self, empty_engine):
        with pytest.raises(EmptyTrainingSetError):
            empty_engine.classify_batch([QUERY])

    def test_batch_to_dict(self, engine):
        d = engine.classify_batch([QUERY]).to_dict()
        assert d["test_count"] == 1
        assert len(d["results"]) == 1


def test_summarize_orders_by_count(engine):
    results = [engine.classify(p, k=3) for p in [(0.28, 5.5), (0.2, 4.5), (0.45, 27.0)]]
    summary = summarize(results)
    assert list(summary["distribution"]) == [DF, WP]
    assert summary["distribution"][DF]["percent"] == 66.67
