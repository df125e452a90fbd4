"""Tests for configuration validation."""

import pytest

from pinus_hybrid.analyzer import HybridClassifier
from pinus_hybrid.config import ConfidenceDenominator, EvaluationConfig, KNNConfig
from pinus_hybrid.exceptions import ConfigurationError


class TestKNNConfig:
    def test_defaults(self):
        cfg = KNNConfig()
        cfg.validate()
        assert cfg.default_k is None
        assert cfg.strict_k is False
        assert cfg.confidence_denominator is ConfidenceDenominator.REQUESTED_K

    def test_denominator_from_string(self):
        cfg = KNNConfig(confidence_denominator="neighbor_count")
        cfg.validate()
        assert cfg.confidence_denominator is ConfidenceDenominator.NEIGHBOR_COUNT

    def test_unknown_denominator(self):
        with pytest.raises(ConfigurationError):
            KNNConfig(confidence_denominator="median").validate()

    @pytest.mark.parametrize("k", [0, -3, 1.5, True, "5"])
    def test_bad_default_k(self, k):
        with pytest.raises(ConfigurationError):
            KNNConfig(default_k=k).validate()

    def test_engine_validates_config(self, scenario_set):
        with pytest.raises(ConfigurationError):
            HybridClassifier(scenario_set, KNNConfig(default_k=0))


class TestEvaluationConfig:
    def test_defaults(self):
        cfg = EvaluationConfig()
        cfg.validate()
        assert cfg.k is None
        assert cfg.keep_rows is True

    def test_bad_k(self, scenario_set):
        with pytest.raises(ConfigurationError):
            HybridClassifier(scenario_set, evaluation_config=EvaluationConfig(k=-1))
