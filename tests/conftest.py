"""Shared fixtures for the Pinus Hybrid test suite."""

import pytest

from pinus_hybrid.analyzer import HybridClassifier
from pinus_hybrid.dataset import TrainingSample, TrainingSet

DF = "Douglas Fir"
WP = "White Pine"

SCENARIO_ROWS = [
    ("1", 0.20, 5.0, DF),
    ("2", 0.50, 25.0, WP),
    ("3", 0.30, 6.0, DF),
    ("4", 0.40, 28.0, WP),
    ("5", 0.25, 4.0, DF),
]


@pytest.fixture
def scenario_samples():
    return [TrainingSample(*row) for row in SCENARIO_ROWS]


@pytest.fixture
def scenario_set(scenario_samples):
    return TrainingSet(tuple(scenario_samples))


@pytest.fixture
def engine(scenario_set):
    return HybridClassifier(scenario_set)


@pytest.fixture
def empty_engine():
    return HybridClassifier(TrainingSet())


@pytest.fixture
def training_csv(tmp_path):
    path = tmp_path / "training.csv"
    lines = ["id,diameter,height,label"]
    lines += [f"{sid},{d},{h},{label}" for sid, d, h, label in SCENARIO_ROWS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
