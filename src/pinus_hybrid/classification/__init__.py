"""
Classification components: KNN voting, certainty-factor rules,
visual-score rules and the weighted fusion that joins them.
"""

from pinus_hybrid.classification.rules import Rule, RuleSet, RuleSetOutcome, cap_certainty
from pinus_hybrid.classification.concrete_rules import (
    CertaintyFactorClassifier,
    ExpertResult,
    DiameterRangeRule,
    HeightRangeRule,
    SlendernessRule,
    ShortStemRule,
    TallStemRule,
    DOUGLAS_FIR_RULES,
    WHITE_PINE_RULES,
)
from pinus_hybrid.classification.voting import KNNClassifier, KNNResult, tally_votes, vote
from pinus_hybrid.classification.visual import VisualFeatures, VisualFeatureScorer, validate_visual_scores
from pinus_hybrid.classification.fusion import (
    KNN_WEIGHT,
    EXPERT_WEIGHT,
    ORIGINAL_WEIGHT,
    VISUAL_WEIGHT,
    fuse_scores,
    fuse_visual,
)

__all__ = [
    # Base classes
    "Rule",
    "RuleSet",
    "RuleSetOutcome",
    "cap_certainty",

    # Concrete rules
    "DiameterRangeRule",
    "HeightRangeRule",
    "SlendernessRule",
    "ShortStemRule",
    "TallStemRule",
    "DOUGLAS_FIR_RULES",
    "WHITE_PINE_RULES",

    # Classifiers
    "CertaintyFactorClassifier",
    "ExpertResult",
    "KNNClassifier",
    "KNNResult",
    "VisualFeatureScorer",
    "VisualFeatures",

    # Functions
    "tally_votes",
    "vote",
    "validate_visual_scores",
    "fuse_scores",
    "fuse_visual",
    "KNN_WEIGHT",
    "EXPERT_WEIGHT",
    "ORIGINAL_WEIGHT",
    "VISUAL_WEIGHT",
]
