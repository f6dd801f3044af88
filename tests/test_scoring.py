"""Tests for scanner/combiner.py and scanner/diagnostics.py."""

import math

import pytest

from common.config import config
from common.models import DiagnosticType
from scanner.combiner import EPSILON, LmcScoreCombiner, combine
from scanner.diagnostics import (
    DEFAULT_THRESHOLDS,
    ThresholdClassifier,
    Thresholds,
    classify,
)


# ── Score combiner ────────────────────────────────────────────

class TestCombine:
    def test_formula(self):
        assert combine(0.9, 0.5) == pytest.approx(0.9 / 0.5001)

    def test_zero_entropy_is_bounded(self):
        assert combine(1.0, 0.0) == pytest.approx(1.0 / EPSILON)

    def test_zero_coherence(self):
        assert combine(0.0, 0.7) == 0.0

    @pytest.mark.parametrize("c", [0.0, 0.25, 0.5, 1.0])
    @pytest.mark.parametrize("e", [0.0, 0.01, 0.3, 1.0, 2.5])
    def test_finite_and_non_negative(self, c, e):
        score = combine(c, e)
        assert math.isfinite(score)
        assert score >= 0.0

    def test_custom_epsilon(self):
        assert LmcScoreCombiner(epsilon=0.5).combine(1.0, 0.5) == pytest.approx(1.0)

    def test_non_positive_epsilon_rejected(self):
        with pytest.raises(ValueError):
            LmcScoreCombiner(epsilon=0.0)


# ── Diagnostic classifier ─────────────────────────────────────

class TestClassifyRules:
    def test_dropout_dominates_high_score(self):
        assert classify(0.1, 0.05, 5.0) is DiagnosticType.DROPOUT

    def test_low_coherence_dropout_scenario(self):
        score = combine(0.1, 0.05)
        assert score > 1.8
        assert classify(0.1, 0.05, score) is DiagnosticType.DROPOUT

    def test_optimal_beats_stereotype(self):
        # entropy < 0.3 but the score is above the optimal threshold
        score = combine(0.9, 0.1)
        assert classify(0.9, 0.1, score) is DiagnosticType.OPTIMAL

    def test_stereotype_when_score_not_optimal(self):
        assert classify(0.3, 0.2, combine(0.3, 0.2)) is DiagnosticType.STEREOTYPE

    def test_noise(self):
        score = combine(0.9, 0.9)
        assert score == pytest.approx(0.9 / 0.9001)
        assert classify(0.9, 0.9, score) is DiagnosticType.NOISE

    def test_neutral(self):
        score = combine(0.9, 0.5)
        assert score < 1.8
        assert classify(0.9, 0.5, score) is DiagnosticType.NEUTRAL

    def test_repetitive_diversity_value_is_optimal(self):
        # "aaaaaaaaaa" under the character-diversity ratio
        entropy = 0.1
        assert classify(0.9, entropy, combine(0.9, entropy)) is DiagnosticType.OPTIMAL


class TestClassifyBoundaries:
    def test_optimal_threshold_is_exclusive(self):
        assert classify(0.9, 0.5, 1.8) is DiagnosticType.NEUTRAL

    def test_dropout_threshold_is_exclusive(self):
        assert classify(0.25, 0.5, 0.5) is DiagnosticType.NEUTRAL

    def test_stereotype_threshold_is_exclusive(self):
        assert classify(0.5, 0.3, 1.0) is DiagnosticType.NEUTRAL

    def test_noise_threshold_is_exclusive(self):
        assert classify(0.5, 0.85, 0.5) is DiagnosticType.NEUTRAL

    @pytest.mark.parametrize("c", [0.0, 0.2, 0.25, 0.6, 1.0])
    @pytest.mark.parametrize("e", [0.0, 0.29, 0.3, 0.5, 0.85, 0.9, 2.0])
    def test_total(self, c, e):
        result = classify(c, e, combine(c, e))
        assert result in set(DiagnosticType)


class TestThresholdClassifier:
    def test_defaults(self):
        assert DEFAULT_THRESHOLDS == Thresholds(0.25, 1.8, 0.3, 0.85)

    def test_custom_thresholds(self):
        clf = ThresholdClassifier(Thresholds(dropout_coherence=0.5))
        assert clf.classify(0.4, 0.5, 0.8) is DiagnosticType.DROPOUT

    def test_from_config_defaults_match_constants(self):
        assert ThresholdClassifier.from_config().thresholds == DEFAULT_THRESHOLDS

    def test_from_config_override(self, monkeypatch):
        monkeypatch.setattr(config, "_config", {"diagnostics": {"optimal_lmc": 3}})
        clf = ThresholdClassifier.from_config()
        assert clf.thresholds.optimal_lmc == 3.0
        assert clf.classify(0.9, 0.5, 2.5) is DiagnosticType.NEUTRAL


class TestDiagnosticType:
    def test_exactly_five_categories(self):
        assert len(DiagnosticType) == 5

    def test_display_labels(self):
        assert DiagnosticType.DROPOUT.label == "DÉCROCHAGE"
        assert DiagnosticType.NOISE.label == "BRUIT"
        assert DiagnosticType.OPTIMAL.label == "OPTIMAL"
