"""
Scanner package — LMC scoring and diagnostic classification.

Public API:
    ScanPipeline, CancellationToken
    EntropyEstimator, ScoreCombiner, DiagnosticClassifier, CoherenceProvider
    CompressionEntropyEstimator, CharacterDiversityEstimator
    LmcScoreCombiner, ThresholdClassifier, Thresholds
    estimate_entropy, combine, classify
"""

from scanner.protocols import (
    EntropyEstimator,
    ScoreCombiner,
    DiagnosticClassifier,
    CoherenceProvider,
)
from scanner.entropy import (
    CompressionEntropyEstimator,
    CharacterDiversityEstimator,
    estimate_entropy,
    get_estimator,
)
from scanner.combiner import LmcScoreCombiner, EPSILON, combine
from scanner.diagnostics import ThresholdClassifier, Thresholds, DEFAULT_THRESHOLDS, classify
from scanner.pipeline import ScanPipeline, CancellationToken, clamp_coherence

__all__ = [
    # Protocols
    "EntropyEstimator",
    "ScoreCombiner",
    "DiagnosticClassifier",
    "CoherenceProvider",
    # Entropy
    "CompressionEntropyEstimator",
    "CharacterDiversityEstimator",
    "estimate_entropy",
    "get_estimator",
    # Combination
    "LmcScoreCombiner",
    "EPSILON",
    "combine",
    # Classification
    "ThresholdClassifier",
    "Thresholds",
    "DEFAULT_THRESHOLDS",
    "classify",
    # Pipeline
    "ScanPipeline",
    "CancellationToken",
    "clamp_coherence",
]
