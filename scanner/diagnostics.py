"""Diagnostic classification of scored sentences."""

from dataclasses import dataclass

from common.config import config
from common.models import DiagnosticType
from scanner.protocols import DiagnosticClassifier

DROPOUT_COHERENCE = 0.25
OPTIMAL_LMC = 1.8
STEREOTYPE_ENTROPY = 0.3
NOISE_ENTROPY = 0.85


@dataclass(frozen=True)
class Thresholds:
    dropout_coherence: float = DROPOUT_COHERENCE
    optimal_lmc: float = OPTIMAL_LMC
    stereotype_entropy: float = STEREOTYPE_ENTROPY
    noise_entropy: float = NOISE_ENTROPY


DEFAULT_THRESHOLDS = Thresholds()


class ThresholdClassifier(DiagnosticClassifier):
    """
    Ordered decision list; the first matching rule wins.

    1. coherence < dropout_coherence  -> DROPOUT
    2. lmc_score > optimal_lmc        -> OPTIMAL
    3. entropy < stereotype_entropy   -> STEREOTYPE
    4. entropy > noise_entropy        -> NOISE
    5. otherwise                      -> NEUTRAL

    All comparisons are strict, so a value equal to a threshold does not
    trigger that rule.
    """

    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS):
        self.thresholds = thresholds

    @classmethod
    def from_config(cls) -> "ThresholdClassifier":
        return cls(Thresholds(
            dropout_coherence=float(config.get("diagnostics.dropout_coherence")),
            optimal_lmc=float(config.get("diagnostics.optimal_lmc")),
            stereotype_entropy=float(config.get("diagnostics.stereotype_entropy")),
            noise_entropy=float(config.get("diagnostics.noise_entropy")),
        ))

    def classify(
        self,
        coherence: float,
        entropy: float,
        lmc_score: float,
    ) -> DiagnosticType:
        t = self.thresholds
        if coherence < t.dropout_coherence:
            return DiagnosticType.DROPOUT
        if lmc_score > t.optimal_lmc:
            return DiagnosticType.OPTIMAL
        if entropy < t.stereotype_entropy:
            return DiagnosticType.STEREOTYPE
        if entropy > t.noise_entropy:
            return DiagnosticType.NOISE
        return DiagnosticType.NEUTRAL


_default_classifier = ThresholdClassifier()


def classify(coherence: float, entropy: float, lmc_score: float) -> DiagnosticType:
    """Classify with the built-in thresholds."""
    return _default_classifier.classify(coherence, entropy, lmc_score)
