"""Abstract base classes for the scanning system."""

from abc import ABC, abstractmethod
from typing import List

from common.models import DiagnosticType, Segment


class EntropyEstimator(ABC):
    """Protocol for a text complexity (entropy proxy) estimator."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique estimator name (e.g. 'compression')."""
        ...

    @abstractmethod
    def estimate(self, text: str) -> float:
        """
        Estimate the information density of *text*.

        Returns:
            0.0 for empty text, otherwise a positive ratio (roughly [0, 1+]).
        """
        ...


class ScoreCombiner(ABC):
    """Protocol for combining coherence and entropy into an LMC score."""

    @abstractmethod
    def combine(self, coherence: float, entropy: float) -> float:
        """Return a finite, non-negative score."""
        ...


class DiagnosticClassifier(ABC):
    """Protocol for mapping sentence metrics to a diagnostic category."""

    @abstractmethod
    def classify(
        self,
        coherence: float,
        entropy: float,
        lmc_score: float,
    ) -> DiagnosticType:
        """Return exactly one DiagnosticType."""
        ...


class CoherenceProvider(ABC):
    """Protocol for the external segmentation and coherence service."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def fetch_segments(self, topic: str, text_block: str) -> List[Segment]:
        """
        Split *text_block* into sentences and score each against *topic*.

        Raises:
            ProviderFailure: on network errors or malformed responses.
        """
        ...
