"""Scan pipeline — orchestrates provider, entropy, combination, and classification."""

import math
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from common.config import config
from common.errors import ProviderFailure, ScanCancelledError
from common.logging.logger import get_logger
from common.models import ScanResult, Segment, SentenceAnalysis
from scanner.combiner import LmcScoreCombiner
from scanner.diagnostics import ThresholdClassifier
from scanner.entropy import get_estimator
from scanner.protocols import (
    CoherenceProvider,
    DiagnosticClassifier,
    EntropyEstimator,
    ScoreCombiner,
)

logger = get_logger("scan_pipeline")


class CancellationToken:
    """Thread-safe flag a caller can set to abort a running scan."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def clamp_coherence(value: float) -> float:
    """Clamp a provider coherence into [0, 1]; NaN maps to 0."""
    value = float(value)
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def _check_cancelled(token: Optional[CancellationToken], processed: int, total: int) -> None:
    if token is not None and token.cancelled:
        raise ScanCancelledError(processed, total)


class ScanPipeline:
    """
    Drives segments through entropy -> score -> diagnostic, in input order.

    Each component can be swapped independently.

    Args:
        provider: Coherence/segmentation provider (required only for scan()).
        estimator: Entropy estimator (default: entropy.algorithm from config).
        combiner: Score combiner (default: coherence / (entropy + 1e-4)).
        classifier: Diagnostic classifier (default: built-in thresholds).
        max_workers: Threads used for entropy estimation (default: scan.max_workers).
    """

    def __init__(
        self,
        provider: Optional[CoherenceProvider] = None,
        estimator: Optional[EntropyEstimator] = None,
        combiner: Optional[ScoreCombiner] = None,
        classifier: Optional[DiagnosticClassifier] = None,
        max_workers: Optional[int] = None,
    ):
        self.provider = provider
        self.estimator = estimator or get_estimator()
        self.combiner = combiner or LmcScoreCombiner()
        self.classifier = classifier or ThresholdClassifier()
        self.max_workers = max(1, max_workers or config.get("scan.max_workers"))

    # -- entropy ------------------------------------------------------------

    def _compute_entropies(
        self, texts: List[str], cancel_token: Optional[CancellationToken]
    ) -> List[float]:
        total = len(texts)
        entropies: List[float] = []

        if self.max_workers == 1 or total < 2:
            for text in texts:
                _check_cancelled(cancel_token, len(entropies), total)
                entropies.append(self.estimator.estimate(text))
            return entropies

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = [executor.submit(self.estimator.estimate, text) for text in texts]
            # Collected in submission order, not completion order
            for future in futures:
                _check_cancelled(cancel_token, len(entropies), total)
                entropies.append(future.result())
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
        return entropies

    # -- public API ---------------------------------------------------------

    def analyze(self, text: str, coherence: float) -> SentenceAnalysis:
        """Score and classify a single sentence."""
        coherence = clamp_coherence(coherence)
        entropy = self.estimator.estimate(text)
        return self._build(text, coherence, entropy)

    def _build(self, text: str, coherence: float, entropy: float) -> SentenceAnalysis:
        lmc_score = self.combiner.combine(coherence, entropy)
        diagnostic = self.classifier.classify(coherence, entropy, lmc_score)
        return SentenceAnalysis(
            id=uuid.uuid4().hex,
            text=text,
            entropy=entropy,
            coherence=coherence,
            lmc_score=lmc_score,
            diagnostic=diagnostic,
        )

    def scan_segments(
        self,
        topic: str,
        segments: Sequence[Segment],
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScanResult:
        """
        Analyze already-scored segments.

        The topic does not influence the computation; it only labels logs.

        Raises:
            ScanCancelledError: if *cancel_token* fires before completion.
        """
        segments = list(segments)
        total = len(segments)
        _check_cancelled(cancel_token, 0, total)

        texts = [s.text for s in segments]
        coherences = [clamp_coherence(s.coherence) for s in segments]
        entropies = self._compute_entropies(texts, cancel_token)

        analyses = []
        for text, coherence, entropy in zip(texts, coherences, entropies):
            _check_cancelled(cancel_token, len(analyses), total)
            analyses.append(self._build(text, coherence, entropy))

        if not analyses:
            return ScanResult()

        count = len(analyses)
        lmc = np.array([a.lmc_score for a in analyses], dtype=float)
        ent = np.array([a.entropy for a in analyses], dtype=float)
        coh = np.array([a.coherence for a in analyses], dtype=float)

        result = ScanResult(
            sentences=tuple(analyses),
            average_lmc=float(lmc.sum() / count),
            average_entropy=float(ent.sum() / count),
            average_coherence=float(coh.sum() / count),
        )
        logger.debug(f"Scanned {count} segments for topic {topic!r}")
        return result

    def scan(
        self,
        topic: str,
        text_block: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScanResult:
        """
        Segment *text_block* via the provider, then analyze every sentence.

        Raises:
            ValueError: if topic or text is empty.
            ProviderFailure: if the provider fails; no partial result is returned.
            ScanCancelledError: if *cancel_token* fires before completion.
        """
        if not topic or not topic.strip():
            raise ValueError("topic must be a non-empty string")
        if not text_block or not text_block.strip():
            raise ValueError("text_block must be a non-empty string")
        if self.provider is None:
            raise ValueError("ScanPipeline.scan() requires a coherence provider")

        try:
            segments = self.provider.fetch_segments(topic, text_block)
        except ProviderFailure as e:
            logger.error(f"Coherence provider failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Coherence provider '{self.provider.name}' raised unexpectedly: {e}")
            raise ProviderFailure(self.provider.name, str(e)) from e

        result = self.scan_segments(topic, segments, cancel_token)
        logger.info(
            f"Scan complete: {len(result)} sentences, "
            f"avg_lmc={result.average_lmc:.3f}, "
            f"avg_entropy={result.average_entropy:.3f}, "
            f"avg_coherence={result.average_coherence:.3f}"
        )
        return result
