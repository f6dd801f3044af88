"""
Entropy estimators.

The primary estimator uses the compression ratio of the UTF-8 bytes as a
Kolmogorov-complexity proxy: repetitive text compresses well (low ratio),
varied or noisy text does not (ratio near or above 1).

Numeric values depend on the compressor container. The gzip container adds
18 bytes of header/trailer, so very short strings score above 1.0. Only the
relative ordering (repetitive < varied) is meaningful; no parity with other
deflate implementations is claimed.

The character-diversity estimator is a degraded approximation used either
when configured explicitly or when the compressor raises.
"""

import gzip
import threading
import zlib
from typing import Optional

from common.config import config
from common.logging.logger import get_logger
from scanner.protocols import EntropyEstimator

logger = get_logger("entropy")

CONTAINERS = ("gzip", "zlib")


class CharacterDiversityEstimator(EntropyEstimator):
    """Distinct characters / total characters. Not comparable to compression ratios."""

    @property
    def name(self) -> str:
        return "diversity"

    def estimate(self, text: str) -> float:
        if not text:
            return 0.0
        return len(set(text)) / len(text)


class CompressionEntropyEstimator(EntropyEstimator):
    """
    Compressed size / raw size over the UTF-8 encoding of the text.

    Args:
        container: 'gzip' (default) or 'zlib'. Both are deflate.
        level: Compression level passed to the compressor (0-9).
        fallback: Estimator used if compression fails.
    """

    def __init__(
        self,
        container: str = "gzip",
        level: int = 9,
        fallback: Optional[EntropyEstimator] = None,
    ):
        if container not in CONTAINERS:
            raise ValueError(f"Unknown compression container: {container!r}")
        self.container = container
        self.level = level
        self.fallback = fallback or CharacterDiversityEstimator()
        self.degraded_count = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "compression"

    def _compress(self, raw: bytes) -> bytes:
        if self.container == "gzip":
            # mtime=0 keeps the header byte-identical between calls
            return gzip.compress(raw, compresslevel=self.level, mtime=0)
        return zlib.compress(raw, self.level)

    def estimate(self, text: str) -> float:
        if not text:
            return 0.0

        raw = text.encode("utf-8")
        try:
            compressed = self._compress(raw)
        except (zlib.error, OSError, ValueError) as e:
            with self._lock:
                self.degraded_count += 1
            logger.warning(
                f"Compression entropy failed ({self.container}): {e}; "
                f"falling back to {self.fallback.name}"
            )
            return self.fallback.estimate(text)

        return len(compressed) / len(raw)


def get_estimator(algorithm: Optional[str] = None) -> EntropyEstimator:
    """Build the configured estimator ('compression' or 'diversity')."""
    algorithm = algorithm or config.get("entropy.algorithm")
    if algorithm == "compression":
        return CompressionEntropyEstimator(
            container=config.get("entropy.container"),
            level=config.get("entropy.compression_level"),
        )
    if algorithm == "diversity":
        logger.warning("Entropy estimator configured for character diversity (degraded mode)")
        return CharacterDiversityEstimator()
    raise ValueError(f"Unknown entropy algorithm: {algorithm!r}")


def estimate_entropy(text: str) -> float:
    """Compression-ratio entropy of *text* with a fresh default gzip estimator."""
    return CompressionEntropyEstimator().estimate(text)
