"""Tests for scanner/entropy.py — compression and diversity estimators."""

import logging
import zlib

import pytest

from scanner.entropy import (
    CharacterDiversityEstimator,
    CompressionEntropyEstimator,
    estimate_entropy,
    get_estimator,
)

REPETITIVE = "the cat sat on the mat. " * 20
VARIED = (
    "Quantum annealers exploit tunnelling to escape local minima, whereas "
    "classical simulated annealing relies on thermal fluctuations. Benchmarks "
    "published in 2019 compared D-Wave hardware against GPU solvers on "
    "frustrated spin-glass instances with mixed results."
)


# ── CompressionEntropyEstimator ───────────────────────────────

class TestCompressionEntropy:
    def test_empty_is_exactly_zero(self):
        assert estimate_entropy("") == 0.0

    def test_non_empty_is_positive(self):
        for text in ["a", "aaaaaaaaaa", REPETITIVE, VARIED, "日本語のテキスト"]:
            assert estimate_entropy(text) > 0.0

    def test_repetitive_lower_than_varied(self):
        assert estimate_entropy(REPETITIVE) < estimate_entropy(VARIED)

    def test_repetitive_is_low(self):
        assert estimate_entropy(REPETITIVE) < 0.3

    def test_deterministic(self):
        assert estimate_entropy(VARIED) == estimate_entropy(VARIED)

    def test_zlib_container_preserves_ordering(self):
        est = CompressionEntropyEstimator(container="zlib")
        assert est.estimate(REPETITIVE) < est.estimate(VARIED)

    def test_zlib_smaller_overhead_than_gzip(self):
        gz = CompressionEntropyEstimator(container="gzip")
        zl = CompressionEntropyEstimator(container="zlib")
        assert zl.estimate(VARIED) < gz.estimate(VARIED)

    def test_ratio_matches_compressed_length(self):
        est = CompressionEntropyEstimator(container="zlib", level=9)
        raw = VARIED.encode("utf-8")
        expected = len(zlib.compress(raw, 9)) / len(raw)
        assert est.estimate(VARIED) == pytest.approx(expected)

    def test_unknown_container_rejected(self):
        with pytest.raises(ValueError):
            CompressionEntropyEstimator(container="brotli")

    def test_input_not_mutated(self):
        text = "some text to compress, some text to compress"
        copy = str(text)
        estimate_entropy(text)
        assert text == copy


class TestCompressionFallback:
    def test_compressor_error_falls_back_to_diversity(self, monkeypatch, caplog):
        est = CompressionEntropyEstimator()

        def broken(raw):
            raise zlib.error("compressor unavailable")

        monkeypatch.setattr(est, "_compress", broken)

        with caplog.at_level(logging.WARNING):
            value = est.estimate("aabb")

        assert value == pytest.approx(0.5)
        assert est.degraded_count == 1
        assert any("falling back" in r.getMessage() for r in caplog.records)

    def test_empty_never_reaches_compressor(self, monkeypatch):
        est = CompressionEntropyEstimator()

        def broken(raw):
            raise OSError("should not be called")

        monkeypatch.setattr(est, "_compress", broken)
        assert est.estimate("") == 0.0
        assert est.degraded_count == 0


# ── CharacterDiversityEstimator ───────────────────────────────

class TestCharacterDiversity:
    def test_empty(self):
        assert CharacterDiversityEstimator().estimate("") == 0.0

    def test_all_same(self):
        assert CharacterDiversityEstimator().estimate("aaaaaaaaaa") == pytest.approx(0.1)

    def test_all_distinct(self):
        assert CharacterDiversityEstimator().estimate("abcd") == pytest.approx(1.0)

    def test_more_repetition_is_lower(self):
        est = CharacterDiversityEstimator()
        assert est.estimate("abababab") < est.estimate("abcdefgh")


# ── get_estimator ─────────────────────────────────────────────

class TestGetEstimator:
    def test_default_is_compression(self):
        est = get_estimator()
        assert est.name == "compression"
        assert est.container == "gzip"

    def test_diversity(self):
        assert get_estimator("diversity").name == "diversity"

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_estimator("shannon")
