"""Coherence/segmentation providers."""

from typing import Optional

from common.config import config
from providers.parsing import MIN_SEGMENT_CHARS, build_prompt, parse_segments
from providers.openai_backend import OpenAICoherenceProvider
from providers.ollama import OllamaCoherenceProvider
from providers.static import StaticCoherenceProvider
from scanner.protocols import CoherenceProvider

BACKENDS = {
    "openai": OpenAICoherenceProvider,
    "ollama": OllamaCoherenceProvider,
}


def get_provider(backend: Optional[str] = None) -> CoherenceProvider:
    """Build the network provider named by *backend* (default: provider.backend)."""
    backend = backend or config.get("provider.backend")
    try:
        provider_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown provider backend {backend!r}; expected one of {sorted(BACKENDS)}"
        ) from None
    return provider_cls()


__all__ = [
    "MIN_SEGMENT_CHARS",
    "build_prompt",
    "parse_segments",
    "OpenAICoherenceProvider",
    "OllamaCoherenceProvider",
    "StaticCoherenceProvider",
    "BACKENDS",
    "get_provider",
]
