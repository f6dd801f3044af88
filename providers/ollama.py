"""Ollama coherence provider (local HTTP API)."""

from typing import List, Optional

import requests

from common.config import config
from common.errors import ProviderFailure
from common.logging.logger import get_logger
from common.models import Segment
from providers.parsing import build_prompt, parse_segments
from scanner.protocols import CoherenceProvider

logger = get_logger("provider.ollama")


class OllamaCoherenceProvider(CoherenceProvider):
    """Segments and scores text with a local Ollama model via /api/generate."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or config.get("provider.ollama_url")).rstrip("/")
        self.model = model or config.get("provider.ollama_model")
        self.timeout = timeout or config.get("provider.timeout_seconds")

    @property
    def name(self) -> str:
        return "ollama"

    def fetch_segments(self, topic: str, text_block: str) -> List[Segment]:
        try:
            response = requests.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": build_prompt(topic, text_block),
                    "format": "json",
                    "stream": False,
                    "options": {
                        "temperature": 0
                    }
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Ollama request failed: {e}")
            raise ProviderFailure(self.name, str(e)) from e

        if response.status_code != 200:
            raise ProviderFailure(
                self.name, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderFailure(self.name, f"response is not valid JSON: {e}") from e

        if not isinstance(body, dict) or not isinstance(body.get("response"), str):
            raise ProviderFailure(self.name, "response body has no 'response' string")

        segments = parse_segments(body["response"], self.name)
        logger.info(f"Ollama ({self.model}) returned {len(segments)} segments")
        return segments
