"""OpenAI chat-completions coherence provider."""

import os
from typing import List, Optional

import openai
from openai import OpenAI

from common.config import config
from common.errors import ProviderFailure
from common.logging.logger import get_logger
from common.models import Segment
from providers.parsing import build_prompt, parse_segments
from scanner.protocols import CoherenceProvider

logger = get_logger("provider.openai")

SYSTEM_PROMPT = "You segment text into sentences and rate topic coherence. Output JSON only."


class OpenAICoherenceProvider(CoherenceProvider):
    """
    Segments and scores text with an OpenAI chat model in JSON mode.

    Args:
        model: Chat model name (default: llm.model).
        api_key: API key (default: OPENAI_API_KEY, then llm.api_key).
        timeout: Request timeout in seconds (default: provider.timeout_seconds).
        client: Pre-built OpenAI client, mainly for tests.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        self.model = model or config.get("llm.model")
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY") or config.get("llm.api_key")
        self.timeout = timeout or config.get("provider.timeout_seconds")
        self._client = client

    @property
    def name(self) -> str:
        return "openai"

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise ProviderFailure(self.name, "no API key (set OPENAI_API_KEY or llm.api_key)")
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def fetch_segments(self, topic: str, text_block: str) -> List[Segment]:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(topic, text_block)},
                ],
                response_format={"type": "json_object"},
                temperature=0,
            )
        except openai.OpenAIError as e:
            logger.warning(f"OpenAI request failed: {e}")
            raise ProviderFailure(self.name, str(e)) from e

        if not response.choices:
            raise ProviderFailure(self.name, "response contained no choices")
        content = response.choices[0].message.content
        if not content:
            raise ProviderFailure(self.name, "response message was empty")

        segments = parse_segments(content, self.name)
        logger.info(f"OpenAI ({self.model}) returned {len(segments)} segments")
        return segments
