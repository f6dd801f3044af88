"""Prompt construction and response parsing shared by the LLM backends."""

import json
import math
from typing import Any, List, Union

from common.errors import ProviderFailure
from common.models import Segment

# Segments shorter than this are fragments, not sentences
MIN_SEGMENT_CHARS = 10

PROMPT_TEMPLATE = """You are a semantic analysis engine.
Context Topic: "{topic}"

Analyze the following text block. Split it into individual sentences (ignore very short segments < {min_chars} chars).
For each sentence, calculate a "coherence" score between 0.0 and 1.0, representing how semantically relevant
and consistent the sentence is regarding the Context Topic.

1.0 = Perfectly on topic.
0.0 = Completely off topic or nonsense.

Respond with JSON only, in the form:
{{"segments": [{{"text": "<sentence>", "coherence": <number>}}]}}

Text Block:
"{text}"
"""


def build_prompt(topic: str, text_block: str) -> str:
    return PROMPT_TEMPLATE.format(topic=topic, text=text_block, min_chars=MIN_SEGMENT_CHARS)


def parse_segments(payload: Union[str, bytes, dict], backend: str) -> List[Segment]:
    """
    Validate a provider payload of the form {"segments": [{text, coherence}, ...]}.

    A missing "segments" key yields an empty list. Fragments shorter than
    MIN_SEGMENT_CHARS are dropped. Coherence is returned unclamped.

    Raises:
        ProviderFailure: if the payload is not JSON or does not match the shape.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ProviderFailure(backend, f"response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ProviderFailure(backend, f"expected a JSON object, got {type(payload).__name__}")

    items = payload.get("segments")
    if items is None:
        return []
    if not isinstance(items, list):
        raise ProviderFailure(backend, "'segments' must be a list")

    segments = []
    for i, item in enumerate(items):
        segments.append(_parse_item(item, i, backend))

    return [s for s in segments if len(s.text.strip()) >= MIN_SEGMENT_CHARS]


def _parse_item(item: Any, index: int, backend: str) -> Segment:
    if not isinstance(item, dict):
        raise ProviderFailure(backend, f"segment {index} is not an object")

    text = item.get("text")
    if not isinstance(text, str):
        raise ProviderFailure(backend, f"segment {index} has no string 'text'")

    coherence = item.get("coherence")
    if isinstance(coherence, bool) or not isinstance(coherence, (int, float)):
        raise ProviderFailure(backend, f"segment {index} has no numeric 'coherence'")
    if not math.isfinite(coherence):
        raise ProviderFailure(backend, f"segment {index} has non-finite coherence {coherence!r}")

    return Segment(text=text, coherence=float(coherence))
