"""In-memory provider returning fixed segments (offline scans, tests)."""

from pathlib import Path
from typing import Iterable, List, Union

from common.errors import ProviderFailure
from common.models import Segment
from providers.parsing import parse_segments
from scanner.protocols import CoherenceProvider


class StaticCoherenceProvider(CoherenceProvider):
    """Ignores topic and text and returns the segments it was built with."""

    def __init__(self, segments: Iterable[Segment]):
        self._segments = list(segments)

    @property
    def name(self) -> str:
        return "static"

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "StaticCoherenceProvider":
        """Load {"segments": [{text, coherence}, ...]} from *path*."""
        try:
            payload = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ProviderFailure("static", f"cannot read {path}: {e}") from e
        return cls(parse_segments(payload, "static"))

    def fetch_segments(self, topic: str, text_block: str) -> List[Segment]:
        return list(self._segments)
