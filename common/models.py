"""
Domain model dataclasses for the LMC scanner.

Each model provides:
- to_dict(): returns a JSON-serializable dict with snake_case keys
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Tuple


class DiagnosticType(Enum):
    """Closed set of sentence diagnostics, in display order."""

    OPTIMAL = "OPTIMAL"
    DROPOUT = "DROPOUT"          # topic relevance too low
    STEREOTYPE = "STEREOTYPE"    # repetitive / boilerplate
    NOISE = "NOISE"              # disordered, poorly compressible
    NEUTRAL = "NEUTRAL"

    @property
    def label(self) -> str:
        """Display label used by the original scanner UI."""
        return _LABELS[self]


_LABELS = {
    DiagnosticType.OPTIMAL: "OPTIMAL",
    DiagnosticType.DROPOUT: "DÉCROCHAGE",
    DiagnosticType.STEREOTYPE: "STÉRÉOTYPE",
    DiagnosticType.NOISE: "BRUIT",
    DiagnosticType.NEUTRAL: "NEUTRE",
}


@dataclass(frozen=True)
class Segment:
    """A sentence and its raw coherence as returned by a provider."""
    text: str
    coherence: float

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'coherence': self.coherence}


@dataclass(frozen=True)
class SentenceAnalysis:
    """Scored and classified sentence. Built once per input by the scan pipeline."""
    id: str
    text: str
    entropy: float
    coherence: float
    lmc_score: float
    diagnostic: DiagnosticType

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'text': self.text,
            'entropy': self.entropy,
            'coherence': self.coherence,
            'lmc_score': self.lmc_score,
            'diagnostic': self.diagnostic.value,
        }


@dataclass(frozen=True)
class ScanResult:
    """Ordered sentence analyses plus averages over the whole scan."""
    sentences: Tuple[SentenceAnalysis, ...] = field(default_factory=tuple)
    average_lmc: float = 0.0
    average_entropy: float = 0.0
    average_coherence: float = 0.0

    def __len__(self) -> int:
        return len(self.sentences)

    def diagnostic_counts(self) -> Dict[DiagnosticType, int]:
        """Number of sentences per diagnostic; every category is present."""
        counts = {d: 0 for d in DiagnosticType}
        for sentence in self.sentences:
            counts[sentence.diagnostic] += 1
        return counts

    def series(self) -> List[Dict[str, Any]]:
        """Chart rows keyed by 1-based input position."""
        return [
            {
                'index': i,
                'lmc_score': s.lmc_score,
                'entropy': s.entropy,
                'coherence': s.coherence,
                'diagnostic': s.diagnostic.value,
            }
            for i, s in enumerate(self.sentences, start=1)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sentences': [s.to_dict() for s in self.sentences],
            'average_lmc': self.average_lmc,
            'average_entropy': self.average_entropy,
            'average_coherence': self.average_coherence,
            'diagnostic_counts': {
                d.value: n for d, n in self.diagnostic_counts().items()
            },
        }
