"""Plain-text rendering of scan results for terminal output."""

from typing import List

from common.models import ScanResult

TEXT_WIDTH = 60


def _truncate(text: str, width: int = TEXT_WIDTH) -> str:
    text = " ".join(text.split())
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def _diagnostic_name(diagnostic, labels: bool) -> str:
    return diagnostic.label if labels else diagnostic.value


def render_table(result: ScanResult, labels: bool = False) -> str:
    """One row per sentence, in input order."""
    header = f"{'#':>3}  {'DIAGNOSTIC':<11} {'LMC':>8} {'COH':>6} {'ENT':>6}  TEXT"
    lines: List[str] = [header, "-" * len(header)]
    for i, s in enumerate(result.sentences, start=1):
        lines.append(
            f"{i:>3}  {_diagnostic_name(s.diagnostic, labels):<11} "
            f"{s.lmc_score:>8.3f} {s.coherence:>6.2f} {s.entropy:>6.3f}  "
            f"{_truncate(s.text)}"
        )
    if not result.sentences:
        lines.append("(no sentences)")
    return "\n".join(lines)


def render_summary(result: ScanResult, labels: bool = False) -> str:
    """Averages and per-diagnostic counts."""
    lines = [
        f"Average LMC:       {result.average_lmc:.2f}",
        f"Average Coherence: {result.average_coherence:.2f}",
        f"Average Entropy:   {result.average_entropy:.2f}",
    ]
    for diagnostic, count in result.diagnostic_counts().items():
        lines.append(f"  {_diagnostic_name(diagnostic, labels):<11} {count}")
    return "\n".join(lines)
