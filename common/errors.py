"""
Custom exception hierarchy for the LMC scanner.

Arithmetic in the scoring core is total (clamped coherence, epsilon-guarded
division), so the only failures a scan can raise come from the coherence
provider or from an explicit cancellation.
"""


class ScanError(Exception):
    """Base exception for all scanner errors."""


class ProviderFailure(ScanError):
    """Raised when the coherence/segmentation provider fails or returns unparseable data."""

    user_message = "Failed to analyze text via the coherence provider."

    def __init__(self, backend: str, detail: str):
        self.backend = backend
        self.detail = detail
        super().__init__(f"Provider '{backend}' failed: {detail}")


class ScanCancelledError(ScanError):
    """Raised when a scan is cancelled before all sentences were processed."""

    def __init__(self, processed: int, total: int):
        self.processed = processed
        self.total = total
        super().__init__(f"Scan cancelled after {processed}/{total} sentences")
