"""LMC score combination."""

from scanner.protocols import ScoreCombiner

# Keeps the score bounded when entropy is 0 (empty or degenerate text)
EPSILON = 0.0001


class LmcScoreCombiner(ScoreCombiner):
    """score = coherence / (entropy + epsilon)."""

    def __init__(self, epsilon: float = EPSILON):
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.epsilon = epsilon

    def combine(self, coherence: float, entropy: float) -> float:
        return coherence / (entropy + self.epsilon)


def combine(coherence: float, entropy: float) -> float:
    """LMC score with the fixed epsilon."""
    return coherence / (entropy + EPSILON)
