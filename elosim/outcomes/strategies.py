"""
Closed-form outcome sources.

These decide matches from the raw skill values alone and are used to
validate the simulator against known win probabilities.
"""
from typing import Optional

import numpy as np

from elosim.outcomes.base import OutcomeSource


def win_probability(skill_a: float, skill_b: float) -> float:
    """Logistic win chance of A over B, on the same 400-point scale as Elo."""
    return 1.0 / (1.0 + 10.0 ** ((skill_b - skill_a) / 400.0))


class QualityProportionalOutcome(OutcomeSource):
    """
    A wins with the logistic probability implied by the true skill gap.

    With this source, converged Elo ratings should track the skills exactly
    up to a common offset.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def decide(self, skill_a: int, skill_b: int) -> bool:
        return bool(self.rng.random() < win_probability(skill_a, skill_b))


class AbsoluteQualityOutcome(OutcomeSource):
    """The higher skill always wins. Equal skills count as a loss for A."""

    def decide(self, skill_a: int, skill_b: int) -> bool:
        return skill_a > skill_b


class CoinFlipOutcome(OutcomeSource):
    """Skill is ignored: every match is a fair coin toss."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def decide(self, skill_a: int, skill_b: int) -> bool:
        return bool(self.rng.random() < 0.5)
