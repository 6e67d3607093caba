"""
Elo rating update rule.

Implements the standard Elo rating system for win/loss results:
- Expected score: E = 1 / (1 + 10^((R_opp - R_self) / 400))
- Rating update: R_new = R_old + K * (S - E)

Draws are not modeled, so the actual score is always 1.0 or 0.0.
"""

import math
from typing import Tuple


def expected_score(rating_a: float, rating_b: float) -> float:
    """
    Calculate expected score for player A against player B.

    Args:
        rating_a: Rating of player A
        rating_b: Rating of player B

    Returns:
        Expected score between 0 and 1
    """
    return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))


def update_ratings(
    rating_a: float,
    rating_b: float,
    a_wins: bool,
    k_factor: float
) -> Tuple[float, float]:
    """
    Apply one match result to both ratings.

    Both expected scores are computed from the logistic formula directly
    rather than as 1 - E_a.

    Args:
        rating_a: Current rating of player A
        rating_b: Current rating of player B
        a_wins: True if A won the match
        k_factor: Gain applied to the score difference

    Returns:
        Tuple of (new_rating_a, new_rating_b)

    Raises:
        ValueError: If any input is not finite
    """
    if not (math.isfinite(rating_a) and math.isfinite(rating_b) and math.isfinite(k_factor)):
        raise ValueError(
            f"Non-finite Elo input: rating_a={rating_a}, rating_b={rating_b}, k={k_factor}"
        )

    expected_a = expected_score(rating_a, rating_b)
    expected_b = expected_score(rating_b, rating_a)

    if a_wins:
        score_a, score_b = 1.0, 0.0
    else:
        score_a, score_b = 0.0, 1.0

    return (
        rating_a + k_factor * (score_a - expected_a),
        rating_b + k_factor * (score_b - expected_b),
    )


class EloCalculator:
    """
    Elo rating calculator bound to a fixed K-factor.
    """

    def __init__(self, k_factor: float = 14.0):
        """
        Initialize the Elo calculator.

        Args:
            k_factor: The K-factor determines rating volatility (default: 14)
        """
        if not math.isfinite(k_factor):
            raise ValueError(f"K-factor must be finite, got {k_factor}")
        self.k_factor = k_factor

    def expected_score(self, rating_a: float, rating_b: float) -> float:
        return expected_score(rating_a, rating_b)

    def update(self, rating_a: float, rating_b: float, a_wins: bool) -> Tuple[float, float]:
        """Return the updated (rating_a, rating_b) after one match."""
        return update_ratings(rating_a, rating_b, a_wins, self.k_factor)
