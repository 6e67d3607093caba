"""
Head-to-head win-chance estimation.

Plays many isolated matches between two competitors, tracking both the raw
win rate and the Elo ratings a two-player pool would converge to. The
rating gap can then be compared against the gap implied by the win rate.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from elosim.exceptions import ConfigurationError
from elosim.outcomes.base import OutcomeSource
from elosim.tournament.elo import EloCalculator


@dataclass
class ChanceResult:
    """Head-to-head statistics for one pair of competitors."""
    index_a: int
    index_b: int
    num_games: int
    wins_a: int
    final_rating_a: float
    final_rating_b: float
    score_stddev: float                 # Population std dev of A's 0/1 scores
    trace: Optional[np.ndarray] = None  # Rating pairs after each traced game, shape (m, 2)

    @property
    def win_chance(self) -> float:
        return self.wins_a / self.num_games


def _pairs(n: int, adjacent_only: bool) -> Iterator[Tuple[int, int]]:
    for i in range(n - 1):
        stop = i + 2 if adjacent_only else n
        for j in range(i + 1, stop):
            yield i, j


def play_head_to_head(
    skill_a: int,
    skill_b: int,
    outcome: OutcomeSource,
    elo: EloCalculator,
    num_games: int,
    initial_rating: float = 1000.0,
    trace_from: Optional[int] = None
) -> Tuple[np.ndarray, float, float, Optional[np.ndarray]]:
    """
    Play num_games matches between two competitors.

    Returns:
        Tuple of (A's scores as a 0/1 array, final rating A, final rating B,
        trace of rating pairs after every game with index > trace_from or None)
    """
    rating_a = rating_b = float(initial_rating)
    scores = np.zeros(num_games, dtype=np.float64)
    trace = []

    for game in range(num_games):
        a_wins = outcome.decide(skill_a, skill_b)
        rating_a, rating_b = elo.update(rating_a, rating_b, a_wins)
        scores[game] = 1.0 if a_wins else 0.0
        if trace_from is not None and game > trace_from:
            trace.append((rating_a, rating_b))

    trace_array = None
    if trace_from is not None:
        trace_array = np.array(trace, dtype=np.float64).reshape(-1, 2)

    return scores, rating_a, rating_b, trace_array


def calculate_chances(
    skills: Sequence[int],
    outcome: OutcomeSource,
    k_factor: float,
    num_games: int = 10000,
    adjacent_only: bool = True,
    initial_rating: float = 1000.0,
    trace_from: Optional[int] = None
) -> List[ChanceResult]:
    """
    Estimate head-to-head win chances between competitors.

    Args:
        skills: Competitor skills
        outcome: Outcome source deciding each game
        k_factor: Elo K-factor for the two-player rating track
        num_games: Games per pair (default: 10000)
        adjacent_only: Only compare each competitor with the next one (default: True)
        initial_rating: Starting rating for both sides (default: 1000)
        trace_from: Record ratings after every game with index above this

    Returns:
        One ChanceResult per compared pair, in (i, j) order

    Raises:
        ConfigurationError: If fewer than 2 skills, num_games is not positive
            or k_factor is not a positive finite number
    """
    if len(skills) < 2:
        raise ConfigurationError(f"Need at least 2 competitor skills, got {len(skills)}")
    if num_games <= 0:
        raise ConfigurationError(f"num_games must be positive, got {num_games}")
    if not math.isfinite(k_factor) or k_factor <= 0:
        raise ConfigurationError(f"k_factor must be a positive finite number, got {k_factor}")

    elo = EloCalculator(k_factor=k_factor)
    results = []

    for i, j in _pairs(len(skills), adjacent_only):
        scores, rating_a, rating_b, trace = play_head_to_head(
            skills[i], skills[j], outcome, elo, num_games,
            initial_rating=initial_rating,
            trace_from=trace_from
        )
        results.append(ChanceResult(
            index_a=i,
            index_b=j,
            num_games=num_games,
            wins_a=int(scores.sum()),
            final_rating_a=rating_a,
            final_rating_b=rating_b,
            score_stddev=float(np.std(scores)),
            trace=trace
        ))

    return results
