"""
Tournament runner that plays round-robin passes over a field of competitors.

Ratings are path-dependent, so pairings are played strictly in the order the
scheduler emits them.
"""

from typing import List, Optional, Sequence

import numpy as np

from elosim.exceptions import ConfigurationError
from elosim.outcomes.base import OutcomeSource
from elosim.tournament.elo import EloCalculator
from elosim.tournament.scheduler import Pairing, generate_round_robin_schedule


def run_round_robin(
    ratings: np.ndarray,
    skills: Sequence[int],
    outcome: OutcomeSource,
    elo: EloCalculator,
    schedule: Optional[List[List[Pairing]]] = None
) -> int:
    """
    Play one full round-robin pass, updating ratings in place.

    Args:
        ratings: Current ratings, indexed by competitor (mutated)
        skills: True skill per competitor, passed to the outcome source
        outcome: Decides each match from the two skills
        elo: Rating update rule
        schedule: Precomputed schedule for len(skills) competitors
            (generated if None)

    Returns:
        Number of matches played
    """
    if schedule is None:
        schedule = generate_round_robin_schedule(len(skills))

    played = 0
    for round_pairings in schedule:
        for pairing in round_pairings:
            a, b = pairing.player_a, pairing.player_b
            a_wins = outcome.decide(skills[a], skills[b])
            ratings[a], ratings[b] = elo.update(float(ratings[a]), float(ratings[b]), a_wins)
            played += 1

    return played


class TournamentRunner:
    """
    Plays repeated round-robin passes over a fixed field.

    The schedule depends only on the competitor count, so it is generated
    once and reused for every pass.

    Usage:
        runner = TournamentRunner(skills, outcome, k_factor=20)
        ratings = runner.new_ratings(1500)
        runner.play(ratings)
    """

    def __init__(self, skills: Sequence[int], outcome: OutcomeSource, k_factor: float = 14.0):
        """
        Initialize the tournament runner.

        Args:
            skills: True skill per competitor
            outcome: Outcome source deciding matches
            k_factor: Elo K-factor

        Raises:
            ConfigurationError: If skills is empty
        """
        if not skills:
            raise ConfigurationError("Need at least one competitor skill")

        self.skills = tuple(int(s) for s in skills)
        self.outcome = outcome
        self.elo = EloCalculator(k_factor=k_factor)
        self.schedule = generate_round_robin_schedule(len(self.skills))

    @property
    def num_competitors(self) -> int:
        return len(self.skills)

    def new_ratings(self, initial_rating: float) -> np.ndarray:
        """Fresh ratings array with every competitor at initial_rating."""
        return np.full(self.num_competitors, float(initial_rating), dtype=np.float64)

    def play(self, ratings: np.ndarray) -> int:
        """Play one round-robin pass over ratings; returns matches played."""
        return run_round_robin(
            ratings,
            self.skills,
            self.outcome,
            self.elo,
            schedule=self.schedule
        )
