"""
Tournament module for running round-robin passes with Elo updates.

Provides:
- generate_round_robin_schedule: Circle-method pairing plan
- EloCalculator / update_ratings: Standard Elo rating update
- TournamentRunner / run_round_robin: Plays a schedule against an outcome source
"""

from elosim.tournament.elo import EloCalculator, expected_score, update_ratings
from elosim.tournament.scheduler import (
    BYE,
    Pairing,
    generate_round_robin_schedule,
    num_rounds,
    matches_per_round,
)
from elosim.tournament.runner import TournamentRunner, run_round_robin

__all__ = [
    'EloCalculator',
    'expected_score',
    'update_ratings',
    'BYE',
    'Pairing',
    'generate_round_robin_schedule',
    'num_rounds',
    'matches_per_round',
    'TournamentRunner',
    'run_round_robin',
]
