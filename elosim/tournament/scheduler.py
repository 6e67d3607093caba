"""
Round-robin tournament scheduling.

Generates the round-by-round pairing plan with the circle method: one
competitor stays fixed while the others rotate around it. Odd fields are
padded with a bye slot whose pairings are dropped.
"""

from dataclasses import dataclass
from typing import List

from elosim.exceptions import ConfigurationError


# Sentinel opponent for odd competitor counts
BYE = -1


@dataclass(frozen=True)
class Pairing:
    """A single scheduled match between two competitors."""
    round: int
    player_a: int
    player_b: int

    @property
    def pair(self) -> tuple:
        """Unordered pair key, smallest index first."""
        return (min(self.player_a, self.player_b), max(self.player_a, self.player_b))


def _padded_size(n: int) -> int:
    return n + 1 if n % 2 else n


def generate_round_robin_schedule(n: int) -> List[List[Pairing]]:
    """
    Generate the full pairing sequence for a round-robin over n competitors.

    For round r with m = n' - 1 rotating slots, the fixed competitor 0 meets
    rotating[r % m], then for k = 1 .. n'/2 - 1 rotating[(r + k) % m] meets
    rotating[(r + m - k) % m]. Pairings are emitted in exactly that order.

    Args:
        n: Number of competitors (indices 0 .. n-1)

    Returns:
        One list of Pairing per round. Even n gives n-1 rounds, odd n gives
        n rounds in which one competitor sits out.

    Raises:
        ConfigurationError: If n is not positive
    """
    if n <= 0:
        raise ConfigurationError(f"Competitor count must be positive, got {n}")

    size = _padded_size(n)
    fixed = 0
    rotating = list(range(1, n))
    if size != n:
        rotating.append(BYE)

    slots = len(rotating)
    half = size // 2

    schedule = []
    for round_idx in range(size - 1):
        pairings = []

        p1 = rotating[round_idx % slots]
        if p1 != BYE:
            pairings.append(Pairing(round_idx, p1, fixed))

        for offset in range(1, half):
            p1 = rotating[(round_idx + offset) % slots]
            p2 = rotating[(round_idx + slots - offset) % slots]
            if p1 != BYE and p2 != BYE:
                pairings.append(Pairing(round_idx, p1, p2))

        schedule.append(pairings)

    return schedule


def num_rounds(n: int) -> int:
    """Number of rounds in one full cycle for n competitors."""
    return _padded_size(n) - 1


def matches_per_round(n: int) -> int:
    """Number of matches played in every round."""
    return n // 2
