"""
Experiment configuration.

An ExperimentConfig is immutable and validated on construction, so an
invalid setup fails before any match is played.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from elosim.exceptions import ConfigurationError
from elosim.outcomes.base import OutcomeSource


class ExperimentType(Enum):
    MEAN = "mean"
    VARIANCE = "variance"


# Round at which each competitor's rating series is considered settled, by
# K-factor bucket. Tuned by eye for the six-player 1000..2000 field with
# sampled game scores; other fields must pass settle_offsets explicitly.
SETTLE_OFFSETS: Dict[int, Tuple[int, ...]] = {
    20: (95, 68, 28, 21, 67, 100),
    40: (79, 56, 25, 20, 56, 82),
}

# K below this uses the 20 bucket, anything else the 40 bucket
SETTLE_BUCKET_THRESHOLD = 25


def select_settle_offsets(k_factor: float, num_competitors: int) -> Tuple[int, ...]:
    """
    Look up the settle offsets for a K-factor.

    Args:
        k_factor: Elo K-factor of the experiment
        num_competitors: Field size the offsets must cover

    Returns:
        One offset per competitor

    Raises:
        ConfigurationError: If the table row does not match the field size
    """
    bucket = 20 if k_factor < SETTLE_BUCKET_THRESHOLD else 40
    offsets = SETTLE_OFFSETS[bucket]
    if len(offsets) != num_competitors:
        raise ConfigurationError(
            f"Settle offset table for K bucket {bucket} covers {len(offsets)} "
            f"competitors, experiment has {num_competitors}; pass settle_offsets explicitly"
        )
    return offsets


@dataclass(frozen=True)
class ExperimentConfig:
    """Configuration for an experiment run."""
    skills: Tuple[int, ...]
    outcome: OutcomeSource
    experiment_type: ExperimentType = ExperimentType.MEAN
    num_iterations: int = 1
    num_rounds: int = 1000
    k_factor: float = 14.0
    initial_rating: Optional[float] = None
    settle_offsets: Optional[Tuple[int, ...]] = None
    produce_output: bool = False
    output_dir: str = "."

    def __post_init__(self):
        # Store tuples whatever sequence type was passed in
        object.__setattr__(self, 'skills', tuple(int(s) for s in self.skills))
        if self.settle_offsets is not None:
            object.__setattr__(self, 'settle_offsets', tuple(int(o) for o in self.settle_offsets))
        self._validate()

    def _validate(self):
        if len(self.skills) < 2:
            raise ConfigurationError(
                f"Need at least 2 competitor skills, got {len(self.skills)}"
            )
        if self.num_iterations < 1:
            raise ConfigurationError(f"num_iterations must be >= 1, got {self.num_iterations}")
        if self.num_rounds < 1:
            raise ConfigurationError(f"num_rounds must be >= 1, got {self.num_rounds}")
        if not math.isfinite(self.k_factor) or self.k_factor <= 0:
            raise ConfigurationError(f"k_factor must be a positive finite number, got {self.k_factor}")
        if self.initial_rating is not None and not math.isfinite(self.initial_rating):
            raise ConfigurationError(f"initial_rating must be finite, got {self.initial_rating}")

        if self.settle_offsets is not None:
            self._validate_offsets(self.settle_offsets)

    def _validate_offsets(self, offsets: Sequence[int]):
        if len(offsets) != self.num_competitors:
            raise ConfigurationError(
                f"Expected {self.num_competitors} settle offsets, got {len(offsets)}"
            )
        for i, offset in enumerate(offsets):
            if not 0 <= offset < self.num_rounds:
                raise ConfigurationError(
                    f"Settle offset {offset} for competitor {i} leaves no rounds "
                    f"in [offset, {self.num_rounds})"
                )

    @property
    def num_competitors(self) -> int:
        return len(self.skills)

    @property
    def starting_rating(self) -> float:
        """Initial rating: the configured value, or the truncated mean skill."""
        if self.initial_rating is not None:
            return float(self.initial_rating)
        return float(int(sum(self.skills) / len(self.skills)))

    def resolve_settle_offsets(self) -> Tuple[int, ...]:
        """Explicit offsets if given, otherwise the K-factor table row (validated)."""
        if self.settle_offsets is not None:
            return self.settle_offsets
        offsets = select_settle_offsets(self.k_factor, self.num_competitors)
        self._validate_offsets(offsets)
        return offsets
