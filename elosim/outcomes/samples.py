"""
Pre-recorded score samples.

Each skill tier has one text file holding one recorded score per line.
Files are loaded into memory on first use and kept for the lifetime of the
cache, so experiments can draw thousands of games without touching the
remote generator.
"""

import threading
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

import numpy as np

from elosim.exceptions import SampleFileError
from elosim.outcomes.base import OutcomeSource


DEFAULT_PATTERN = "samples-d{tier}.dat"
TIER_WIDTH = 20

PathLike = Union[str, Path]


def default_tier(skill: int) -> int:
    """Map a skill value to its sample tier (integer division by 20)."""
    return skill // TIER_WIDTH


def read_samples(path: PathLike) -> np.ndarray:
    """
    Load a sample file into an integer array.

    Blank lines are skipped; anything else must be a decimal integer.

    Args:
        path: Sample file path

    Returns:
        1-D int64 array of scores

    Raises:
        SampleFileError: If the file is missing, unreadable, malformed or empty
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SampleFileError(f"Cannot read sample file {path}: {e}") from e

    scores = []
    for line_no, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            scores.append(int(line))
        except ValueError:
            raise SampleFileError(
                f"{path}:{line_no}: expected an integer score, got {line!r}"
            ) from None

    if not scores:
        raise SampleFileError(f"Sample file {path} contains no scores")

    return np.array(scores, dtype=np.int64)


def write_samples(path: PathLike, scores: Iterable[int], append: bool = True) -> int:
    """
    Write scores to a sample file, one per line.

    Args:
        path: Destination file
        scores: Scores to write
        append: Append to an existing file instead of replacing it

    Returns:
        Number of scores written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, "a" if append else "w", encoding="utf-8") as f:
        for score in scores:
            f.write(f"{int(score)}\n")
            count += 1
    return count


def build_sample_file(
    client,
    tier: int,
    num_samples: int = 10000,
    sample_dir: PathLike = ".",
    pattern: str = DEFAULT_PATTERN,
    progress: Optional[Callable[[int], None]] = None
) -> Path:
    """
    Record scores from the remote generator into the sample file for a tier.

    The generator is addressed with the tier value, and the file is named
    after it, so SampleCache finds it for every skill mapping to that tier.

    Args:
        client: Object with play_single_game(skill) -> int
        tier: Tier value sent to the generator
        num_samples: Number of games to record (default: 10000)
        sample_dir: Directory holding sample files
        pattern: File name pattern with a {tier} placeholder
        progress: Optional callback invoked with the number of games recorded so far

    Returns:
        Path of the sample file
    """
    path = Path(sample_dir) / pattern.format(tier=tier)

    def scores():
        for i in range(num_samples):
            yield client.play_single_game(tier)
            if progress is not None:
                progress(i + 1)

    write_samples(path, scores(), append=True)
    return path


class SampleCache:
    """
    Populate-once, read-many cache of score pools keyed by skill tier.

    Loading goes through a single lock so concurrent first references to the
    same tier never read the file twice. Pools are read-only once loaded.
    """

    def __init__(
        self,
        sample_dir: PathLike = ".",
        pattern: str = DEFAULT_PATTERN,
        tier_of: Callable[[int], int] = default_tier
    ):
        """
        Initialize the cache.

        Args:
            sample_dir: Directory holding sample files
            pattern: File name pattern with a {tier} placeholder
            tier_of: Maps a skill value to its tier
        """
        self.sample_dir = Path(sample_dir)
        self.pattern = pattern
        self.tier_of = tier_of
        self._pools: Dict[int, np.ndarray] = {}
        self._lock = threading.Lock()

    def path_for(self, skill: int) -> Path:
        return self.sample_dir / self.pattern.format(tier=self.tier_of(skill))

    def pool(self, skill: int) -> np.ndarray:
        """Return the score pool for a skill, loading its tier file on first use."""
        tier = self.tier_of(skill)
        pool = self._pools.get(tier)
        if pool is not None:
            return pool

        with self._lock:
            pool = self._pools.get(tier)
            if pool is None:
                pool = read_samples(self.path_for(skill))
                pool.setflags(write=False)
                self._pools[tier] = pool
        return pool

    def draw(self, skill: int, rng: np.random.Generator) -> int:
        """Draw one score uniformly at random, with replacement."""
        pool = self.pool(skill)
        return int(pool[rng.integers(len(pool))])

    def loaded_tiers(self) -> List[int]:
        """Tiers loaded so far, sorted."""
        return sorted(self._pools)

    def preload(self, skills: Iterable[int]):
        """Load every tier needed by skills up front."""
        for skill in skills:
            self.pool(skill)


class CachedSampleOutcome(OutcomeSource):
    """
    Play two recorded games and compare their scores.

    Each side draws one score from its tier's pool. A wins only with a
    strictly higher score, so equal scores count as a loss for A.
    """

    def __init__(self, cache: SampleCache, rng: Optional[np.random.Generator] = None):
        self.cache = cache
        self.rng = rng if rng is not None else np.random.default_rng()

    def decide(self, skill_a: int, skill_b: int) -> bool:
        score_a = self.cache.draw(skill_a, self.rng)
        score_b = self.cache.draw(skill_b, self.rng)
        return score_a > score_b
