"""
Experiment orchestration.

Mean mode averages each competitor's rating at every round index over
independent iterations. Variance mode repeats single-iteration mean runs and
measures how much a settled rating still wanders over the tail of the run.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from elosim.experiment.config import ExperimentConfig, ExperimentType
from elosim.experiment.display import format_experiment_header, format_mean_summary, format_variance_summary
from elosim.experiment.output import write_mean_output, write_variance_output
from elosim.tournament.runner import TournamentRunner


class RatingSeries:
    """
    Running sum of ratings per competitor per round index.

    Every iteration adds its rating snapshot after round t to column t;
    the mean is the sum divided by the number of iterations.
    """

    def __init__(self, num_competitors: int, num_rounds: int):
        self.sums = np.zeros((num_competitors, num_rounds), dtype=np.float64)
        self.iterations = 0

    def add(self, round_idx: int, ratings: np.ndarray):
        self.sums[:, round_idx] += ratings

    def end_iteration(self):
        self.iterations += 1

    def mean(self) -> np.ndarray:
        """Iteration-averaged ratings, shape (num_competitors, num_rounds)."""
        if self.iterations == 0:
            raise ValueError("No iterations recorded")
        return self.sums / self.iterations


@dataclass
class MeanResult:
    """Outcome of a mean-mode experiment."""
    skills: Tuple[int, ...]
    num_iterations: int
    num_rounds: int
    k_factor: float
    initial_rating: float
    ratings: np.ndarray     # Averaged ratings, shape (N, num_rounds)

    def final_ratings(self) -> np.ndarray:
        """Averaged rating of each competitor after the last round."""
        return self.ratings[:, -1]


@dataclass
class VarianceResult:
    """Outcome of a variance-mode experiment."""
    skills: Tuple[int, ...]
    num_iterations: int
    num_rounds: int
    k_factor: float
    settle_offsets: Tuple[int, ...]
    means: np.ndarray       # Tail mean per repetition, shape (num_iterations, N)
    stddevs: np.ndarray     # Tail standard deviation per repetition, shape (num_iterations, N)


ExperimentResult = Union[MeanResult, VarianceResult]


def _iterations(count: int, show_progress: bool, desc: str):
    if show_progress:
        return tqdm(range(count), desc=desc)
    return range(count)


def accumulate_rating_series(
    runner: TournamentRunner,
    num_iterations: int,
    num_rounds: int,
    initial_rating: float,
    show_progress: bool = False
) -> RatingSeries:
    """
    Run num_iterations independent repetitions of num_rounds round-robin passes.

    Ratings are reset to initial_rating at the start of every iteration.
    """
    series = RatingSeries(runner.num_competitors, num_rounds)

    for _ in _iterations(num_iterations, show_progress, "iterations"):
        ratings = runner.new_ratings(initial_rating)
        for t in range(num_rounds):
            runner.play(ratings)
            series.add(t, ratings)
        series.end_iteration()

    return series


def tail_statistics(series: np.ndarray, offset: int) -> Tuple[float, float]:
    """
    Mean and population standard deviation of series[offset:].

    Raises:
        ValueError: If the tail window is empty
    """
    tail = series[offset:]
    if len(tail) == 0:
        raise ValueError(f"Empty tail window at offset {offset} for {len(series)} rounds")
    mean = float(np.mean(tail))
    stddev = float(np.sqrt(np.mean((tail - mean) ** 2)))
    return mean, stddev


def run_mean_experiment(
    config: ExperimentConfig,
    verbose: bool = False,
    show_progress: bool = False
) -> MeanResult:
    """
    Average every competitor's rating per round over independent iterations.

    Args:
        config: Experiment configuration
        verbose: Print the initial rating and a final summary
        show_progress: Show a progress bar over iterations

    Returns:
        MeanResult with the averaged rating series
    """
    runner = TournamentRunner(config.skills, config.outcome, k_factor=config.k_factor)
    initial_rating = config.starting_rating

    if verbose:
        print(f"q_av: {initial_rating}", file=sys.stderr)

    series = accumulate_rating_series(
        runner,
        config.num_iterations,
        config.num_rounds,
        initial_rating,
        show_progress=show_progress
    )

    result = MeanResult(
        skills=config.skills,
        num_iterations=config.num_iterations,
        num_rounds=config.num_rounds,
        k_factor=config.k_factor,
        initial_rating=initial_rating,
        ratings=series.mean()
    )

    if verbose:
        print(format_mean_summary(result))

    return result


def run_variance_experiment(
    config: ExperimentConfig,
    verbose: bool = False,
    show_progress: bool = False
) -> VarianceResult:
    """
    Measure the spread of settled ratings over repeated single-iteration runs.

    For every repetition and every competitor a fresh single-iteration mean
    run is played; the competitor's ratings from its settle offset to the
    last round give one mean and one standard deviation.

    Args:
        config: Experiment configuration; num_iterations is the repetition count
        verbose: Print a final summary
        show_progress: Show a progress bar over repetitions

    Returns:
        VarianceResult with per-repetition tail means and standard deviations

    Raises:
        ConfigurationError: If no valid settle offsets are available
    """
    offsets = config.resolve_settle_offsets()
    runner = TournamentRunner(config.skills, config.outcome, k_factor=config.k_factor)
    initial_rating = config.starting_rating
    n = runner.num_competitors

    means = np.zeros((config.num_iterations, n), dtype=np.float64)
    stddevs = np.zeros((config.num_iterations, n), dtype=np.float64)

    for rep in _iterations(config.num_iterations, show_progress, "repetitions"):
        for p in range(n):
            series = accumulate_rating_series(runner, 1, config.num_rounds, initial_rating)
            means[rep, p], stddevs[rep, p] = tail_statistics(series.mean()[p], offsets[p])

    result = VarianceResult(
        skills=config.skills,
        num_iterations=config.num_iterations,
        num_rounds=config.num_rounds,
        k_factor=config.k_factor,
        settle_offsets=offsets,
        means=means,
        stddevs=stddevs
    )

    if verbose:
        print(format_variance_summary(result))

    return result


def run_experiment(
    config: ExperimentConfig,
    verbose: bool = False,
    show_progress: bool = False
) -> Tuple[ExperimentResult, Optional[Path]]:
    """
    Run the experiment described by config and write its output file if requested.

    Returns:
        Tuple of (result, output path or None)
    """
    if verbose:
        print(format_experiment_header(config))

    output_dir = Path(config.output_dir)
    if config.experiment_type == ExperimentType.MEAN:
        result = run_mean_experiment(config, verbose=verbose, show_progress=show_progress)
        path = write_mean_output(result, output_dir) if config.produce_output else None
    else:
        result = run_variance_experiment(config, verbose=verbose, show_progress=show_progress)
        path = write_variance_output(result, output_dir) if config.produce_output else None

    if verbose and path is not None:
        print(f"\nWrote {path}")

    return result, path
