"""
Display formatting for experiment results.

Provides ASCII-formatted summaries for terminal output.
"""

from typing import List, TYPE_CHECKING

import numpy as np

from elosim.tournament.scheduler import matches_per_round, num_rounds

if TYPE_CHECKING:
    from elosim.experiment.chances import ChanceResult
    from elosim.experiment.config import ExperimentConfig
    from elosim.experiment.orchestrator import MeanResult, VarianceResult


def format_experiment_header(config: 'ExperimentConfig') -> str:
    """Format experiment header information."""
    lines = []
    lines.append(f"Experiment: {config.experiment_type.value}")
    lines.append(f"Competitors: {config.num_competitors} (skills {', '.join(str(s) for s in config.skills)})")
    lines.append(f"Outcome source: {type(config.outcome).__name__}")
    lines.append(f"Iterations: {config.num_iterations}")
    n = config.num_competitors
    lines.append(
        f"Rounds: {config.num_rounds} "
        f"({num_rounds(n)} pairing rounds of {matches_per_round(n)} matches per pass)"
    )
    lines.append(f"K-factor: {config.k_factor:g}")
    lines.append("")
    return "\n".join(lines)


def format_mean_summary(result: 'MeanResult') -> str:
    """
    Format the final averaged ratings as an ASCII table.

    The offset column compares each rating's distance from the field's mean
    rating with the skill's distance from the mean skill, which is what a
    well-calibrated Elo run should reproduce.

    Args:
        result: Mean-mode result

    Returns:
        Formatted string for terminal display
    """
    final = result.final_ratings()
    skills = np.array(result.skills, dtype=np.float64)
    offsets = (final - final.mean()) - (skills - skills.mean())

    lines = []
    lines.append("=== FINAL AVERAGED RATINGS ===")
    lines.append("")
    lines.append(f"{'#':<4}{'Skill':<10}{'Elo':<12}{'Offset':<10}")
    lines.append("-" * 36)

    for i, (skill, elo, off) in enumerate(zip(result.skills, final, offsets)):
        lines.append(f"{i:<4}{skill:<10}{elo:<12.1f}{off:<+10.1f}")

    return "\n".join(lines)


def format_variance_summary(result: 'VarianceResult') -> str:
    """Format per-competitor tail spread averaged over repetitions."""
    lines = []
    lines.append("=== SETTLED RATING SPREAD ===")
    lines.append("")
    lines.append(f"{'#':<4}{'Skill':<10}{'Offset':<8}{'Mean':<12}{'Std dev':<10}")
    lines.append("-" * 44)

    mean_of_means = result.means.mean(axis=0)
    mean_of_stddevs = result.stddevs.mean(axis=0)
    for i, skill in enumerate(result.skills):
        lines.append(
            f"{i:<4}{skill:<10}{result.settle_offsets[i]:<8}"
            f"{mean_of_means[i]:<12.1f}{mean_of_stddevs[i]:<10.2f}"
        )

    return "\n".join(lines)


def format_chance_table(results: List['ChanceResult']) -> str:
    """Format head-to-head win chances as an ASCII table."""
    lines = []
    lines.append(f"{'Pair':<8}{'Win%':<9}{'Elo A':<10}{'Elo B':<10}{'Std dev':<8}")
    lines.append("-" * 45)
    for r in results:
        pair = f"{r.index_a}-{r.index_b}"
        lines.append(
            f"{pair:<8}{r.win_chance:<9.1%}{r.final_rating_a:<10.1f}"
            f"{r.final_rating_b:<10.1f}{r.score_stddev:<8.3f}"
        )
    return "\n".join(lines)
