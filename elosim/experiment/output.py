"""
Tab-separated output files for experiment results.

File names encode the experiment parameters so runs with different settings
can share one output directory.
"""

from pathlib import Path
from typing import List, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from elosim.experiment.chances import ChanceResult
    from elosim.experiment.orchestrator import MeanResult, VarianceResult


def format_k(k_factor: float) -> str:
    """Render K without a trailing .0 for integral values."""
    return f"{k_factor:g}"


def output_filename(prefix: str, num_iterations: int, num_rounds: int,
                    k_factor: float, skills: Sequence[int]) -> str:
    skills_str = "+".join(str(s) for s in skills)
    return f"{prefix}-i={num_iterations}-t={num_rounds}-k={format_k(k_factor)}-skills={skills_str}.txt"


def mean_output_filename(result: 'MeanResult') -> str:
    return output_filename("output", result.num_iterations, result.num_rounds,
                           result.k_factor, result.skills)


def variance_output_filename(result: 'VarianceResult') -> str:
    return output_filename("stddevs", result.num_iterations, result.num_rounds,
                           result.k_factor, result.skills)


def _cells(values) -> str:
    return "".join(f"\t{float(v)!r}" for v in values)


def format_mean_lines(result: 'MeanResult') -> List[str]:
    """
    One line per round index: t, then each competitor's averaged rating.
    Followed by a blank line and the competitors' skills for reference.
    """
    lines = [f"{t}{_cells(result.ratings[:, t])}" for t in range(result.num_rounds)]
    lines.append("")
    lines.append("".join(f"\t{int(s)}" for s in result.skills))
    return lines


def format_variance_lines(result: 'VarianceResult') -> List[str]:
    """One line per repetition: index, then each competitor's standard deviation."""
    return [f"{rep}{_cells(row)}" for rep, row in enumerate(result.stddevs)]


def _write_lines(path: Path, lines: List[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    return path


def write_mean_output(result: 'MeanResult', output_dir: Path) -> Path:
    """Write a mean-mode result; returns the file path."""
    return _write_lines(Path(output_dir) / mean_output_filename(result), format_mean_lines(result))


def write_variance_output(result: 'VarianceResult', output_dir: Path) -> Path:
    """Write a variance-mode result; returns the file path."""
    return _write_lines(Path(output_dir) / variance_output_filename(result),
                        format_variance_lines(result))


def format_chance_line(result: 'ChanceResult') -> str:
    return (f"{result.index_a}-{result.index_b}\t{result.win_chance!r}\t"
            f"{result.final_rating_a!r}\t{result.final_rating_b!r}\t{result.score_stddev!r}")


def chance_trace_filename(result: 'ChanceResult') -> str:
    return f"elos-p{result.index_a + 1}-vs-p{result.index_b + 1}.dat"


def write_chance_trace(result: 'ChanceResult', output_dir: Path) -> Path:
    """
    Write the traced rating pairs of a head-to-head run.

    Raises:
        ValueError: If the result carries no trace
    """
    if result.trace is None:
        raise ValueError(f"No trace recorded for pair {result.index_a}-{result.index_b}")
    lines = [f"{float(a)!r}\t{float(b)!r}" for a, b in result.trace]
    return _write_lines(Path(output_dir) / chance_trace_filename(result), lines)
