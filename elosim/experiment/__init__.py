"""
Experiment module for studying Elo convergence.

Provides:
- ExperimentConfig: Immutable experiment settings
- run_experiment: Mean and variance experiments with optional file output
- calculate_chances: Head-to-head win-chance estimation
"""

from elosim.experiment.config import (
    ExperimentConfig,
    ExperimentType,
    SETTLE_OFFSETS,
    select_settle_offsets,
)
from elosim.experiment.orchestrator import (
    RatingSeries,
    MeanResult,
    VarianceResult,
    run_experiment,
    run_mean_experiment,
    run_variance_experiment,
)
from elosim.experiment.chances import ChanceResult, calculate_chances

__all__ = [
    'ExperimentConfig',
    'ExperimentType',
    'SETTLE_OFFSETS',
    'select_settle_offsets',
    'RatingSeries',
    'MeanResult',
    'VarianceResult',
    'run_experiment',
    'run_mean_experiment',
    'run_variance_experiment',
    'ChanceResult',
    'calculate_chances',
]
