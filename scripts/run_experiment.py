#!/usr/bin/env python3
"""
Elo convergence experiments over a round-robin field.

Usage:
    python scripts/run_experiment.py --skills 1000 1200 1400 1600 1800 2000 --outcome cached

Examples:
    # Closed-form check: ratings should track skills
    python scripts/run_experiment.py --skills 10 20 30 40 --outcome quality --iterations 100 --rounds 200

    # Both experiment types for K=20 and K=40, sampled game scores
    python scripts/run_experiment.py \\
        --skills 1000 1200 1400 1600 1800 2000 --outcome cached --sample-dir samples \\
        --type both --k-factor 20 40 --iterations 1000 --rounds 1000 --progress
"""

import argparse
import sys
from contextlib import ExitStack
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from elosim.exceptions import EloSimError
from elosim.experiment.config import ExperimentConfig, ExperimentType
from elosim.experiment.orchestrator import run_experiment
from elosim.outcomes import (
    AbsoluteQualityOutcome,
    CachedSampleOutcome,
    CoinFlipOutcome,
    QualityProportionalOutcome,
    RemoteSampleOutcome,
    SampleCache,
    ScoreClient,
    default_tier,
)
from elosim.outcomes.client import DEFAULT_HOST, DEFAULT_PORT


OUTCOME_TYPES = ['quality', 'absolute', 'coin', 'cached', 'remote']


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Simulate Elo rating convergence for a fixed-skill round-robin field.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Outcome sources:
  quality   Win chance from the logistic skill gap
  absolute  Higher skill always wins
  coin      Every match is a coin toss
  cached    Compare scores drawn from recorded sample files
  remote    Compare scores from live games on the score generator
'''
    )

    parser.add_argument(
        '--skills', '-s',
        type=int, nargs='+', required=True,
        help='True skill of each competitor, in order'
    )
    parser.add_argument(
        '--outcome',
        choices=OUTCOME_TYPES, default='quality',
        help='Outcome source deciding each match (default: quality)'
    )
    parser.add_argument(
        '--type', '-t',
        choices=['mean', 'variance', 'both'], default='mean',
        help='Experiment type (default: mean)'
    )
    parser.add_argument(
        '--iterations', '-i',
        type=int, default=1,
        help='Independent iterations, or repetitions in variance mode (default: 1)'
    )
    parser.add_argument(
        '--rounds', '-r',
        type=int, default=1000,
        help='Round-robin passes per iteration (default: 1000)'
    )
    parser.add_argument(
        '--k-factor', '-k',
        type=float, nargs='+', default=[14.0],
        help='Elo K-factor(s); one experiment per value (default: 14)'
    )
    parser.add_argument(
        '--initial-rating',
        type=float, default=None,
        help='Starting rating for every competitor (default: truncated mean skill)'
    )
    parser.add_argument(
        '--settle-offsets',
        type=int, nargs='+', default=None,
        help='Variance mode: first round kept per competitor (default: K-factor table)'
    )
    parser.add_argument(
        '--seed',
        type=int, default=None,
        help='Random seed for reproducible runs'
    )
    parser.add_argument(
        '--sample-dir',
        type=str, default='.',
        help='Directory with samples-d<tier>.dat files (default: .)'
    )
    parser.add_argument(
        '--host',
        type=str, default=DEFAULT_HOST,
        help=f'Score generator host (default: {DEFAULT_HOST})'
    )
    parser.add_argument(
        '--port',
        type=int, default=DEFAULT_PORT,
        help=f'Score generator port (default: {DEFAULT_PORT})'
    )
    parser.add_argument(
        '--remote-tiers',
        action='store_true',
        help='Send skill // 20 to the score generator instead of the raw skill'
    )
    parser.add_argument(
        '--output-dir', '-o',
        type=str, default='.',
        help='Directory for result files (default: .)'
    )
    parser.add_argument(
        '--no-output',
        action='store_true',
        help='Do not write result files'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show progress bars'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Minimal output'
    )

    return parser.parse_args(argv)


def create_outcome(args, rng: np.random.Generator, stack: ExitStack):
    """Build the outcome source selected on the command line."""
    if args.outcome == 'quality':
        return QualityProportionalOutcome(rng)
    if args.outcome == 'absolute':
        return AbsoluteQualityOutcome()
    if args.outcome == 'coin':
        return CoinFlipOutcome(rng)
    if args.outcome == 'cached':
        cache = SampleCache(args.sample_dir)
        cache.preload(args.skills)
        return CachedSampleOutcome(cache, rng)

    client = stack.enter_context(ScoreClient(args.host, args.port))
    return RemoteSampleOutcome(client, default_tier if args.remote_tiers else None)


def experiment_types(choice: str):
    if choice == 'both':
        return [ExperimentType.MEAN, ExperimentType.VARIANCE]
    return [ExperimentType(choice)]


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    rng = np.random.default_rng(args.seed)

    try:
        with ExitStack() as stack:
            outcome = create_outcome(args, rng, stack)

            for k in args.k_factor:
                for experiment_type in experiment_types(args.type):
                    config = ExperimentConfig(
                        skills=tuple(args.skills),
                        outcome=outcome,
                        experiment_type=experiment_type,
                        num_iterations=args.iterations,
                        num_rounds=args.rounds,
                        k_factor=k,
                        initial_rating=args.initial_rating,
                        settle_offsets=tuple(args.settle_offsets) if args.settle_offsets else None,
                        produce_output=not args.no_output,
                        output_dir=args.output_dir
                    )
                    _, path = run_experiment(
                        config,
                        verbose=not args.quiet,
                        show_progress=args.progress
                    )
                    if args.quiet and path is not None:
                        print(path)
    except EloSimError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
