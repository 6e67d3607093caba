#!/usr/bin/env python3
"""
Head-to-head win chances between competitors.

Plays many isolated games per pair and prints the win rate, the two ratings
reached by a two-player Elo track, and the standard deviation of the scores.

Usage:
    python scripts/calculate_chances.py --skills 200 400 600 800 --outcome cached --sample-dir samples
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from elosim.exceptions import EloSimError
from elosim.experiment.chances import calculate_chances
from elosim.experiment.display import format_chance_table
from elosim.experiment.output import format_chance_line, write_chance_trace
from elosim.outcomes import CachedSampleOutcome, QualityProportionalOutcome, SampleCache


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Estimate head-to-head win chances between competitors.'
    )
    parser.add_argument(
        '--skills', '-s',
        type=int, nargs='+', required=True,
        help='Competitor skills, in order'
    )
    parser.add_argument(
        '--outcome',
        choices=['quality', 'cached'], default='cached',
        help='Outcome source (default: cached)'
    )
    parser.add_argument(
        '--games', '-g',
        type=int, default=10000,
        help='Games per pair (default: 10000)'
    )
    parser.add_argument(
        '--k-factor', '-k',
        type=float, default=14.0,
        help='Elo K-factor (default: 14)'
    )
    parser.add_argument(
        '--all-pairs',
        action='store_true',
        help='Compare every pair instead of neighbours only'
    )
    parser.add_argument(
        '--trace-from',
        type=int, default=None,
        help='Write rating pairs for games after this index to elos-p<i>-vs-p<j>.dat'
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
        '--output-dir', '-o',
        type=str, default='.',
        help='Directory for trace files (default: .)'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    rng = np.random.default_rng(args.seed)

    try:
        if args.outcome == 'cached':
            outcome = CachedSampleOutcome(SampleCache(args.sample_dir), rng)
        else:
            outcome = QualityProportionalOutcome(rng)

        results = calculate_chances(
            args.skills,
            outcome,
            k_factor=args.k_factor,
            num_games=args.games,
            adjacent_only=not args.all_pairs,
            trace_from=args.trace_from
        )
    except EloSimError as e:
        print(f"Error: {e}")
        return 1

    for result in results:
        print(format_chance_line(result))
        if result.trace is not None:
            write_chance_trace(result, Path(args.output_dir))

    print()
    print(format_chance_table(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
