#!/usr/bin/env python3
"""
Record score samples from the remote generator.

Each tier gets (or extends) a samples-d<tier>.dat file with one score per line.
The cached outcome source maps skill S to tier S // 20.

Usage:
    python scripts/build_sample_cache.py --tiers 50 60 70 80 90 100 --samples 10000
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tqdm import tqdm

from elosim.exceptions import EloSimError
from elosim.outcomes.client import DEFAULT_HOST, DEFAULT_PORT, ScoreClient
from elosim.outcomes.samples import DEFAULT_PATTERN, build_sample_file


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Record score samples from the remote score generator.'
    )
    parser.add_argument(
        '--tiers',
        type=int, nargs='+', required=True,
        help='Tier values to sample (each sent as the one-byte request)'
    )
    parser.add_argument(
        '--samples', '-n',
        type=int, default=10000,
        help='Scores to record per tier (default: 10000)'
    )
    parser.add_argument(
        '--sample-dir',
        type=str, default='.',
        help='Directory for sample files (default: .)'
    )
    parser.add_argument(
        '--pattern',
        type=str, default=DEFAULT_PATTERN,
        help=f'File name pattern (default: {DEFAULT_PATTERN})'
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
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        with ScoreClient(args.host, args.port) as client:
            for tier in args.tiers:
                with tqdm(total=args.samples, desc=f"tier {tier}") as bar:
                    path = build_sample_file(
                        client,
                        tier,
                        num_samples=args.samples,
                        sample_dir=args.sample_dir,
                        pattern=args.pattern,
                        progress=lambda _: bar.update(1)
                    )
                print(f"Wrote {args.samples} samples to {path}")
    except EloSimError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
