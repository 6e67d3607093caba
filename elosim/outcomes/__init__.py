"""
Outcome sources for deciding who wins a match.

Provides:
- QualityProportionalOutcome, AbsoluteQualityOutcome, CoinFlipOutcome: closed-form sources
- CachedSampleOutcome / SampleCache: draws from pre-recorded score files
- RemoteSampleOutcome / ScoreClient: live games from the remote score generator
"""

from elosim.outcomes.base import OutcomeSource
from elosim.outcomes.strategies import (
    QualityProportionalOutcome,
    AbsoluteQualityOutcome,
    CoinFlipOutcome,
    win_probability,
)
from elosim.outcomes.samples import (
    SampleCache,
    CachedSampleOutcome,
    read_samples,
    write_samples,
    build_sample_file,
    default_tier,
)
from elosim.outcomes.client import ScoreClient, RemoteSampleOutcome

__all__ = [
    'OutcomeSource',
    'QualityProportionalOutcome',
    'AbsoluteQualityOutcome',
    'CoinFlipOutcome',
    'win_probability',
    'SampleCache',
    'CachedSampleOutcome',
    'read_samples',
    'write_samples',
    'build_sample_file',
    'default_tier',
    'ScoreClient',
    'RemoteSampleOutcome',
]
