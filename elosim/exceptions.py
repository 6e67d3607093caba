"""
Exceptions raised by the Elo simulator.

Nothing here is retried: every error aborts the run and is reported by the
calling script.
"""


class EloSimError(Exception):
    """Base exception for all simulator errors."""


# ========== Configuration ==========


class ConfigurationError(EloSimError, ValueError):
    """Raised when an experiment or scheduler input is invalid."""


# ========== Outcome sources ==========


class OutcomeSourceError(EloSimError):
    """Base exception for failures while deciding a match outcome."""


class SampleFileError(OutcomeSourceError):
    """Raised when a sample file is missing, empty or malformed."""


class ProtocolError(OutcomeSourceError):
    """Raised when the remote score generator closes or sends a short reply."""
