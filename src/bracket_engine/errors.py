"""
Exceptions raised by the bracket engine.
"""


class BracketConfigurationError(ValueError):
    """Caller supplied input the engine cannot build from."""


class UnsupportedSeedingError(BracketConfigurationError):
    """Seeding requested for a rank outside the canonical table."""


class BracketProgressError(ValueError):
    """A result could not be applied to a bracket match."""
