"""BumpGuard: semantic-version verdicts for public API changes."""

__version__ = "0.1.0"
