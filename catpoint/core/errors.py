"""
Exception hierarchy for the security core.

- RepositoryFailure: the persistence adapter could not read or write state.
- ClassifierFailure: the image service failed to produce a decision.
- ConfigError: the YAML configuration is present but invalid.

All of them derive from ``CatPointError`` so callers (e.g. the UI) can catch
everything raised by the core with one handler.
"""

from __future__ import annotations


class CatPointError(Exception):
    """Base class for errors raised by the security core."""


class RepositoryFailure(CatPointError):
    """Raised when the repository cannot complete a read or write."""


class ClassifierFailure(CatPointError):
    """Raised when the image service fails; the image yields no decision."""


class ConfigError(CatPointError, ValueError):
    """Raised when configuration content is malformed."""
