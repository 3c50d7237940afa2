"""Errors raised by the re-ranking engine."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """The sector taxonomy or a sector selection is misconfigured.

    Raised for programmer/deployment mistakes (unknown sector id, malformed
    taxonomy file). Sparse news data is never reported through this error.
    """
