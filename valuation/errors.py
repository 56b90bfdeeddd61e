"""Errors raised by the derivation pipeline.

Every error is fatal for the stock being derived. Computation is
deterministic, so nothing is retried.
"""

from __future__ import annotations


class DerivationError(Exception):
    """Base class for failures that abort a stock's derivation."""


class MissingMetricError(DerivationError):
    """A required base or derived metric is absent from the store."""


class MissingDateDataError(DerivationError):
    """Price, statement or inflation data is absent for a needed date."""


class UnsupportedRegionError(DerivationError):
    """Region outside the supported set."""


class UndefinedGrowthError(DerivationError):
    """An average was requested over a growth value that is undefined."""


class DateOrderError(DerivationError):
    """A start date falls after the anchor date."""


class EndOfYearNotImplementedError(DerivationError, NotImplementedError):
    """TTM growth requested while the last reported quarter is Q4."""
