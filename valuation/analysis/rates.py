"""Rate arithmetic shared by the derivation steps."""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from valuation.config import ROUND_DIGITS
from valuation.dates import CURRENT, parse_date
from valuation.data.models import InflationSeries
from valuation.errors import DerivationError

_QUANTUM = Decimal(1).scaleb(-ROUND_DIGITS)


def round_value(value: float) -> float:
    """Round to ``ROUND_DIGITS`` decimals, halves away from zero.

    Operates on the exact binary value, so applying it twice gives the
    same result as applying it once.

    Raises:
        ValueError: If value is NaN or infinite.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value}")
    return float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def real_rate(nominal_rate: float, inflation_rate: float) -> float:
    """Inflation-adjusted rate: (nominal - inflation) / (1 + inflation)."""
    return (nominal_rate - inflation_rate) / (1 + inflation_rate)


def annualize(total_growth: float, years: float) -> float:
    """Compound annual rate equivalent to ``total_growth`` over ``years``.

    Raises:
        DerivationError: If growth is non-zero over a zero-length period.
    """
    if total_growth == 0:
        return 0.0
    if years <= 0:
        raise DerivationError(
            f"Cannot annualise growth {total_growth} over {years} years"
        )
    return (1 + total_growth) ** (1 / years) - 1


def compound(rates: Iterable[float]) -> float:
    """Compounded growth of a sequence of period rates."""
    factors = 1 + np.asarray(list(rates), dtype=np.float64)
    return float(np.prod(factors)) - 1


def period_inflation(inflation: InflationSeries, date: str) -> float:
    """Inflation over the period ending on ``date``.

    The live column carries no inflation. Quarter-ends use quarter-over-
    quarter inflation, December year-ends use year-over-year inflation.

    Raises:
        MissingDateDataError: If ``date`` has no inflation record.
    """
    if date == CURRENT:
        return 0.0
    record = inflation.get(date)
    if parse_date(date).month != 12:
        return record.qoq
    return record.yoy
