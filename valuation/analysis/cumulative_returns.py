"""Cumulative returns of the benchmark basket since the observation start.

Every value is the return from the baseline date to that day, recomputed
from the baseline rather than chained, which simulates selling on that day.
Withholding tax is charged on the total realised gain at sale, so only the
from-baseline form gives the correct net figure.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import numpy as np
import pandas as pd

from valuation.config import BASELINE_DATE
from valuation.errors import MissingDateDataError
from valuation.taxes import tax_rates

logger = logging.getLogger(__name__)

REFERENCE_SYMBOL = "USDTRY"

# Output column -> input series.
_SERIES = {
    "usdtry": "USDTRY",
    "eurtry": "EURTRY",
    "bgp": "BGP",
    "gold": "GOLD",
}
OUTPUT_COLUMNS: tuple[str, ...] = ("usdtry", "eurtry", "mixed", "bgp", "gold")


def _indexed(symbol: str, history: pd.DataFrame) -> pd.Series:
    series = history.set_index("date")["value"]
    if series.index.duplicated().any():
        raise ValueError(f"{symbol}: duplicate dates in daily history")
    return series.astype(float)


def compute_cumulative_returns(
    histories: Mapping[str, pd.DataFrame],
    baseline_date: str = BASELINE_DATE,
    withholding_tax: float | None = None,
) -> pd.DataFrame:
    """Cumulative return per series for each date after the baseline.

    The reference dates are the USDTRY dates on or after the baseline, in
    USDTRY file order. Every other series must carry every reference date.
    The mixed series is the geometric mean of the two currency factors
    minus 1. The income fund (BGP) return is reduced by withholding tax.

    Args:
        histories: Symbol -> frame with ``date`` (YYYY-MM-DD) and ``value``.
        baseline_date: Observation start date.
        withholding_tax: Tax rate on the fund's gain. Defaults to the
            Turkish withholding tax.

    Returns:
        DataFrame indexed by date with columns ``OUTPUT_COLUMNS``.

    Raises:
        MissingDateDataError: If a series lacks the baseline or a
            reference date.
        ValueError: If a series is absent or has duplicate dates.
    """
    if withholding_tax is None:
        withholding_tax = tax_rates("tr").withholding_tax

    series: dict[str, pd.Series] = {}
    for column, symbol in _SERIES.items():
        if symbol not in histories:
            raise ValueError(f"Daily history for {symbol} not provided")
        series[column] = _indexed(symbol, histories[symbol])

    for column, values in series.items():
        if baseline_date not in values.index or pd.isna(values[baseline_date]):
            raise MissingDateDataError(
                f"Baseline date {baseline_date} not found in {_SERIES[column]}"
            )

    reference = series["usdtry"].index
    reference_dates = reference[
        pd.to_datetime(reference) >= pd.Timestamp(baseline_date)
    ]
    for column, values in series.items():
        missing = reference_dates.difference(values.index)
        if len(missing) > 0:
            raise MissingDateDataError(
                f"Date {missing[0]} not found in {_SERIES[column]} history"
            )

    dates = reference_dates[reference_dates != baseline_date]
    factors = pd.DataFrame(
        {
            column: values.loc[dates] / values[baseline_date]
            for column, values in series.items()
        },
        index=dates,
    )
    if factors.isna().any().any():
        raise MissingDateDataError("Daily history has blank values after baseline")

    result = pd.DataFrame(index=pd.Index(dates, name="date"))
    result["usdtry"] = factors["usdtry"] - 1
    result["eurtry"] = factors["eurtry"] - 1
    result["mixed"] = np.sqrt(factors["usdtry"] * factors["eurtry"]) - 1
    result["bgp"] = (factors["bgp"] - 1) * (1 - withholding_tax)
    result["gold"] = factors["gold"] - 1

    logger.info(
        "Cumulative returns over %d days since %s", len(result), baseline_date
    )
    return result[list(OUTPUT_COLUMNS)]


def to_records(frame: pd.DataFrame) -> dict[str, list[dict[str, object]]]:
    """Convert to ``{series: [{"date": ..., "value": ...}, ...]}``."""
    return {
        column: [
            {"date": str(date), "value": float(value)}
            for date, value in frame[column].items()
        ]
        for column in frame.columns
    }
