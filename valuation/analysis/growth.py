"""Nominal Total and TTM growth for statement metrics."""

from __future__ import annotations

import logging

from valuation.analysis.context import DerivationContext
from valuation.analysis.rates import round_value
from valuation.config import GROWTH_APPLIED_METRICS
from valuation.data.models import BaseMetric, GrowthValue, Undefined
from valuation.errors import EndOfYearNotImplementedError, MissingDateDataError

logger = logging.getLogger(__name__)


def _growth(start: float, end: float) -> GrowthValue:
    if start <= 0 or end <= 0:
        return Undefined.NEGATIVE
    return round_value((end - start) / start)


def ttm_start_value(metric: BaseMetric, ctx: DerivationContext) -> float:
    """Interpolated metric value twelve months before the last report.

    Assumes linear quarterly progress between the two last finished
    fiscal years.

    Raises:
        EndOfYearNotImplementedError: If the last reported quarter is Q4.
        MissingDateDataError: If either finished year is not reported.
    """
    quarter = ctx.axis.last_quarter
    if quarter == 4:
        raise EndOfYearNotImplementedError(
            "TTM growth for end of the year not implemented"
        )

    last_finished = metric.value(ctx.axis.last_finished_year)
    previous_finished = metric.value(ctx.axis.previous_finished_year)
    if last_finished is None or previous_finished is None:
        raise MissingDateDataError(
            f"{ctx.symbol}: {metric.name} needs both finished years for TTM "
            f"growth (got {last_finished}, {previous_finished})"
        )

    quarterly_increase = (last_finished - previous_finished) / 4
    return previous_finished + quarterly_increase * quarter


def compute_growths(ctx: DerivationContext) -> None:
    """Set nominal Total and TTM growth on the growth-applied base metrics.

    Total growth runs from the earliest Equity date to the last reported
    date. Either end being non-positive makes the growth undefined. The
    same applies to TTM growth against the interpolated TTM start value.

    Raises:
        MissingMetricError: If a growth-applied metric is absent.
        MissingDateDataError: If the first or last value is null.
        EndOfYearNotImplementedError: If the last reported quarter is Q4.
    """
    first_date = ctx.earliest_equity_date
    last_date = ctx.axis.last_reported

    for name in GROWTH_APPLIED_METRICS:
        metric = ctx.store.base(name)
        first_value = metric.value(first_date)
        last_value = metric.value(last_date)
        if first_value is None or last_value is None:
            raise MissingDateDataError(
                f"{ctx.symbol}: {name} first value {first_value}, "
                f"last value {last_value}"
            )

        metric.total_growth = _growth(first_value, last_value)
        metric.ttm_growth = _growth(ttm_start_value(metric, ctx), last_value)

        logger.debug(
            "%s: %s nominal growth total=%s ttm=%s",
            ctx.symbol, name, metric.total_growth, metric.ttm_growth,
        )
