"""Yield: real price return plus net dividend yield per period."""

from __future__ import annotations

import logging

from valuation.analysis.context import DerivationContext
from valuation.analysis.rates import (
    annualize,
    compound,
    period_inflation,
    real_rate,
    round_value,
)
from valuation.dates import years_passed
from valuation.data.models import DerivedMetric
from valuation.errors import EndOfYearNotImplementedError, MissingDateDataError

logger = logging.getLogger(__name__)


def compute_yield(ctx: DerivationContext) -> DerivedMetric:
    """Compute the Yield metric and its growth summary.

    For every price date except the oldest (which has no prior price),
    yield = real price change since the previous price date + dividend
    after dividend tax. The live column carries no inflation, quarter-ends
    are deflated by QoQ inflation and year-ends by YoY inflation.

    Growth summary:
        - Total growth: compounded yields across all computed dates.
        - Yearly growth: Total growth annualised from the oldest price date.
        - TTM growth: compounded yields of the year-to-date columns times
          the pro-rated share of the last finished year's yield. The
          finished year contributes ``(4 - quarter) / 4`` of its yield,
          added flat rather than compounded.

    Args:
        ctx: Derivation context.

    Returns:
        The Yield derived metric.

    Raises:
        MissingMetricError: If Price or Dividend is absent.
        MissingDateDataError: If inflation or a year-to-date yield is missing.
        EndOfYearNotImplementedError: If the last reported quarter is Q4.
    """
    price = ctx.store.base("Price")
    dividend = ctx.store.base("Dividend")
    dividend_tax = ctx.taxes.dividend_tax

    metric = DerivedMetric(name="Yield")
    dates = ctx.price_dates

    for date, previous_date in zip(dates, dates[1:]):
        net_dividend_yield = (dividend.value(date) or 0.0) * (1 - dividend_tax)

        previous_price = price.value(previous_date)
        price_yield = (price.value(date) - previous_price) / previous_price
        inflation = period_inflation(ctx.inflation, date)
        net_price_yield = real_rate(price_yield, inflation)

        metric.values[date] = round_value(net_price_yield + net_dividend_yield)
        logger.debug(
            "%s: yield %s = %.5f (inflation %.4f)",
            ctx.symbol, date, metric.values[date], inflation,
        )

    total_growth = compound(metric.values.values())
    metric.total_growth = round_value(total_growth)
    metric.yearly_growth = round_value(
        annualize(
            total_growth,
            years_passed(ctx.earliest_price_date, axis=ctx.axis),
        )
    )
    metric.ttm_growth = _ttm_yield(ctx, metric)

    logger.info(
        "%s: yield over %d periods, total %.5f, TTM %.5f",
        ctx.symbol, len(metric.values), metric.total_growth, metric.ttm_growth,
    )
    return metric


def _ttm_yield(ctx: DerivationContext, metric: DerivedMetric) -> float:
    quarter = ctx.axis.last_quarter
    if quarter == 4:
        raise EndOfYearNotImplementedError(
            "TTM growth for end of the year not implemented"
        )

    year_to_date: list[float] = []
    for date in ctx.axis.year_to_date:
        if date not in metric.values:
            raise MissingDateDataError(
                f"{ctx.symbol}: yield not available for {date}, "
                "cannot compute TTM growth"
            )
        year_to_date.append(metric.values[date])

    finished_year = ctx.axis.last_finished_year
    if finished_year not in metric.values:
        raise MissingDateDataError(
            f"{ctx.symbol}: yield not available for {finished_year}"
        )
    quarterly_yield = metric.values[finished_year] / 4
    from_finished_year = quarterly_yield * (4 - quarter)

    ttm = (1 + compound(year_to_date)) * (1 + from_finished_year) - 1
    return round_value(ttm)
