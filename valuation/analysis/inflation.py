"""Inflation adjustment of growth figures and the Selected growth summary."""

from __future__ import annotations

import logging

from valuation.analysis.context import DerivationContext
from valuation.analysis.rates import annualize, real_rate, round_value
from valuation.config import GROWTH_APPLIED_METRICS
from valuation.dates import CURRENT, parse_date, years_passed
from valuation.data.models import DerivedMetric, Undefined
from valuation.errors import DerivationError, UndefinedGrowthError

logger = logging.getLogger(__name__)


def accumulated_inflation(ctx: DerivationContext) -> float:
    """Compounded inflation over the Equity available dates.

    The live column and the earliest date contribute nothing. The last
    reported date contributes year-to-date inflation, which already covers
    the earlier quarters of that year, so those are skipped. Every other
    date is a year-end and contributes year-over-year inflation.

    Raises:
        MissingDateDataError: If a contributing date has no inflation record.
    """
    accumulated = 0.0
    earliest = ctx.earliest_equity_date
    reported_year = ctx.axis.reported_year

    for date in ctx.equity_dates:
        if date == CURRENT or date == earliest:
            continue
        if date == ctx.axis.last_reported:
            rate = ctx.inflation.get(date).ytd
        elif parse_date(date).year == reported_year:
            continue
        else:
            rate = ctx.inflation.get(date).yoy
        accumulated = (1 + accumulated) * (1 + rate) - 1

    return accumulated


def adjust_for_inflation(ctx: DerivationContext) -> None:
    """Convert nominal growth on the growth-applied metrics into real growth.

    Total growth is deflated by the accumulated inflation and Yearly growth
    is re-derived from it. TTM growth is deflated once by the last reported
    YoY inflation. Undefined growth stays undefined.

    Raises:
        DerivationError: If nominal growth has not been computed.
        MissingDateDataError: If inflation is missing for a needed date.
    """
    anchor = ctx.inflation.get(ctx.axis.last_reported)
    years = years_passed(ctx.earliest_equity_date, axis=ctx.axis)
    accumulated = accumulated_inflation(ctx)
    logger.debug(
        "%s: accumulated inflation %.5f over %.2f years",
        ctx.symbol, accumulated, years,
    )

    for name in GROWTH_APPLIED_METRICS:
        metric = ctx.store.base(name)
        if metric.total_growth is None or metric.ttm_growth is None:
            raise DerivationError(f"{ctx.symbol}: growth not computed for {name}")

        if isinstance(metric.total_growth, Undefined):
            metric.total_growth = Undefined.NEGATIVE
            metric.yearly_growth = Undefined.NEGATIVE
        else:
            metric.total_growth = round_value(
                real_rate(metric.total_growth, accumulated)
            )
            metric.yearly_growth = round_value(
                annualize(metric.total_growth, years)
            )

        if not isinstance(metric.ttm_growth, Undefined):
            metric.ttm_growth = round_value(real_rate(metric.ttm_growth, anchor.yoy))


def compute_selected_growth(ctx: DerivationContext) -> DerivedMetric:
    """Average real growth over the stock's selected growth basket.

    Raises:
        MissingMetricError: If a basket metric is absent.
        UndefinedGrowthError: If a basket metric's growth is undefined.
    """
    totals: list[float] = []
    ttms: list[float] = []

    for name in ctx.config.selected_growth_metrics:
        metric = ctx.store.base(name)
        total, ttm = metric.total_growth, metric.ttm_growth
        if not isinstance(total, float) or not isinstance(ttm, float):
            raise UndefinedGrowthError(
                f"Growth metric {name} is undefined for {ctx.symbol}. "
                "Revise the growth selection."
            )
        totals.append(total)
        ttms.append(ttm)

    years = years_passed(ctx.earliest_equity_date, axis=ctx.axis)
    total_growth = round_value(sum(totals) / len(totals))

    selected = DerivedMetric(
        name="Selected growth",
        total_growth=total_growth,
        ttm_growth=round_value(sum(ttms) / len(ttms)),
        yearly_growth=round_value(annualize(total_growth, years)),
    )
    logger.info(
        "%s: selected growth over %s total=%.5f ttm=%.5f",
        ctx.symbol,
        ", ".join(ctx.config.selected_growth_metrics),
        selected.total_growth,
        selected.ttm_growth,
    )
    return selected
