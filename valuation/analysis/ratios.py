"""Valuation ratios: net debt, enterprise value and price multiples.

All ratios are computed over the Equity available dates. A ratio whose
denominator is non-positive, or whose numerator is itself undefined, is
recorded as ``Undefined.NEGATIVE`` instead of a number.
"""

from __future__ import annotations

import logging

from valuation.analysis.context import DerivationContext
from valuation.analysis.rates import round_value
from valuation.data.models import DerivedMetric, Undefined
from valuation.errors import MissingDateDataError

logger = logging.getLogger(__name__)


def _balance_value(ctx: DerivationContext, name: str, date: str) -> float:
    """Balance sheet item, 0 when the line or the period is not reported."""
    metric = ctx.store.find_base(name)
    if metric is None:
        return 0.0
    return metric.value(date) or 0.0


def _net_debt(ctx: DerivationContext, date: str) -> float:
    return (
        _balance_value(ctx, "Short term liabilities", date)
        + _balance_value(ctx, "Long term liabilities", date)
        - _balance_value(ctx, "Cash & cash equivalents", date)
    )


def _required_value(ctx: DerivationContext, name: str, date: str) -> float:
    value = ctx.store.base(name).value(date)
    if value is None:
        raise MissingDateDataError(f"{ctx.symbol}: {name} not found for date {date}")
    return value


def compute_net_debt_to_operating_income(ctx: DerivationContext) -> DerivedMetric:
    """Net debt / operating income per date.

    Net debt = short term + long term liabilities - cash.

    Raises:
        MissingMetricError: If Operating income is absent.
        MissingDateDataError: If operating income is null on an equity date.
    """
    metric = DerivedMetric(name="Net debt / operating income")

    for date in ctx.equity_dates:
        operating_income = _required_value(ctx, "Operating income", date)
        if operating_income <= 0:
            metric.values[date] = Undefined.NEGATIVE
        else:
            metric.values[date] = round_value(_net_debt(ctx, date) / operating_income)

    return metric


def compute_enterprise_value(ctx: DerivationContext) -> DerivedMetric:
    """Enterprise value = market value + liabilities - cash.

    Dates without a price (before listing) get no value.
    """
    price = ctx.store.base("Price")
    metric = DerivedMetric(name="Enterprise value")

    for date in ctx.equity_dates:
        price_value = price.value(date)
        if price_value is None:
            logger.debug("%s: no price on %s, EV skipped", ctx.symbol, date)
            continue
        metric.values[date] = round_value(
            ctx.market_value(price_value) + _net_debt(ctx, date)
        )

    return metric


def _ev_multiple(
    ctx: DerivationContext, metric_name: str, denominator_name: str
) -> DerivedMetric:
    enterprise_value = ctx.store.derived("Enterprise value")
    metric = DerivedMetric(name=metric_name)

    for date in ctx.equity_dates:
        denominator = _required_value(ctx, denominator_name, date)
        ev = enterprise_value.value(date)
        if ev is None:
            continue

        if isinstance(ev, Undefined) or denominator <= 0:
            metric.values[date] = Undefined.NEGATIVE
        else:
            metric.values[date] = round_value(ev / denominator)

    return metric


def compute_ev_to_operating_income(ctx: DerivationContext) -> DerivedMetric:
    """EV / operating income. Requires Enterprise value."""
    return _ev_multiple(ctx, "EV / operating income", "Operating income")


def compute_ev_to_net_income(ctx: DerivationContext) -> DerivedMetric:
    """EV / net income. Requires Enterprise value."""
    return _ev_multiple(ctx, "EV / net income", "Net income")


def compute_market_to_book(ctx: DerivationContext) -> DerivedMetric:
    """Market value / book value (Equity).

    Dates without a price are skipped. Non-positive book value yields
    ``Undefined.NEGATIVE``.

    Raises:
        MissingDateDataError: If Equity is null on an equity date.
    """
    price = ctx.store.base("Price")
    metric = DerivedMetric(name="Market value / book value")

    for date in ctx.equity_dates:
        book_value = _required_value(ctx, "Equity", date)
        price_value = price.value(date)
        if price_value is None:
            continue

        if book_value <= 0:
            metric.values[date] = Undefined.NEGATIVE
        else:
            metric.values[date] = round_value(
                ctx.market_value(price_value) / book_value
            )

    return metric
