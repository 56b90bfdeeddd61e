"""Money-fund benchmark yield."""

from __future__ import annotations

import logging

from valuation.analysis.rates import real_rate, round_value
from valuation.config import MoneyFundConfig
from valuation.dates import DEFAULT_DATE_AXIS, DateAxis
from valuation.data.models import InflationSeries
from valuation.taxes import tax_rates

logger = logging.getLogger(__name__)


def compute_money_fund_yield(
    inflation: InflationSeries,
    fund: MoneyFundConfig | None = None,
    axis: DateAxis = DEFAULT_DATE_AXIS,
    live: bool = True,
) -> float:
    """Real TTM yield of the income fund after withholding tax.

    The nominal return between the fund's price a year before the last
    reported date and its latest price is reduced by the region's
    withholding tax, then deflated by the last reported YoY inflation.
    Stock yields are compared against this figure.

    Args:
        inflation: Inflation series of the fund's region.
        fund: Fund prices. Defaults to ``MoneyFundConfig()``.
        axis: Date axis supplying the last reported date.
        live: Use the live fund price instead of the statement-date price.

    Returns:
        Real net yield, rounded.

    Raises:
        MissingDateDataError: If inflation is missing for the last
            reported date.
        UnsupportedRegionError: If the fund region has no tax rates.
        ValueError: If the starting price is not positive.
    """
    fund = fund or MoneyFundConfig()
    if fund.previous_ttm_price <= 0:
        raise ValueError(f"Invalid fund starting price {fund.previous_ttm_price}")

    price = fund.live_price if live else fund.ttm_price
    nominal = (price - fund.previous_ttm_price) / fund.previous_ttm_price
    net = nominal * (1 - tax_rates(fund.region).withholding_tax)
    ttm_inflation = inflation.get(axis.last_reported).yoy

    result = round_value(real_rate(net, ttm_inflation))
    logger.info(
        "Money fund yield %.5f (nominal %.5f, net %.5f, inflation %.4f)",
        result, nominal, net, ttm_inflation,
    )
    return result
