"""Derivation orchestrator.

Runs the fixed derivation sequence for one stock, and batches it over a
region.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from valuation.analysis.context import DerivationContext
from valuation.analysis.growth import compute_growths
from valuation.analysis.inflation import adjust_for_inflation, compute_selected_growth
from valuation.analysis.ratios import (
    compute_enterprise_value,
    compute_ev_to_net_income,
    compute_ev_to_operating_income,
    compute_market_to_book,
    compute_net_debt_to_operating_income,
)
from valuation.analysis.yield_metric import compute_yield
from valuation.config import DataConfig
from valuation.dates import DEFAULT_DATE_AXIS, DateAxis
from valuation.data import (
    load_dynamic_info,
    load_inflation,
    load_stock,
)
from valuation.data.models import (
    BaseMetric,
    DynamicInfo,
    InflationSeries,
    StockConfig,
    StockResult,
)
from valuation.data.store import MetricStore
from valuation.errors import DerivationError, MissingMetricError
from valuation.taxes import tax_rates

logger = logging.getLogger(__name__)


def derive_metrics(
    base_metrics: Iterable[BaseMetric],
    config: StockConfig,
    dynamic_info: DynamicInfo,
    inflation: InflationSeries,
    region: str,
    axis: DateAxis = DEFAULT_DATE_AXIS,
) -> StockResult:
    """Compute the derived metrics and growth summaries for one stock.

    Base metrics are updated in place: the ``current`` column is filled
    and growth-applied metrics receive real Total, Yearly and TTM growth.
    Running twice on the same inputs gives the same output.

    Args:
        base_metrics: Statement lines and prices for the stock.
        config: Stock configuration.
        dynamic_info: Live price feed entry.
        inflation: Inflation series of the stock's region.
        region: Region code.
        axis: Reporting date axis.

    Returns:
        StockResult with base metrics, derived metrics in step order, the
        configuration and the live feed notes.

    Raises:
        DerivationError: Any failure. The stock produces no output.
    """
    symbol = config.symbol

    # Step 1: Validate region.
    tax_rates(region)

    # Step 2: Build the store and the current column.
    store = MetricStore(base_metrics)
    store.populate_current(dynamic_info.price, axis)
    ctx = DerivationContext.build(store, config, inflation, region, axis)
    logger.debug(
        "%s: %d equity dates, %d price dates",
        symbol, len(ctx.equity_dates), len(ctx.price_dates),
    )

    # Step 3: Yield and valuation ratios. EV must precede the EV multiples.
    store.add_derived(compute_yield(ctx))
    store.add_derived(compute_net_debt_to_operating_income(ctx))
    store.add_derived(compute_enterprise_value(ctx))
    store.add_derived(compute_ev_to_operating_income(ctx))
    store.add_derived(compute_ev_to_net_income(ctx))
    store.add_derived(compute_market_to_book(ctx))
    logger.info("%s: computed %d ratios", symbol, len(store.derived_metrics))

    # Step 4: Nominal growth, then inflation adjustment in place.
    compute_growths(ctx)
    adjust_for_inflation(ctx)

    # Step 5: Selected growth over the real growth figures.
    store.add_derived(compute_selected_growth(ctx))

    return StockResult(
        base_metrics=store.base_metrics,
        derived_metrics=store.derived_metrics,
        config=config,
        notes=list(dynamic_info.notes),
    )


def analyze_stock(
    symbol: str,
    region: str,
    data_config: DataConfig | None = None,
    axis: DateAxis = DEFAULT_DATE_AXIS,
    inflation: InflationSeries | None = None,
    dynamic: dict[str, DynamicInfo] | None = None,
) -> StockResult:
    """Load a stock's local data and derive its metrics.

    Args:
        symbol: Stock ticker symbol.
        region: Region code.
        data_config: Data location.
        axis: Reporting date axis.
        inflation: Preloaded inflation series, loaded when None.
        dynamic: Preloaded live price map, loaded when None.

    Raises:
        MissingMetricError: If the stock has no live price entry.
        DerivationError: If derivation fails.
        FileNotFoundError: If a data file is missing.
        ValueError: If a data file is malformed.
    """
    tax_rates(region)
    data_config = data_config or DataConfig()
    if inflation is None:
        inflation = load_inflation(region, data_config)
    if dynamic is None:
        dynamic = load_dynamic_info(region, data_config)

    dynamic_info = dynamic.get(symbol)
    if dynamic_info is None:
        raise MissingMetricError(f"{symbol}: stock not found in dynamic data")

    base_metrics, config = load_stock(symbol, region, data_config)
    return derive_metrics(base_metrics, config, dynamic_info, inflation, region, axis)


def analyze_region(
    region: str,
    data_config: DataConfig | None = None,
    axis: DateAxis = DEFAULT_DATE_AXIS,
) -> dict[str, StockResult]:
    """Derive every stock listed in the region's live price file.

    Stocks that fail are logged and skipped.

    Returns:
        Symbol -> StockResult for the stocks that derived successfully.
    """
    tax_rates(region)
    data_config = data_config or DataConfig()
    inflation = load_inflation(region, data_config)
    dynamic = load_dynamic_info(region, data_config)

    results: dict[str, StockResult] = {}
    for symbol in dynamic:
        try:
            results[symbol] = analyze_stock(
                symbol, region, data_config, axis,
                inflation=inflation, dynamic=dynamic,
            )
        except (DerivationError, FileNotFoundError, ValueError) as exc:
            logger.warning("%s: skipped, %s", symbol, exc)

    logger.info(
        "Region %s: derived %d / %d stocks", region, len(results), len(dynamic)
    )
    return results
