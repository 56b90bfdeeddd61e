"""Per-derivation context passed through the pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass

from valuation.config import TaxRates
from valuation.dates import DateAxis, available_dates
from valuation.data.models import InflationSeries, StockConfig
from valuation.data.store import MetricStore
from valuation.taxes import tax_rates


@dataclass(frozen=True)
class DerivationContext:
    """Everything a derivation step may read.

    Owned by a single ``derive_metrics`` call. Steps read base metrics and
    the derived metrics produced before them through ``store``.

    Attributes:
        store: Metric store of this derivation.
        config: Stock configuration.
        inflation: Regional inflation series.
        taxes: Tax rates for the region.
        axis: Reporting date axis.
        equity_dates: Dates with a reported Equity value, newest first.
        price_dates: Dates with a price, newest first.
    """

    store: MetricStore
    config: StockConfig
    inflation: InflationSeries
    taxes: TaxRates
    axis: DateAxis
    equity_dates: tuple[str, ...]
    price_dates: tuple[str, ...]

    @classmethod
    def build(
        cls,
        store: MetricStore,
        config: StockConfig,
        inflation: InflationSeries,
        region: str,
        axis: DateAxis,
    ) -> DerivationContext:
        """Resolve taxes and available dates for a populated store."""
        return cls(
            store=store,
            config=config,
            inflation=inflation,
            taxes=tax_rates(region),
            axis=axis,
            equity_dates=available_dates(store, "Equity", axis),
            price_dates=available_dates(store, "Price", axis),
        )

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def earliest_equity_date(self) -> str:
        return self.equity_dates[-1]

    @property
    def earliest_price_date(self) -> str:
        return self.price_dates[-1]

    def market_value(self, price: float) -> float:
        """Market value on the same trimmed scale as the statement values."""
        return price * self.config.outstanding_shares / self.config.trim_digit
