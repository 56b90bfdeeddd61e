"""Tests for valuation.analysis.growth (nominal growth)."""

from __future__ import annotations

import pytest

from valuation.analysis.context import DerivationContext
from valuation.analysis.growth import compute_growths, ttm_start_value
from valuation.config import GROWTH_APPLIED_METRICS
from valuation.dates import DEFAULT_DATE_AXIS, DateAxis
from valuation.data.models import BaseMetric, InflationSeries, StockConfig, Undefined
from valuation.data.store import MetricStore
from valuation.errors import EndOfYearNotImplementedError, MissingDateDataError


def _rebuild(
    store: MetricStore, config: StockConfig, inflation: InflationSeries
) -> DerivationContext:
    return DerivationContext.build(store, config, inflation, "tr", DEFAULT_DATE_AXIS)


class TestComputeGrowths:

    @pytest.mark.parametrize(
        "name,total,ttm",
        [
            # (240 - 100) / 100; TTM start 150 + 50 / 4 * 3 = 187.5
            ("Equity", 1.4, 0.28),
            # TTM start 1100 + 400 / 4 * 3 = 1400
            ("Revenue", 1.0, 0.42857),
            ("Total assets", 1.0, 0.33333),
            # TTM start 115
            ("Operating income", 0.125, -0.21739),
        ],
    )
    def test_nominal_growth(
        self, ctx: DerivationContext, name: str, total: float, ttm: float
    ) -> None:
        compute_growths(ctx)
        metric = ctx.store.base(name)

        assert metric.total_growth == total
        assert metric.ttm_growth == ttm
        assert metric.yearly_growth is None

    def test_negative_start_value(self, ctx: DerivationContext) -> None:
        compute_growths(ctx)
        net_income = ctx.store.base("Net income")

        # first value -50
        assert net_income.total_growth == Undefined.NEGATIVE
        # TTM start 40 + 20 / 4 * 3 = 55
        assert net_income.ttm_growth == -0.09091

    def test_negative_ttm_start_value(
        self, store: MetricStore, stock_config: StockConfig, inflation: InflationSeries
    ) -> None:
        store.base("Net income").values["2023/12/30"] = -100.0
        store.base("Net income").values["2024/12/30"] = 20.0
        compute_growths(_rebuild(store, stock_config, inflation))

        # start -100 + 120 / 4 * 3 = -10
        assert store.base("Net income").ttm_growth == Undefined.NEGATIVE

    def test_price_and_balance_items_untouched(self, ctx: DerivationContext) -> None:
        compute_growths(ctx)

        for name in ("Price", "Cash & cash equivalents", "Dividend"):
            assert ctx.store.base(name).total_growth is None
        assert all(
            ctx.store.base(name).total_growth is not None
            for name in GROWTH_APPLIED_METRICS
        )

    def test_missing_first_value(
        self, store: MetricStore, stock_config: StockConfig, inflation: InflationSeries
    ) -> None:
        del store.base("Revenue").values["2022/12/30"]
        with pytest.raises(MissingDateDataError, match="Revenue first value None"):
            compute_growths(_rebuild(store, stock_config, inflation))

    def test_missing_finished_year(
        self, store: MetricStore, stock_config: StockConfig, inflation: InflationSeries
    ) -> None:
        del store.base("Total assets").values["2023/12/30"]
        with pytest.raises(MissingDateDataError, match="both finished years"):
            compute_growths(_rebuild(store, stock_config, inflation))


class TestTtmStartValue:

    def test_interpolates_by_quarter(self, ctx: DerivationContext) -> None:
        equity = ctx.store.base("Equity")
        assert ttm_start_value(equity, ctx) == 187.5

    def test_q4_not_implemented(
        self, stock_config: StockConfig, inflation: InflationSeries
    ) -> None:
        axis = DateAxis(
            last_reported="2024/12/30",
            current_year_quarters=("2024/9/30", "2024/6/30", "2024/3/30"),
            last_finished_year="2023/12/30",
            previous_finished_year="2022/12/30",
        )
        values = {"2024/12/30": 10.0, "2023/12/30": 8.0, "2022/12/30": 6.0}
        store = MetricStore(
            [BaseMetric(name="Price", values=dict(values))]
            + [BaseMetric(name=name, values=dict(values)) for name in GROWTH_APPLIED_METRICS]
        )
        store.populate_current(12.0, axis)
        ctx = DerivationContext.build(store, stock_config, inflation, "tr", axis)

        with pytest.raises(EndOfYearNotImplementedError):
            compute_growths(ctx)
