"""Shared fixtures: one sample stock on the default date axis.

Shares 1000 and trim digit 100, so market value = price * 10.
"""

from __future__ import annotations

import pytest

from valuation.analysis.context import DerivationContext
from valuation.dates import DEFAULT_DATE_AXIS
from valuation.data.models import (
    BaseMetric,
    DynamicInfo,
    Inflation,
    InflationSeries,
    StockConfig,
)
from valuation.data.store import MetricStore

LIVE_PRICE = 39.6

_SAMPLE_VALUES: dict[str, dict[str, float]] = {
    "Cash & cash equivalents": {
        "2025/9/30": 50.0, "2025/6/30": 20.0, "2025/3/30": 20.0,
        "2024/12/30": 20.0, "2023/12/30": 10.0, "2022/12/30": 10.0,
    },
    "Short term liabilities": {
        "2025/9/30": 30.0, "2025/6/30": 30.0, "2025/3/30": 30.0,
        "2024/12/30": 30.0, "2023/12/30": 30.0, "2022/12/30": 30.0,
    },
    "Long term liabilities": {"2025/9/30": 40.0, "2025/6/30": 40.0},
    "Equity": {
        "2025/9/30": 240.0, "2025/6/30": 220.0, "2025/3/30": 210.0,
        "2024/12/30": 200.0, "2023/12/30": 150.0, "2022/12/30": 100.0,
    },
    "Total assets": {
        "2025/9/30": 1000.0, "2025/6/30": 900.0, "2025/3/30": 850.0,
        "2024/12/30": 800.0, "2023/12/30": 600.0, "2022/12/30": 500.0,
    },
    "Revenue": {
        "2025/9/30": 2000.0, "2025/6/30": 1700.0, "2025/3/30": 1600.0,
        "2024/12/30": 1500.0, "2023/12/30": 1100.0, "2022/12/30": 1000.0,
    },
    "Operating income": {
        "2025/9/30": 90.0, "2025/6/30": 60.0, "2025/3/30": 0.0,
        "2024/12/30": 120.0, "2023/12/30": 100.0, "2022/12/30": 80.0,
    },
    "Net income": {
        "2025/9/30": 50.0, "2025/6/30": 35.0, "2025/3/30": 20.0,
        "2024/12/30": 60.0, "2023/12/30": 40.0, "2022/12/30": -50.0,
    },
    "Price": {
        "2025/9/30": 33.0, "2025/6/30": 33.0, "2025/3/30": 25.0,
        "2024/12/30": 25.0, "2023/12/30": 20.0, "2022/12/30": 10.0,
    },
    "Dividend": {"2024/12/30": 0.02},
}

# (date, mom, qoq, yoy, ytd, accumulative)
_INFLATION_ROWS = [
    ("2025/9/30", 0.01, 0.0, 0.5, 0.2, 3.0),
    ("2025/6/30", 0.01, 0.1, 0.4, 0.15, 2.8),
    ("2025/3/30", 0.01, 0.05, 0.38, 0.05, 2.6),
    ("2024/12/30", 0.01, 0.08, 0.25, 0.25, 2.4),
    ("2023/12/30", 0.02, 0.1, 0.25, 0.25, 1.9),
    ("2022/12/30", 0.03, 0.2, 0.6, 0.6, 1.3),
]


@pytest.fixture
def sample_values() -> dict[str, dict[str, float]]:
    return {name: dict(values) for name, values in _SAMPLE_VALUES.items()}


@pytest.fixture
def base_metrics(sample_values: dict[str, dict[str, float]]) -> list[BaseMetric]:
    return [
        BaseMetric(name=name, values=values)  # type: ignore[arg-type]
        for name, values in sample_values.items()
    ]


@pytest.fixture
def stock_config() -> StockConfig:
    return StockConfig(
        symbol="SAMPLE",
        outstanding_shares=1000.0,
        trim_digit=100.0,
        selected_growth_metrics=("Equity", "Revenue", "Total assets"),
    )


@pytest.fixture
def inflation_records() -> list[Inflation]:
    return [Inflation(*row) for row in _INFLATION_ROWS]


@pytest.fixture
def inflation(inflation_records: list[Inflation]) -> InflationSeries:
    return InflationSeries(inflation_records)


@pytest.fixture
def dynamic_info() -> DynamicInfo:
    return DynamicInfo(price=LIVE_PRICE, notes=["sample note"])


@pytest.fixture
def store(base_metrics: list[BaseMetric]) -> MetricStore:
    metric_store = MetricStore(base_metrics)
    metric_store.populate_current(LIVE_PRICE)
    return metric_store


@pytest.fixture
def ctx(
    store: MetricStore, stock_config: StockConfig, inflation: InflationSeries
) -> DerivationContext:
    return DerivationContext.build(
        store, stock_config, inflation, "tr", DEFAULT_DATE_AXIS
    )
