"""Data models, metric store and local file loading."""

from __future__ import annotations

from valuation.data.loader import (
    load_daily_histories,
    load_daily_prices,
    load_dynamic_info,
    load_inflation,
    load_stock,
)
from valuation.data.models import (
    BaseMetric,
    DerivedMetric,
    DynamicInfo,
    Inflation,
    InflationSeries,
    StockConfig,
    StockResult,
    Undefined,
)
from valuation.data.store import MetricStore

__all__ = [
    "BaseMetric",
    "DerivedMetric",
    "DynamicInfo",
    "Inflation",
    "InflationSeries",
    "MetricStore",
    "StockConfig",
    "StockResult",
    "Undefined",
    "load_daily_histories",
    "load_daily_prices",
    "load_dynamic_info",
    "load_inflation",
    "load_stock",
]
