"""Data models for the derivation pipeline."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from valuation.errors import MissingDateDataError

CONFIG_ROW = "#config"

BASE_METRIC_NAMES: tuple[str, ...] = (
    "Cash & cash equivalents",
    "Short term liabilities",
    "Long term liabilities",
    "Equity",
    "Total assets",
    "Revenue",
    "Operating income",
    "Net income",
    "Price",
    "Dividend",
)

DERIVED_METRIC_NAMES: tuple[str, ...] = (
    "Yield",
    "Net debt / operating income",
    "Enterprise value",
    "EV / operating income",
    "EV / net income",
    "Market value / book value",
    "Selected growth",
)

TOTAL_GROWTH = "Total growth"
YEARLY_GROWTH = "Yearly growth"
TTM_GROWTH = "TTM growth"


class Undefined(str, Enum):
    """Growth or ratio that cannot be computed from non-positive inputs."""

    NEGATIVE = "negative"
    NOT_AVAILABLE = "N/A"


GrowthValue = float | Undefined


def _record_value(value: object) -> object:
    if isinstance(value, Undefined):
        return value.value
    return value


@dataclass
class Metric:
    """Per-date values plus growth summary for one metric.

    Attributes:
        name: Metric name, an exact-match identifier.
        values: Date key -> value.
        total_growth: Growth from the earliest available date to the
            last reported date.
        yearly_growth: ``total_growth`` annualised.
        ttm_growth: Trailing-twelve-months growth.
    """

    name: str
    values: dict[str, Any] = field(default_factory=dict)
    total_growth: GrowthValue | None = None
    yearly_growth: GrowthValue | None = None
    ttm_growth: GrowthValue | None = None

    def value(self, date: str) -> Any:
        """Value on a date, None when not reported."""
        return self.values.get(date)

    def to_record(self) -> dict[str, object]:
        """Flat record: metric name, one key per date, growth columns."""
        record: dict[str, object] = {"metricName": self.name}
        for date, value in self.values.items():
            record[date] = _record_value(value)
        for key, growth in (
            (TOTAL_GROWTH, self.total_growth),
            (YEARLY_GROWTH, self.yearly_growth),
            (TTM_GROWTH, self.ttm_growth),
        ):
            if growth is not None:
                record[key] = _record_value(growth)
        return record


@dataclass
class BaseMetric(Metric):
    """Raw financial statement line. Values are floats or None."""

    values: dict[str, float | None] = field(default_factory=dict)


@dataclass
class DerivedMetric(Metric):
    """Ratio or aggregate computed by the pipeline, never read from input."""

    values: dict[str, float | Undefined] = field(default_factory=dict)


@dataclass
class StockConfig:
    """Per-security parameters from the ``#config`` pseudo-row.

    Attributes:
        symbol: Stock ticker symbol.
        outstanding_shares: Outstanding share count.
        trim_digit: Scale factor by which raw monetary values were divided
            before storage.
        selected_growth_metrics: Base metrics averaged into Selected growth.
    """

    symbol: str
    outstanding_shares: float
    trim_digit: float
    selected_growth_metrics: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.selected_growth_metrics:
            raise ValueError(f"{self.symbol}: empty selected growth metrics")
        if self.trim_digit == 0:
            raise ValueError(f"{self.symbol}: trim digit must be non-zero")

    @classmethod
    def from_row(cls, symbol: str, cells: Sequence[object]) -> StockConfig:
        """Build from the cells of a ``#config`` row.

        Cells 2, 3 and 4 (counting the metric name cell as 0) hold the
        share count, trim digit and ``|``-separated growth basket.
        """
        if len(cells) < 5:
            raise ValueError(
                f"{symbol}: config row has {len(cells)} cells, expected 5"
            )
        metrics = tuple(
            name.strip() for name in str(cells[4]).split("|") if name.strip()
        )
        return cls(
            symbol=symbol,
            outstanding_shares=float(cells[2]),  # type: ignore[arg-type]
            trim_digit=float(cells[3]),  # type: ignore[arg-type]
            selected_growth_metrics=metrics,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "stockSymbol": self.symbol,
            "outstandingShares": self.outstanding_shares,
            "trimDigit": self.trim_digit,
            "selectedGrowthMetrics": list(self.selected_growth_metrics),
        }


@dataclass(frozen=True)
class Inflation:
    """Inflation rates reported for one date (decimals)."""

    date: str
    mom: float
    qoq: float
    yoy: float
    ytd: float
    accumulative: float


class InflationSeries:
    """Regional inflation records addressed by exact date key.

    Read-only after construction, safe to share between derivations.
    """

    def __init__(self, records: Iterable[Inflation]) -> None:
        self._by_date: dict[str, Inflation] = {}
        for record in records:
            if record.date in self._by_date:
                raise ValueError(f"Duplicate inflation date {record.date}")
            self._by_date[record.date] = record

    def get(self, date: str) -> Inflation:
        """Inflation record for a date.

        Raises:
            MissingDateDataError: If the date has no record.
        """
        record = self._by_date.get(date)
        if record is None:
            raise MissingDateDataError(f"Inflation data not found for date {date}")
        return record

    def __contains__(self, date: object) -> bool:
        return date in self._by_date

    def __len__(self) -> int:
        return len(self._by_date)


@dataclass
class DynamicInfo:
    """Live information for one stock, supplied by the price feed."""

    price: float
    notes: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not math.isfinite(self.price):
            raise ValueError(f"Non-finite live price {self.price}")


@dataclass
class StockResult:
    """Derivation output for one stock."""

    base_metrics: list[BaseMetric]
    derived_metrics: list[DerivedMetric]
    config: StockConfig
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "baseMetrics": [m.to_record() for m in self.base_metrics],
            "derivedMetrics": [m.to_record() for m in self.derived_metrics],
            "stockConfig": self.config.to_dict(),
            "notes": list(self.notes),
        }
