"""In-memory metric store owned by a single derivation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from valuation.dates import DEFAULT_DATE_AXIS, DateAxis
from valuation.data.models import (
    BASE_METRIC_NAMES,
    DERIVED_METRIC_NAMES,
    BaseMetric,
    DerivedMetric,
)
from valuation.errors import MissingMetricError

logger = logging.getLogger(__name__)

_LIVE_METRICS = ("Price", "Dividend")


class MetricStore:
    """Base metrics keyed by name plus the derived metrics built so far.

    Base metrics are held by reference, so growth fields written during
    derivation are visible on the caller's objects.
    """

    def __init__(self, base_metrics: Iterable[BaseMetric]) -> None:
        self._base: dict[str, BaseMetric] = {}
        for metric in base_metrics:
            if metric.name not in BASE_METRIC_NAMES:
                raise ValueError(f"Unknown base metric {metric.name!r}")
            if metric.name in self._base:
                raise ValueError(f"Duplicate base metric {metric.name!r}")
            self._base[metric.name] = metric
        self._derived: dict[str, DerivedMetric] = {}

    @property
    def base_metrics(self) -> list[BaseMetric]:
        return list(self._base.values())

    @property
    def derived_metrics(self) -> list[DerivedMetric]:
        return list(self._derived.values())

    def base(self, name: str) -> BaseMetric:
        """Base metric by name.

        Raises:
            MissingMetricError: If absent.
        """
        metric = self._base.get(name)
        if metric is None:
            raise MissingMetricError(f"{name} not found in metrics")
        return metric

    def find_base(self, name: str) -> BaseMetric | None:
        return self._base.get(name)

    def derived(self, name: str) -> DerivedMetric:
        """Derived metric by name.

        Raises:
            MissingMetricError: If it has not been computed yet.
        """
        metric = self._derived.get(name)
        if metric is None:
            raise MissingMetricError(f"{name} not found in derived metrics")
        return metric

    def add_derived(self, metric: DerivedMetric) -> None:
        if metric.name not in DERIVED_METRIC_NAMES:
            raise ValueError(f"Unknown derived metric {metric.name!r}")
        if metric.name in self._derived:
            raise ValueError(f"Derived metric {metric.name!r} already computed")
        self._derived[metric.name] = metric

    def populate_current(
        self, price: float, axis: DateAxis = DEFAULT_DATE_AXIS
    ) -> None:
        """Fill the ``current`` column.

        Statement metrics carry their last reported value forward. Price
        takes the live price instead. Dividend is left untouched.

        Raises:
            MissingMetricError: If the Price metric is absent.
        """
        price_metric = self.base("Price")

        for metric in self._base.values():
            if metric.name in _LIVE_METRICS:
                continue
            metric.values[axis.current] = metric.value(axis.last_reported)

        price_metric.values[axis.current] = price
        logger.debug("Current column populated, live price %.4f", price)
