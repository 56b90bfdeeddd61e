"""Reporting date axis and date arithmetic.

The axis is a fixed, hand-maintained, descending list of period keys:
the synthetic ``"current"`` column, the last reported quarter-end, the
earlier quarter-ends of that calendar year, then fiscal year-ends. Every
annualisation and TTM calculation is anchored on it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date as dt_date
from typing import TYPE_CHECKING

from valuation.errors import DateOrderError, MissingDateDataError

if TYPE_CHECKING:
    from valuation.data.store import MetricStore

CURRENT = "current"


def parse_date(value: str) -> dt_date:
    """Parse an axis key such as ``"2025/9/30"`` or ``"2024-12-30"``.

    Raises:
        ValueError: For ``"current"`` or malformed keys.
    """
    parts = value.replace("-", "/").split("/")
    if len(parts) != 3:
        raise ValueError(f"Invalid date key {value!r}")
    year, month, day = (int(p) for p in parts)
    return dt_date(year, month, day)


def quarter_of(value: str) -> int:
    """Calendar quarter (1-4) of a date key."""
    return math.ceil(parse_date(value).month / 3)


@dataclass(frozen=True)
class DateAxis:
    """Named positions of the reporting date axis.

    Attributes:
        last_reported: Most recent reported quarter-end.
        current_year_quarters: Earlier quarter-ends in the same calendar
            year as ``last_reported``, newest first.
        last_finished_year: Last fully finished fiscal year-end.
        previous_finished_year: The fiscal year-end before that.
        older_year_ends: Remaining fiscal year-ends, newest first.
        current: Key of the synthetic live column.
    """

    last_reported: str
    current_year_quarters: tuple[str, ...]
    last_finished_year: str
    previous_finished_year: str
    older_year_ends: tuple[str, ...] = ()
    current: str = CURRENT

    def __post_init__(self) -> None:
        parsed = [parse_date(d) for d in self.dates[1:]]
        for newer, older in zip(parsed, parsed[1:]):
            if newer <= older:
                raise ValueError(
                    f"Date axis must be strictly descending: {self.dates}"
                )

        reported_year = parse_date(self.last_reported).year
        for quarter_end in self.current_year_quarters:
            if parse_date(quarter_end).year != reported_year:
                raise ValueError(
                    f"Quarter {quarter_end} is outside the last reported "
                    f"year {reported_year}"
                )

        for year_end in (
            self.last_finished_year,
            self.previous_finished_year,
            *self.older_year_ends,
        ):
            if parse_date(year_end).month != 12:
                raise ValueError(f"Year-end {year_end} is not in December")

    @property
    def dates(self) -> tuple[str, ...]:
        """All keys, newest first, ``current`` at index 0."""
        return (
            self.current,
            self.last_reported,
            *self.current_year_quarters,
            self.last_finished_year,
            self.previous_finished_year,
            *self.older_year_ends,
        )

    @property
    def last_quarter(self) -> int:
        """Quarter of the last reported period."""
        return quarter_of(self.last_reported)

    @property
    def year_to_date(self) -> tuple[str, ...]:
        """``current``, the last reported quarter and its earlier quarters."""
        return (self.current, self.last_reported, *self.current_year_quarters)

    @property
    def reported_year(self) -> int:
        return parse_date(self.last_reported).year


DEFAULT_DATE_AXIS = DateAxis(
    last_reported="2025/9/30",
    current_year_quarters=("2025/6/30", "2025/3/30"),
    last_finished_year="2024/12/30",
    previous_finished_year="2023/12/30",
    older_year_ends=("2022/12/30", "2021/12/30", "2020/12/30", "2019/12/30"),
)


def years_passed(
    from_date: str,
    to_date: str | None = None,
    axis: DateAxis = DEFAULT_DATE_AXIS,
) -> float:
    """Whole months between two date keys, expressed in years.

    Args:
        from_date: Start of the period.
        to_date: End of the period. Defaults to the last reported date.
        axis: Date axis supplying the default anchor.

    Raises:
        DateOrderError: If ``from_date`` falls after ``to_date``.
    """
    start = parse_date(from_date)
    end = parse_date(to_date if to_date is not None else axis.last_reported)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    years = months / 12
    if years < 0:
        raise DateOrderError(
            f"years_passed: {from_date} is after anchor date {end.isoformat()}"
        )
    return years


def available_dates(
    store: MetricStore,
    metric_name: str,
    axis: DateAxis = DEFAULT_DATE_AXIS,
) -> tuple[str, ...]:
    """Axis dates on which a metric has a non-null, non-zero value.

    Recently listed securities have no values for their earliest axis
    dates; those are dropped. Order follows the axis (newest first), so
    the earliest available date is the last element.

    Raises:
        MissingMetricError: If the metric is absent.
        MissingDateDataError: If no date carries a value.
    """
    metric = store.base(metric_name)
    dates = tuple(d for d in axis.dates if metric.value(d))
    if not dates:
        raise MissingDateDataError(f"{metric_name} has no available dates")
    return dates
