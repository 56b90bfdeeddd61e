"""Local data file loading (stock sheets, inflation, live prices, daily series)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from valuation.config import DAILY_SYMBOLS, DataConfig
from valuation.data.models import (
    BASE_METRIC_NAMES,
    CONFIG_ROW,
    BaseMetric,
    DynamicInfo,
    Inflation,
    InflationSeries,
    StockConfig,
)

logger = logging.getLogger(__name__)

_METRIC_NAME_COLUMN = "metricName"
_INFLATION_COLUMNS = ("date", "mom", "qoq", "yoy", "ytd", "accumulative")
_DAILY_COLUMNS = ("date", "value")


def _require_columns(df: pd.DataFrame, columns: tuple[str, ...], path: Path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing columns {missing}")


def _to_optional_float(value: object) -> float | None:
    """Convert a parsed cell to float, None for blanks and NaN."""
    if value is None or pd.isna(value):
        return None
    return float(value)


def load_stock(
    symbol: str, region: str, config: DataConfig | None = None
) -> tuple[list[BaseMetric], StockConfig]:
    """Load a stock's statement sheet.

    The sheet is a TSV with a ``metricName`` column followed by one column
    per date key. A ``#config`` pseudo-row carries the share count, trim
    digit and growth basket in cells 2, 3 and 4.

    Args:
        symbol: Stock ticker symbol.
        region: Region code (sub-directory of the stocks directory).
        config: Data location. Defaults to ``DataConfig()``.

    Returns:
        Tuple of (base metrics in sheet order, stock configuration).

    Raises:
        FileNotFoundError: If the sheet does not exist.
        ValueError: If the sheet has no ``#config`` row or is malformed.
    """
    config = config or DataConfig()
    path = config.stocks_dir / region / f"{symbol}.tsv"

    df = pd.read_csv(path, sep="\t", dtype=str, skip_blank_lines=True)
    _require_columns(df, (_METRIC_NAME_COLUMN,), path)
    df[_METRIC_NAME_COLUMN] = df[_METRIC_NAME_COLUMN].str.strip()

    config_rows = df[df[_METRIC_NAME_COLUMN] == CONFIG_ROW]
    if config_rows.empty:
        raise ValueError(f"{path}: no {CONFIG_ROW} row")
    stock_config = StockConfig.from_row(symbol, config_rows.iloc[0].tolist())

    date_columns = [c for c in df.columns if c != _METRIC_NAME_COLUMN]
    rows = df[df[_METRIC_NAME_COLUMN] != CONFIG_ROW].set_index(_METRIC_NAME_COLUMN)
    numeric = rows[date_columns].apply(pd.to_numeric, errors="coerce")

    metrics: list[BaseMetric] = []
    for name, row in numeric.iterrows():
        if name not in BASE_METRIC_NAMES:
            logger.debug("%s: ignoring sheet row %r", symbol, name)
            continue
        values = {date: _to_optional_float(row[date]) for date in date_columns}
        metrics.append(BaseMetric(name=str(name), values=values))

    logger.info(
        "%s: loaded %d metrics over %d dates from %s",
        symbol, len(metrics), len(date_columns), path.name,
    )
    return metrics, stock_config


def load_inflation(region: str, config: DataConfig | None = None) -> InflationSeries:
    """Load a region's inflation CSV (date, mom, qoq, yoy, ytd, accumulative).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If columns are missing or dates repeat.
    """
    config = config or DataConfig()
    path = config.inflation_dir / f"{region}.csv"

    df = pd.read_csv(path, dtype={"date": str})
    _require_columns(df, _INFLATION_COLUMNS, path)

    records = [
        Inflation(
            date=row.date.strip(),
            mom=float(row.mom),
            qoq=float(row.qoq),
            yoy=float(row.yoy),
            ytd=float(row.ytd),
            accumulative=float(row.accumulative),
        )
        for row in df.itertuples(index=False)
    ]
    logger.info("%s: loaded %d inflation records", region, len(records))
    return InflationSeries(records)


def load_dynamic_info(
    region: str, config: DataConfig | None = None
) -> dict[str, DynamicInfo]:
    """Load live prices and notes keyed by stock symbol.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If an entry has no price.
    """
    config = config or DataConfig()
    path = config.dynamic_dir / f"{region}.json"

    with path.open(encoding="utf-8") as f:
        raw = json.load(f)

    result: dict[str, DynamicInfo] = {}
    for symbol, entry in raw.items():
        if entry.get("price") is None:
            raise ValueError(f"{path}: {symbol} has no price")
        result[symbol] = DynamicInfo(
            price=float(entry["price"]),
            notes=list(entry.get("notes") or []),
        )
    return result


def load_daily_prices(
    symbol: str, config: DataConfig | None = None
) -> pd.DataFrame:
    """Load one daily price series as a (date, value) frame in file order."""
    config = config or DataConfig()
    path = config.daily_dir / f"{symbol}.csv"

    df = pd.read_csv(path, dtype={"date": str})
    _require_columns(df, _DAILY_COLUMNS, path)
    df = df[list(_DAILY_COLUMNS)].copy()
    df["date"] = df["date"].str.strip()
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    return df


def load_daily_histories(config: DataConfig | None = None) -> dict[str, pd.DataFrame]:
    """Load every series used by the cumulative returns calculator."""
    return {symbol: load_daily_prices(symbol, config) for symbol in DAILY_SYMBOLS}
