"""Derivation configuration constants and dataclasses."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Digits kept at every derivation boundary. Suppresses floating-point
# drift before values feed later compounding steps.
ROUND_DIGITS: int = 5

# Base metrics that receive Total / TTM / Yearly growth.
GROWTH_APPLIED_METRICS: tuple[str, ...] = (
    "Equity",
    "Total assets",
    "Revenue",
    "Operating income",
    "Net income",
)

# Observation start date for cumulative returns.
BASELINE_DATE: str = "2024-12-30"

# Daily price histories used by the cumulative returns calculator.
DAILY_SYMBOLS: tuple[str, ...] = ("USDTRY", "EURTRY", "BGP", "GOLD")


@dataclass(frozen=True)
class TaxRates:
    """Withholding and dividend tax rates for one region.

    Attributes:
        withholding_tax: Tax on realised capital gains (decimal).
        dividend_tax: Tax withheld from dividends (decimal).
    """

    withholding_tax: float
    dividend_tax: float


TAX_RATES: dict[str, TaxRates] = {
    "tr": TaxRates(withholding_tax=0.175, dividend_tax=0.15),
    "us": TaxRates(withholding_tax=0.24, dividend_tax=0.20),
}

REGIONS: tuple[str, ...] = tuple(TAX_RATES)


@dataclass(frozen=True)
class MoneyFundConfig:
    """Income fund prices used for the money-fund benchmark yield.

    Attributes:
        previous_ttm_price: Fund price one year before the last reported date.
        ttm_price: Fund price at the last reported date.
        live_price: Latest observed fund price.
        region: Region whose withholding tax and inflation apply.
    """

    previous_ttm_price: float = 2.946158
    ttm_price: float = 4.639166
    live_price: float = 5.008617
    region: str = "tr"


def _default_data_dir() -> Path:
    return Path(os.environ.get("VALUATION_DATA_DIR", "local-data"))


@dataclass
class DataConfig:
    """Location of the local data files."""

    data_dir: Path = field(default_factory=_default_data_dir)

    @property
    def stocks_dir(self) -> Path:
        return self.data_dir / "stocks"

    @property
    def inflation_dir(self) -> Path:
        return self.data_dir / "inflation"

    @property
    def dynamic_dir(self) -> Path:
        return self.data_dir / "stocks-dynamic"

    @property
    def daily_dir(self) -> Path:
        return self.data_dir / "daily"
