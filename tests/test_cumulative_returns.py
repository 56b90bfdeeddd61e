"""Tests for valuation.analysis.cumulative_returns."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from valuation.analysis.cumulative_returns import (
    OUTPUT_COLUMNS,
    compute_cumulative_returns,
    to_records,
)
from valuation.errors import MissingDateDataError

BASELINE = "2024-12-30"


def _series(values: dict[str, float]) -> pd.DataFrame:
    return pd.DataFrame({"date": list(values), "value": list(values.values())})


def _make_histories(**overrides: dict[str, float]) -> dict[str, pd.DataFrame]:
    defaults = {
        "USDTRY": {
            "2024-12-27": 34.0,
            "2024-12-30": 35.0,
            "2024-12-31": 35.35,
            "2025-01-02": 36.4,
        },
        "EURTRY": {
            "2024-12-30": 36.0,
            "2024-12-31": 36.72,
            "2025-01-02": 37.44,
            "2025-01-03": 38.0,
        },
        "BGP": {"2024-12-30": 2.0, "2024-12-31": 2.02, "2025-01-02": 2.1},
        "GOLD": {"2024-12-30": 3000.0, "2024-12-31": 3030.0, "2025-01-02": 2970.0},
    }
    defaults.update(overrides)
    return {symbol: _series(values) for symbol, values in defaults.items()}


class TestComputeCumulativeReturns:

    def test_columns_and_dates(self) -> None:
        result = compute_cumulative_returns(_make_histories(), BASELINE)

        assert tuple(result.columns) == OUTPUT_COLUMNS
        # reference is USDTRY after the baseline, baseline itself excluded
        assert list(result.index) == ["2024-12-31", "2025-01-02"]

    def test_currency_returns(self) -> None:
        result = compute_cumulative_returns(_make_histories(), BASELINE)

        assert result.loc["2024-12-31", "usdtry"] == pytest.approx(0.01)
        assert result.loc["2025-01-02", "usdtry"] == pytest.approx(0.04)
        assert result.loc["2024-12-31", "eurtry"] == pytest.approx(0.02)
        assert result.loc["2025-01-02", "eurtry"] == pytest.approx(0.04)

    def test_mixed_is_geometric_mean(self) -> None:
        result = compute_cumulative_returns(_make_histories(), BASELINE)

        assert result.loc["2024-12-31", "mixed"] == pytest.approx(
            math.sqrt(1.01 * 1.02) - 1
        )
        assert result.loc["2025-01-02", "mixed"] == pytest.approx(0.04)

    def test_fund_net_of_withholding_tax(self) -> None:
        result = compute_cumulative_returns(_make_histories(), BASELINE)

        # 1% and 5% gross, 17.5% withholding
        assert result.loc["2024-12-31", "bgp"] == pytest.approx(0.00825)
        assert result.loc["2025-01-02", "bgp"] == pytest.approx(0.04125)

    def test_custom_withholding_tax(self) -> None:
        result = compute_cumulative_returns(
            _make_histories(), BASELINE, withholding_tax=0.0
        )
        assert result.loc["2025-01-02", "bgp"] == pytest.approx(0.05)

    def test_gold_can_fall(self) -> None:
        result = compute_cumulative_returns(_make_histories(), BASELINE)
        assert result.loc["2025-01-02", "gold"] == pytest.approx(-0.01)

    def test_missing_reference_date(self) -> None:
        histories = _make_histories(
            GOLD={"2024-12-30": 3000.0, "2025-01-02": 2970.0}
        )
        with pytest.raises(MissingDateDataError, match="2024-12-31"):
            compute_cumulative_returns(histories, BASELINE)

    def test_missing_baseline(self) -> None:
        histories = _make_histories(BGP={"2024-12-31": 2.02, "2025-01-02": 2.1})
        with pytest.raises(MissingDateDataError, match="Baseline date"):
            compute_cumulative_returns(histories, BASELINE)

    def test_missing_series(self) -> None:
        histories = _make_histories()
        del histories["GOLD"]
        with pytest.raises(ValueError, match="GOLD"):
            compute_cumulative_returns(histories, BASELINE)

    def test_duplicate_dates(self) -> None:
        histories = _make_histories()
        histories["BGP"] = pd.concat([histories["BGP"], histories["BGP"].tail(1)])
        with pytest.raises(ValueError, match="duplicate dates"):
            compute_cumulative_returns(histories, BASELINE)


class TestToRecords:

    def test_shape(self) -> None:
        records = to_records(compute_cumulative_returns(_make_histories(), BASELINE))

        assert list(records) == list(OUTPUT_COLUMNS)
        assert records["usdtry"][0]["date"] == "2024-12-31"
        assert records["usdtry"][0]["value"] == pytest.approx(0.01)
        assert len(records["gold"]) == 2
