"""CLI entry point for the equity valuation metrics."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from valuation.analysis.cumulative_returns import compute_cumulative_returns, to_records
from valuation.analysis.money_fund import compute_money_fund_yield
from valuation.config import BASELINE_DATE, REGIONS, DataConfig, MoneyFundConfig
from valuation.data import load_daily_histories, load_inflation
from valuation.runner import analyze_region, analyze_stock

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Local data directory (default: $VALUATION_DATA_DIR or local-data)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON to this file instead of stdout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="valuation",
        description="Equity valuation metrics from local statement data",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # stock command
    stock_parser = subparsers.add_parser(
        "stock", help="Derive metrics for a single stock"
    )
    stock_parser.add_argument("symbol", help="Stock ticker symbol")
    stock_parser.add_argument("--region", choices=REGIONS, default="tr")
    _add_common_arguments(stock_parser)

    # region command
    region_parser = subparsers.add_parser(
        "region", help="Derive metrics for every stock of a region"
    )
    region_parser.add_argument("region", choices=REGIONS)
    _add_common_arguments(region_parser)

    # cumulative-returns command
    returns_parser = subparsers.add_parser(
        "cumulative-returns", help="Benchmark basket returns since the baseline"
    )
    returns_parser.add_argument(
        "--baseline",
        default=BASELINE_DATE,
        help=f"Observation start date (default: {BASELINE_DATE})",
    )
    _add_common_arguments(returns_parser)

    # money-fund command
    fund_parser = subparsers.add_parser(
        "money-fund", help="Real net TTM yield of the income fund"
    )
    fund_parser.add_argument(
        "--statement-price",
        action="store_true",
        help="Use the statement-date fund price instead of the live price",
    )
    _add_common_arguments(fund_parser)

    return parser.parse_args(argv)


def _data_config(args: argparse.Namespace) -> DataConfig:
    if args.data_dir is not None:
        return DataConfig(data_dir=args.data_dir)
    return DataConfig()


def _write_json(payload: object, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    logger.info("Written to %s", output)


def run_stock(args: argparse.Namespace) -> None:
    """Execute the stock command."""
    result = analyze_stock(args.symbol, args.region, _data_config(args))
    _write_json(result.to_dict(), args.output)


def run_region(args: argparse.Namespace) -> None:
    """Execute the region command. Failing stocks are left out."""
    results = analyze_region(args.region, _data_config(args))
    _write_json(
        {symbol: result.to_dict() for symbol, result in results.items()},
        args.output,
    )


def run_cumulative_returns(args: argparse.Namespace) -> None:
    """Execute the cumulative-returns command."""
    histories = load_daily_histories(_data_config(args))
    frame = compute_cumulative_returns(histories, baseline_date=args.baseline)
    _write_json(to_records(frame), args.output)


def run_money_fund(args: argparse.Namespace) -> None:
    """Execute the money-fund command."""
    fund = MoneyFundConfig()
    inflation = load_inflation(fund.region, _data_config(args))
    value = compute_money_fund_yield(
        inflation, fund, live=not args.statement_price,
    )
    _write_json({"region": fund.region, "yield": value}, args.output)


_COMMANDS = {
    "stock": run_stock,
    "region": run_region,
    "cumulative-returns": run_cumulative_returns,
    "money-fund": run_money_fund,
}


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).
    """
    args = _parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    _COMMANDS[args.command](args)


if __name__ == "__main__":
    main()
