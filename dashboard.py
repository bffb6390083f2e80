"""
REIT Dashboard (terminal)

Screens, compares and values REITs through the REIT Analytics API.

Usage:
    python dashboard.py list                                   # All REITs, by ticker
    python dashboard.py list --sector Retail --min-yield 4     # Filtered screen
    python dashboard.py list --sort-by dividendYield --order desc --excel screen.xlsx
    python dashboard.py show O                                 # Details + price history stats
    python dashboard.py value O --discount 0.08 --growth 0.02  # DDM valuation + sensitivity grid
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import requests

sys.path.append(str(Path(__file__).parent))

from api.client_example import ReitDataClient
from api.config import settings
from utils import log
from utils.excel_formatter import ExcelFormatter

logger = log.setup_verbose_logging("dashboard")


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def reits_frame(reits: List[Dict]) -> pd.DataFrame:
    """REIT snapshots as a DataFrame with display column names."""
    columns = {
        "ticker": "Ticker",
        "name": "Name",
        "sector": "Sector",
        "dividendYield": "Dividend Yield (%)",
        "totalReturn1Y": "1Y Total Return (%)",
    }
    df = pd.DataFrame(reits, columns=list(columns))
    return df.rename(columns=columns)


def sensitivity_frame(grid: Dict, field: str = "fairValue") -> pd.DataFrame:
    """
    Pivot a sensitivity grid into discount rate rows by growth rate columns.
    Undefined cells (r <= g) are left empty.
    """
    data = {}
    for g_idx, g in enumerate(grid["growthRates"]):
        data[f"g={g:.1%}"] = [row["cells"][g_idx][field] for row in grid["rows"]]
    index = [f"r={row['discountRate']:.1%}" for row in grid["rows"]]
    return pd.DataFrame(data, index=pd.Index(index, name="Discount rate"))


def history_stats(history: List[Dict]) -> Optional[Dict]:
    """First/last/min/max price and change over the whole series."""
    if not history:
        return None
    prices = pd.Series([p["price"] for p in history], index=[p["date"] for p in history])
    first, last = prices.iloc[0], prices.iloc[-1]
    return {
        "start_date": prices.index[0],
        "end_date": prices.index[-1],
        "first_price": float(first),
        "last_price": float(last),
        "change_pct": float((last - first) / first * 100),
        "min_price": float(prices.min()),
        "max_price": float(prices.max()),
        "points": len(prices),
    }


def _api_error(e: requests.HTTPError) -> str:
    """Pull the API's error message out of a failed response."""
    try:
        return e.response.json().get("error", str(e))
    except (ValueError, AttributeError):
        return str(e)


def _blank_missing(df: pd.DataFrame) -> pd.DataFrame:
    # openpyxl writes NaN literally; empty cells read better
    return df.astype(object).where(df.notna(), None)


def _export(sheets: Dict[str, pd.DataFrame], path: str) -> str:
    formatter = ExcelFormatter()
    for name, df in sheets.items():
        formatter.add_to_sheet(df, name, transform_fn=_blank_missing)
    location = os.path.dirname(path) or None
    return formatter.save(os.path.basename(path), location)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_list(client: ReitDataClient, args) -> int:
    log.header("REIT Screener")
    reits = client.list_reits(
        sector=args.sector,
        min_dividend_yield=args.min_yield,
        sort_by=args.sort_by,
        order=args.order
    )
    summary = client.get_summary(sector=args.sector, min_dividend_yield=args.min_yield)
    log.info(f"{len(reits)} REITs from {client.api_url}")
    logger.debug(f"list: {len(reits)} REITs (sector={args.sector}, min_yield={args.min_yield})")

    best = summary.get("bestByReturn")
    log.summary_table("Overview", [
        ("REITs", str(summary["totalReits"])),
        ("Avg dividend yield", f"{summary['avgDividendYield']:.2f}%"),
        ("Best 1Y return", f"{best['ticker']} ({best['totalReturn1Y']:+.2f}%)" if best else "-"),
    ])

    if not reits:
        log.warn("No REITs match the current filters")
        return 0

    log.table(
        ["Ticker", "Name", "Sector", "Yield", "1Y Return"],
        [
            [r["ticker"], r["name"], r["sector"], f"{r['dividendYield']:.2f}%", f"{r['totalReturn1Y']:+.2f}%"]
            for r in reits
        ]
    )

    if args.excel:
        path = _export({"REITs": reits_frame(reits)}, args.excel)
        log.ok(f"Saved {len(reits)} REITs to {path}")
    return 0


def cmd_show(client: ReitDataClient, args) -> int:
    reit = client.get_reit(args.ticker)
    log.header(f"{reit['ticker']} - {reit['name']}")
    log.summary_table("Snapshot", [
        ("Sector", reit["sector"]),
        ("Dividend yield", f"{reit['dividendYield']:.2f}%"),
        ("1Y total return", f"{reit['totalReturn1Y']:+.2f}%"),
    ])

    try:
        history = client.get_history(args.ticker)
    except requests.HTTPError as e:
        log.warn(_api_error(e))
        return 0

    stats = history_stats(history)
    if stats is None:
        log.warn("Price history is empty")
        return 0

    log.summary_table("Price history", [
        ("Period", f"{stats['start_date']} -> {stats['end_date']} ({stats['points']} points)"),
        ("First / last", f"${stats['first_price']:.2f} / ${stats['last_price']:.2f}"),
        ("Change", f"{stats['change_pct']:+.2f}%"),
        ("Low / high", f"${stats['min_price']:.2f} / ${stats['max_price']:.2f}"),
    ])
    return 0


def cmd_value(client: ReitDataClient, args) -> int:
    log.header(f"DDM Valuation - {args.ticker.upper()}")
    val = client.get_valuation(args.ticker, args.discount, args.growth)
    log.ticker_msg(val["ticker"], f"r={val['discountRate']:.2%}, g={val['growthRate']:.2%}")

    log.summary_table("Gordon Growth Model", [
        ("Current price", f"${val['currentPrice']:.2f}"),
        ("Dividend / share", f"${val['dividendPerShare']:.2f}"),
        ("Fair value", f"${val['fairValue']:.2f}"),
        ("Margin of safety", log.signed(val["marginOfSafetyPct"])),
    ])

    grid = client.get_sensitivity(args.ticker, args.discount, args.growth, args.step)
    fair_values = sensitivity_frame(grid, "fairValue")

    log.step("Sensitivity (fair value)")
    log.table(
        ["r \\ g"] + list(fair_values.columns),
        [
            [idx] + ["-" if pd.isna(v) else f"${v:.2f}" for v in row]
            for idx, row in fair_values.iterrows()
        ]
    )

    if args.excel:
        path = _export({
            "Valuation": pd.DataFrame([val]),
            "Fair Value": fair_values.reset_index(),
            "Margin of Safety": sensitivity_frame(grid, "marginOfSafetyPct").reset_index(),
        }, args.excel)
        log.ok(f"Saved valuation to {path}")
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Terminal dashboard for the REIT Analytics API")
    parser.add_argument("--api-url", default=settings.API_URL, help=f"API base URL (default: {settings.API_URL})")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Filter, sort and summarise REITs")
    p_list.add_argument("--sector", help="Exact sector name (e.g. Retail)")
    p_list.add_argument("--min-yield", type=float, help="Minimum dividend yield in percent")
    p_list.add_argument("--sort-by", choices=["ticker", "dividendYield", "totalReturn1Y"], help="Sort key")
    p_list.add_argument("--order", choices=["asc", "desc"], help="Sort direction")
    p_list.add_argument("--excel", help="Export the list to this .xlsx file")
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="REIT details and price history stats")
    p_show.add_argument("ticker")
    p_show.set_defaults(func=cmd_show)

    p_value = sub.add_parser("value", help="DDM valuation and sensitivity grid")
    p_value.add_argument("ticker")
    p_value.add_argument("--discount", type=float, default=settings.DEFAULT_DISCOUNT_RATE, help="Discount rate r as a decimal (default: %(default)s)")
    p_value.add_argument("--growth", type=float, default=settings.DEFAULT_GROWTH_RATE, help="Dividend growth g as a decimal (default: %(default)s)")
    p_value.add_argument("--step", type=float, default=settings.SENSITIVITY_STEP, help="Grid spacing (default: %(default)s)")
    p_value.add_argument("--excel", help="Export valuation and grid to this .xlsx file")
    p_value.set_defaults(func=cmd_value)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    client = ReitDataClient(args.api_url)

    try:
        return args.func(client, args)
    except requests.HTTPError as e:
        log.err(_api_error(e))
        logger.debug(f"{args.command} failed: {e}")
        return 1
    except requests.ConnectionError:
        log.err(f"Could not reach the API at {args.api_url}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
