"""
Numerology Console — command-line entry point.

Run:
    python main.py annotate stocks_updated.csv
    python main.py patterns output/stocks_numerology_zodiac_2024-03-01.csv
    python main.py patch-dates stocks.csv --registry public/registered_companies.csv
    python main.py lookup 02/07/1981 --month "Mar 2024"
    python main.py candles acme_daily.csv --stock "Acme Corp" --date 15/6/2000 --overlay overlay.csv
"""
import argparse
import os
import sys
from datetime import date
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv
from loguru import logger
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

load_dotenv()

import config
from core.annotator import annotate_companies
from core.candles import monthly_records_from_candles, numerology_overlay
from core.errors import NumerologyError
from core.patterns import pattern_report
from core.records import CompanyBlock
from core.report import numerology_report
from sheets.registry import load_registry, patch_incorporation_dates
from sheets.stock_csv import read_annotated_csv, read_stock_csv, write_annotated_csv, write_stock_csv

console = Console()


def _default_output(stem: str) -> Path:
    return Path(config.OUTPUT_DIR) / f"{stem}_{date.today().isoformat()}.csv"


# ── Console display ────────────────────────────────────────────────────────────

def display_annotation(result, output: Path):
    table = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Companies", str(result.companies_processed))
    table.add_row("Records", str(result.count))
    table.add_row("Skipped", str(len(result.skipped)))
    table.add_row("Output", str(output))

    for skip in result.skipped[:20]:
        where = skip.stock if skip.month_year is None else f"{skip.stock} {skip.month_year}"
        table.add_row("[yellow]Skipped[/yellow]", f"{where}: {skip.reason}")
    if len(result.skipped) > 20:
        table.add_row("", f"... {len(result.skipped) - 20} more in the log")

    console.print(Panel(table, title="[bold]Numerology Calculation[/bold]",
                        border_style="cyan", expand=False))


def display_report(report: dict):
    table = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    table.add_column("Key", style="dim")
    table.add_column("Value", style="bold")

    lp = report["life_path_number"]
    table.add_row("Incorporated", report["incorporation_date"])
    table.add_row("Life Path", f"[{report['life_path_color']}]{lp}[/]"
                  + ("  (master)" if report["master_number"] else ""))
    table.add_row("Zodiac", report["chinese_zodiac"])
    if "month_year" in report:
        table.add_row("", "")
        table.add_row("Month", report["month_year"])
        table.add_row("Month Zodiac", report["month_zodiac"])
        table.add_row("Personal Year", str(report["personal_year"]))
        table.add_row("Personal Month", str(report["personal_month"]))

    console.print(Panel(table, title="[bold]Numerology[/bold]", border_style="magenta", expand=False))


# ── Commands ───────────────────────────────────────────────────────────────────

def cmd_annotate(args) -> int:
    logger.info("== NUMEROLOGY CALCULATION ==")
    blocks = read_stock_csv(args.input)
    if not blocks:
        logger.error(f"No stock data found in {args.input}")
        return 1
    result = annotate_companies(blocks)
    output = write_annotated_csv(result.records, args.output or _default_output("stocks_numerology_zodiac"))
    display_annotation(result, output)
    return 0


def cmd_patterns(args) -> int:
    logger.info("== PATTERN ANALYSIS ==")
    annotated = read_annotated_csv(args.input)
    if annotated.empty:
        logger.error(f"{args.input} has no rows")
        return 1
    logger.info(f"Loaded {len(annotated)} rows for {annotated['Stock'].nunique()} companies")

    report = pattern_report(annotated)
    output = Path(args.output or _default_output("pattern_by_company"))
    output.parent.mkdir(parents=True, exist_ok=True)
    report.to_csv(output, index=False)
    logger.info(f"Wrote {output}")

    top = report.sort_values("Occurrences", ascending=False, kind="stable").head(10)
    table = Table(box=box.SIMPLE)
    for col in top.columns:
        table.add_column(col)
    for row in top.itertuples(index=False):
        table.add_row(*(str(v) for v in row))
    console.print(table)
    return 0


def cmd_patch_dates(args) -> int:
    logger.info("== DATE PATCH ==")
    registry = load_registry(args.registry)
    text = Path(args.input).read_text(encoding="utf-8-sig")
    patched, updates = patch_incorporation_dates(text, registry)

    output = Path(args.output or Path(args.input).with_name("stocks_updated.csv"))
    output.write_text(patched, encoding="utf-8")
    console.print(f"[green]Patched {updates} rows[/green] → {output}")
    return 0


def cmd_candles(args) -> int:
    logger.info("== CANDLE ROLL-UP ==")
    candles = pd.read_csv(args.input)
    months = monthly_records_from_candles(candles)
    if not months:
        logger.error(f"No candles found in {args.input}")
        return 1
    logger.info(f"Rolled {len(candles)} candles into {len(months)} months for {args.stock}")

    block = CompanyBlock(args.stock, args.date, tuple(months))
    output = write_stock_csv([block], args.output or _default_output("stocks"))

    if args.overlay:
        overlay = numerology_overlay(candles, args.date)
        args.overlay.parent.mkdir(parents=True, exist_ok=True)
        overlay.to_csv(args.overlay, index_label="timestamp")
        logger.info(f"Wrote {args.overlay}")

    console.print(f"[green]{len(months)} months[/green] for {args.stock} → {output}")
    return 0


def cmd_lookup(args) -> int:
    try:
        report = numerology_report(args.date, args.month)
    except NumerologyError as e:
        logger.error(str(e))
        return 1
    display_report(report)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Incorporation-date numerology over stock history")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("annotate", help="Annotate a stock export with numerology columns")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_annotate)

    p = sub.add_parser("patterns", help="Per-company frequency report over an annotated export")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_patterns)

    p = sub.add_parser("patch-dates", help="Fill incorporation dates from the company registry")
    p.add_argument("input", type=Path)
    p.add_argument("--registry", type=Path, default=None)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.set_defaults(func=cmd_patch_dates)

    p = sub.add_parser("lookup", help="Numerology for a single incorporation date")
    p.add_argument("date", help="D/M/Y or D-M-Y")
    p.add_argument("--month", default=None, help='Target month, e.g. "Mar 2024"')
    p.set_defaults(func=cmd_lookup)

    p = sub.add_parser("candles", help="Roll OHLC candles up to a monthly stock export")
    p.add_argument("input", type=Path, help="CSV with timestamp, open, high, low, close")
    p.add_argument("--stock", required=True, help="Company name for the export")
    p.add_argument("--date", default=None, help="Incorporation date, D/M/Y or D-M-Y")
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--overlay", type=Path, default=None, help="Also write per-candle PY/PM and colours")
    p.set_defaults(func=cmd_candles)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    # Configure logging
    os.makedirs(config.LOG_DIR, exist_ok=True)
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )
    logger.add(
        os.path.join(config.LOG_DIR, "numerology_{time:YYYY-MM-DD}.log"),
        rotation="1 day",
        retention="30 days",
        level="DEBUG",
    )

    sys.exit(main())
