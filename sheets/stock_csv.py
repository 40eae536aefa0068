"""
Stock CSV — the console's block-structured stock export, in and out.

Input shape (one file, many companies):

    Company Name,Incorporation Date,Current Price,...
    "Reliance Industries",08/05/1973,2950.10,...

    Monthly Breakdown for Reliance Industries:
    Date,Open,Close,High,Low,Change %
    Jan 2024,2590.00,2750.20,2780.00,2550.10,6.19
    ...

The "Company Name" header fixes which columns hold the name and the
incorporation date. Month rows are recognised by a leading month name
followed by a year; every other non-empty row starts a new company.
"""
import csv
import io
import re
from pathlib import Path
from typing import Iterable

import pandas as pd
from loguru import logger

import config
from core.annotator import to_dataframe
from core.records import AnnotatedRecord, CompanyBlock, MonthlyRecord

MONTH_ROW = re.compile(
    r"^(?:%s)[\s\-]+\d{2,4}\b" % "|".join(sorted(config.MONTH_NUMBERS, key=len, reverse=True))
)


# ── Reading ────────────────────────────────────────────────────────────────────

def is_month_row(fields: list) -> bool:
    return len(fields) >= 5 and bool(MONTH_ROW.match(fields[0]))


def _is_company_header(fields: list) -> bool:
    line = ",".join(fields)
    return config.COMPANY_NAME_HEADER in line and config.INCORPORATION_DATE_HEADER in line


def _is_section_header(fields: list) -> bool:
    first = fields[0]
    return first.startswith("Monthly Breakdown") or (
        first == "Date" and len(fields) > 2 and fields[1] == "Open" and fields[2] == "Close"
    )


def parse_stock_csv(text: str) -> list[CompanyBlock]:
    """Split a stock export into CompanyBlocks, keeping file order."""
    name_idx, date_idx = 0, 1
    blocks: list[CompanyBlock] = []
    current = None

    def flush():
        if current is not None:
            stock, inc_date, months = current
            blocks.append(CompanyBlock(stock, inc_date, tuple(months)))

    for fields in csv.reader(io.StringIO(text)):
        fields = [f.strip() for f in fields]
        if not any(fields):
            continue

        if _is_company_header(fields):
            name_idx = fields.index(config.COMPANY_NAME_HEADER) if config.COMPANY_NAME_HEADER in fields else 0
            date_idx = (fields.index(config.INCORPORATION_DATE_HEADER)
                        if config.INCORPORATION_DATE_HEADER in fields else 1)
            continue
        if _is_section_header(fields):
            continue

        if is_month_row(fields):
            if current is None:
                logger.debug(f"Month row before any company ignored: {fields[0]}")
                continue
            current[2].append(MonthlyRecord(
                month_year=fields[0],
                open=fields[1],
                close=fields[2],
                high=fields[3],
                low=fields[4],
                change_pct=fields[5] if len(fields) > 5 else "",
            ))
            continue

        name = fields[name_idx] if len(fields) > name_idx else ""
        if not name:
            continue
        flush()
        inc_date = fields[date_idx] if len(fields) > date_idx else ""
        current = (name, inc_date or None, [])

    flush()
    return blocks


def read_stock_csv(path) -> list[CompanyBlock]:
    text = Path(path).read_text(encoding="utf-8-sig")
    blocks = parse_stock_csv(text)
    logger.info(f"Found {len(blocks)} stocks in {path}")
    return blocks


def read_annotated_csv(path) -> pd.DataFrame:
    """Load an annotated export with every cell kept as text."""
    return pd.read_csv(path, dtype=str, keep_default_na=False)


# ── Writing ────────────────────────────────────────────────────────────────────

def annotated_csv_text(records: Iterable[AnnotatedRecord]) -> str:
    """Annotated records as CSV text; values containing commas are quoted."""
    return to_dataframe(records).to_csv(index=False, lineterminator="\n")


def write_annotated_csv(records: Iterable[AnnotatedRecord], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(annotated_csv_text(records), encoding="utf-8")
    logger.info(f"Wrote {path}")
    return path


def _fmt(value) -> str:
    return "" if pd.isna(value) else f"{value:.2f}"


def _numbers(values: list) -> pd.Series:
    return pd.to_numeric(pd.Series(values, dtype=object), errors="coerce").astype(float)


def _summary_row(block: CompanyBlock) -> list:
    """Current price, period high/low and change over the block's months."""
    months = block.months
    closes = _numbers([m.close for m in months])
    highs = _numbers([m.high for m in months])
    lows = _numbers([m.low for m in months])

    latest = closes.iloc[-1] if len(closes) else float("nan")
    oldest = closes.iloc[0] if len(closes) else float("nan")
    change = latest - oldest
    pct = change / oldest * 100 if oldest else float("nan")
    return [
        block.stock,
        block.incorporation_date or "Not Available",
        _fmt(latest), _fmt(highs.max()), _fmt(lows.min()),
        _fmt(change), _fmt(pct), str(len(months)),
    ]


def stock_csv_text(blocks: Iterable[CompanyBlock]) -> str:
    """Render CompanyBlocks in the block-structured export shape."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(config.STOCK_SUMMARY_COLUMNS)
    for block in blocks:
        writer.writerow(_summary_row(block))
        if block.months:
            writer.writerow([])
            writer.writerow([f"Monthly Breakdown for {block.stock}:"])
            writer.writerow(config.MONTHLY_COLUMNS)
            for m in block.months:
                writer.writerow([m.month_year, m.open, m.close, m.high, m.low, m.change_pct])
            writer.writerow([])
    return out.getvalue()


def write_stock_csv(blocks: Iterable[CompanyBlock], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stock_csv_text(blocks), encoding="utf-8")
    logger.info(f"Wrote {path}")
    return path
