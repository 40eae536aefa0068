"""
Company Registry — fills incorporation dates into a stock export.

The registry is a large CSV of registered companies (name + registration
date). Names are matched case-insensitively against the "Company Name" column
of a stock export; matching rows get their "Incorporation Date" cell replaced.
ISO registry dates (YYYY-MM-DD[THH:MM:SS]) are rewritten to DD/MM/YYYY; other
formats (e.g. D-M-YY) are kept verbatim for the engine to parse.
"""
import csv
import io
import re
from pathlib import Path
from typing import Optional

import pandas as pd
from dateutil.parser import parse as parse_date
from loguru import logger

import config

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


# ── Registry loading ───────────────────────────────────────────────────────────

def detect_columns(headers: list) -> tuple[Optional[str], Optional[str]]:
    """
    Find the company-name and registration-date columns by header text.

    Falls back to positions when the headers say nothing useful:
    (1, 2) with three or more columns, else (0, 1).
    """
    company_col = date_col = None
    for col in headers:
        up = col.upper()
        if "COMPANY" in up and "NAME" in up:
            company_col = col
        elif "DATE" in up and ("REGISTRATION" in up or "INCORPORATION" in up):
            date_col = col

    if company_col is None or date_col is None:
        if len(headers) >= 3:
            company_col, date_col = headers[1], headers[2]
        elif len(headers) >= 2:
            company_col, date_col = headers[0], headers[1]
    return company_col, date_col


def registry_from_frame(df: pd.DataFrame) -> dict:
    """Upper-cased company name -> registration date."""
    company_col, date_col = detect_columns(list(df.columns))
    if company_col is None or date_col is None:
        raise ValueError(f"Cannot find company/date columns in {list(df.columns)}")

    names = df[company_col].astype(str).str.strip().str.upper()
    dates = df[date_col].astype(str).str.strip()
    mask = names != ""
    return dict(zip(names[mask], dates[mask]))


def load_registry(path=None) -> dict:
    path = Path(path or config.REGISTRY_PATH)
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    if df.empty:
        raise ValueError(f"Registered companies database empty: {path}")
    registry = registry_from_frame(df)
    logger.info(f"Indexed {len(registry)} companies from {path}")
    return registry


# ── Patching ───────────────────────────────────────────────────────────────────

def to_incorporation_format(value: str) -> str:
    """ISO dates become DD/MM/YYYY; anything else is returned unchanged."""
    value = value.strip()
    if not ISO_DATE.match(value):
        return value
    dt = parse_date(value[:10])
    return f"{dt.day:02d}/{dt.month:02d}/{dt.year}"


def _split(line: str) -> list:
    return next(csv.reader([line]), [])


def _join(cols: list) -> str:
    out = io.StringIO()
    csv.writer(out, lineterminator="").writerow(cols)
    return out.getvalue()


def patch_incorporation_dates(text: str, registry: dict) -> tuple[str, int]:
    """
    Replace the incorporation date of every company found in the registry.

    Lines before the "Company Name,...,Incorporation Date" header and rows
    whose company is unknown are passed through untouched.
    Returns (patched_text, rows_updated).
    """
    out, updates = [], 0
    name_idx = date_idx = None

    for line in text.splitlines():
        if name_idx is None:
            cols = [c.strip() for c in _split(line)]
            if config.COMPANY_NAME_HEADER in cols and config.INCORPORATION_DATE_HEADER in cols:
                name_idx = cols.index(config.COMPANY_NAME_HEADER)
                date_idx = cols.index(config.INCORPORATION_DATE_HEADER)
            out.append(line)
            continue

        cols = _split(line)
        if len(cols) > max(name_idx, date_idx) and cols[name_idx].strip():
            key = cols[name_idx].strip().upper()
            if key in registry:
                cols[date_idx] = to_incorporation_format(registry[key])
                updates += 1
                out.append(_join(cols))
                continue
        out.append(line)

    if name_idx is None:
        logger.warning("No 'Company Name' / 'Incorporation Date' header found; nothing patched")
    logger.info(f"Patched {updates} rows")
    return "\n".join(out), updates
