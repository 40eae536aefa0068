"""
Candles — OHLC history to monthly records and chart numerology overlay.

Input frames follow the OHLCV shape used across the project: a UTC
DatetimeIndex (or a "timestamp" column) with open, high, low, close columns.
"""
import pandas as pd
from loguru import logger

import config
from core.errors import NumerologyError
from core.numerology import numerology_color, personal_month_number, personal_year_number
from core.records import MonthlyRecord


def _with_datetime_index(df: pd.DataFrame) -> pd.DataFrame:
    if isinstance(df.index, pd.DatetimeIndex):
        return df
    if "timestamp" not in df.columns:
        raise ValueError("candles need a DatetimeIndex or a 'timestamp' column")
    out = df.copy()
    out["timestamp"] = pd.to_datetime(out["timestamp"], utc=True)
    return out.set_index("timestamp")


def month_label(ts: pd.Timestamp) -> str:
    return f"{config.MONTH_ABBREVIATIONS[ts.month - 1]} {ts.year}"


# ── Monthly roll-up ────────────────────────────────────────────────────────────

def monthly_records_from_candles(df: pd.DataFrame) -> list[MonthlyRecord]:
    """
    Roll candles up to calendar months, oldest first.

    Open is the month's first open, close its last close; change % is
    (close - open) / open * 100. Prices are formatted with two decimals.
    """
    if df.empty:
        return []
    df = _with_datetime_index(df).sort_index()
    monthly = df.resample("MS").agg(
        {"open": "first", "high": "max", "low": "min", "close": "last"}
    ).dropna()

    records = []
    for ts, row in monthly.iterrows():
        change = (row["close"] - row["open"]) / row["open"] * 100 if row["open"] else 0.0
        records.append(MonthlyRecord(
            month_year=month_label(ts),
            open=f"{row['open']:.2f}",
            close=f"{row['close']:.2f}",
            high=f"{row['high']:.2f}",
            low=f"{row['low']:.2f}",
            change_pct=f"{change:.2f}",
        ))
    return records


# ── Chart overlay ──────────────────────────────────────────────────────────────

def numerology_overlay(df: pd.DataFrame, incorporation_date) -> pd.DataFrame:
    """
    Add py / pm (Personal Year / Month) and their colours to every candle.

    Candles whose numbers cannot be computed keep 0, and so does every candle
    when the incorporation date is missing.
    """
    out = _with_datetime_index(df).copy()
    labels = [month_label(ts) for ts in out.index]

    available = bool(incorporation_date) and incorporation_date not in config.NOT_AVAILABLE
    numbers: dict = {}
    for label in dict.fromkeys(labels):
        if not available:
            numbers[label] = (0, 0)
            continue
        try:
            numbers[label] = (
                personal_year_number(incorporation_date, label),
                personal_month_number(incorporation_date, label),
            )
        except NumerologyError as e:
            logger.debug(f"No numerology for {label}: {e}")
            numbers[label] = (0, 0)

    out["py"] = [numbers[label][0] for label in labels]
    out["pm"] = [numbers[label][1] for label in labels]
    out["py_color"] = out["py"].map(numerology_color)
    out["pm_color"] = out["pm"].map(numerology_color)
    return out
