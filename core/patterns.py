"""
Pattern Report — how often each numerology value recurs per company.

Reads an annotated export (one row per company-month) and, for every company
and every numerology column, counts the occurrences of each value, their share
of the company's rows and a coarse strength label.
"""
import numpy as np
import pandas as pd

import config

REPORT_COLUMNS = ["Stock", "Category", "Value", "Occurrences", "Percentage", "Pattern_Strength"]


def strength_labels(percentages: pd.Series) -> np.ndarray:
    """Map percentages to Very High / High / Medium / Low."""
    conditions = [percentages > bound for bound, _ in config.PATTERN_STRENGTH]
    labels = [label for _, label in config.PATTERN_STRENGTH]
    return np.select(conditions, labels, default=config.PATTERN_STRENGTH_FLOOR)


def value_frequencies(values: pd.Series) -> pd.DataFrame:
    """Occurrences, percentage and strength of each non-empty value, most frequent first."""
    values = values.dropna().astype(str).str.strip()
    values = values[values != ""]
    if values.empty:
        return pd.DataFrame(columns=["Value", "Occurrences", "Percentage", "Pattern_Strength"])

    counts = values.value_counts(sort=False).sort_values(ascending=False, kind="stable")
    percentages = (counts / counts.sum() * 100).round(2)
    return pd.DataFrame({
        "Value": counts.index,
        "Occurrences": counts.to_numpy(),
        "Percentage": percentages.to_numpy(),
        "Pattern_Strength": strength_labels(percentages),
    })


def pattern_report(annotated: pd.DataFrame) -> pd.DataFrame:
    """Frequency table for every (company, numerology column, value)."""
    frames = []
    for stock, rows in annotated.groupby("Stock", sort=False):
        for category in config.PATTERN_COLUMNS:
            if category not in rows.columns:
                continue
            freq = value_frequencies(rows[category])
            if freq.empty:
                continue
            freq.insert(0, "Category", category)
            freq.insert(0, "Stock", stock)
            frames.append(freq)

    if not frames:
        return pd.DataFrame(columns=REPORT_COLUMNS)
    return pd.concat(frames, ignore_index=True)[REPORT_COLUMNS]
