"""
Annotation Pipeline — runs the numerology engine over per-company price history.

For every company:
  1. Company-level Life Path and Chinese zodiac (once, from the incorporation date)
  2. Per month: month zodiac, Personal Year, Personal Month
  3. Merge with the month's price fields into an AnnotatedRecord

Failures are isolated to the smallest unit: a bad incorporation date skips
the company, a bad month label skips that month. The batch never aborts.
"""
from typing import Iterable

import pandas as pd
from loguru import logger

import config
from core.errors import NumerologyError
from core.numerology import (
    life_path_number,
    personal_month_number,
    personal_year_number,
    strip_month_year,
)
from core.records import AnnotatedRecord, AnnotationResult, CompanyBlock, SkippedRow
from core.zodiac import chinese_zodiac, month_zodiac


def annotate_company(block: CompanyBlock) -> tuple[list, list]:
    """
    Annotate one company's months.

    Returns (records, skipped). A company-level skip is a single SkippedRow
    whose month_year is None.
    """
    if not block.has_incorporation_date():
        logger.warning(f"Skipped {block.stock}: incorporation date not available")
        return [], [SkippedRow(block.stock, None, "incorporation date not available")]

    incorporation_date = block.incorporation_date.strip()
    try:
        life_path = life_path_number(incorporation_date)
        company_zodiac = chinese_zodiac(incorporation_date)
    except NumerologyError as e:
        logger.warning(f"Skipped {block.stock}: {e}")
        return [], [SkippedRow(block.stock, None, str(e))]

    logger.info(f"Processing {block.stock} (LP: {life_path}, Zodiac: {company_zodiac})")

    records, skipped = [], []
    for month in block.months:
        label = strip_month_year(month.month_year)
        try:
            record = AnnotatedRecord(
                stock=block.stock,
                incorporation_date=incorporation_date,
                company_zodiac=company_zodiac,
                life_path=life_path,
                month_year=label,
                month_zodiac=month_zodiac(label),
                personal_year=personal_year_number(incorporation_date, label),
                personal_month=personal_month_number(incorporation_date, label),
                open=month.open,
                close=month.close,
                high=month.high,
                low=month.low,
                change_pct=month.change_pct,
            )
        except NumerologyError as e:
            logger.warning(f"Error {block.stock} {month.month_year}: {e}")
            skipped.append(SkippedRow(block.stock, month.month_year, str(e)))
            continue
        logger.debug(
            f"  {block.stock} {label}: PY={record.personal_year} "
            f"PM={record.personal_month} zodiac={record.month_zodiac}"
        )
        records.append(record)

    return records, skipped


def annotate_companies(blocks: Iterable[CompanyBlock]) -> AnnotationResult:
    """Annotate every company, keeping company order and month order."""
    result = AnnotationResult()
    for block in blocks:
        records, skipped = annotate_company(block)
        result.records.extend(records)
        result.skipped.extend(skipped)
        if not any(s.month_year is None for s in skipped):
            result.companies_processed += 1

    logger.info(
        f"Calculated {result.count} records for {result.companies_processed} companies "
        f"({len(result.skipped)} skipped)"
    )
    return result


def to_dataframe(records: Iterable[AnnotatedRecord]) -> pd.DataFrame:
    """Annotated records as a DataFrame with the export columns in order."""
    return pd.DataFrame(
        [r.to_row() for r in records],
        columns=list(config.OUTPUT_COLUMNS),
    )
