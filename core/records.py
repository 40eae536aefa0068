"""
Record shapes flowing through the annotation pipeline.

Price fields stay as the source strings so an export reproduces them
byte-for-byte; the pipeline never does arithmetic on them.
"""
from dataclasses import dataclass, field
from typing import Optional

import config


@dataclass(frozen=True)
class MonthlyRecord:
    """One month of price history for a company."""

    month_year: str   # "Mar 2024", "Mar-24", ...
    open: str
    close: str
    high: str
    low: str
    change_pct: str = ""


@dataclass(frozen=True)
class CompanyBlock:
    """A company, its single incorporation date and its months in source order."""

    stock: str
    incorporation_date: Optional[str]
    months: tuple = ()

    def has_incorporation_date(self) -> bool:
        value = (self.incorporation_date or "").strip()
        return bool(value) and value not in config.NOT_AVAILABLE


@dataclass(frozen=True)
class AnnotatedRecord:
    stock: str
    incorporation_date: str
    company_zodiac: str
    life_path: int
    month_year: str
    month_zodiac: str
    personal_year: int
    personal_month: int
    open: str
    close: str
    high: str
    low: str
    change_pct: str

    def to_row(self) -> dict:
        """Column -> value mapping in export order."""
        values = (
            self.stock, self.incorporation_date, self.company_zodiac,
            self.life_path, self.month_year, self.month_zodiac,
            self.personal_year, self.personal_month,
            self.open, self.close, self.high, self.low, self.change_pct,
        )
        return dict(zip(config.OUTPUT_COLUMNS, values))


@dataclass(frozen=True)
class SkippedRow:
    """A company (month_year is None) or a single month left out of the export."""

    stock: str
    month_year: Optional[str]
    reason: str


@dataclass
class AnnotationResult:
    records: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    companies_processed: int = 0

    @property
    def count(self) -> int:
        return len(self.records)
