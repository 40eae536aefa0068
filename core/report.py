"""
Numerology snapshot for a single incorporation date, as shown by `lookup`.
"""
from typing import Optional

import config
from core.numerology import (
    life_path_number,
    numerology_color,
    personal_month_number,
    personal_year_number,
    strip_month_year,
)
from core.zodiac import chinese_zodiac, month_zodiac


def numerology_report(incorporation_date: str, month_year: Optional[str] = None) -> dict:
    """
    Numerology snapshot for one incorporation date, optionally against a month.

    Returns a dict suitable for logging and console display.
    """
    life_path = life_path_number(incorporation_date)
    report = {
        "incorporation_date": incorporation_date,
        "life_path_number": life_path,
        "life_path_color": numerology_color(life_path),
        "chinese_zodiac": chinese_zodiac(incorporation_date),
        "master_number": life_path in config.MASTER_NUMBERS,
    }
    if month_year:
        label = strip_month_year(month_year)
        report.update({
            "month_year": label,
            "month_zodiac": month_zodiac(label),
            "personal_year": personal_year_number(incorporation_date, label),
            "personal_month": personal_month_number(incorporation_date, label),
        })
    return report
