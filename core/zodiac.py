"""
Chinese Zodiac — maps a Gregorian date to its Chinese-calendar animal.

The Chinese year turns over on Lunar New Year, so a date in January or early
February usually belongs to the previous animal. Lunar New Year dates come
from a fixed 1930–2030 table; outside it the Gregorian year is used as is.
"""
from typing import Optional

import config
from core.numerology import parse_date_parts, split_month_year


# ── Lunar New Year ─────────────────────────────────────────────────────────────

def chinese_new_year(year: int) -> Optional[tuple[int, int]]:
    """(month, day) of Lunar New Year in the given Gregorian year, if tabled."""
    return config.CHINESE_NEW_YEAR_DATES.get(year)


def effective_chinese_year(day: int, month: int, year: int) -> int:
    """
    Chinese year a Gregorian date falls in.

    A date strictly before that year's Lunar New Year belongs to the previous
    Chinese year. Lunar New Year day itself already counts as the new year.
    """
    cny = chinese_new_year(year)
    if cny is None:
        return year
    cny_month, cny_day = cny
    if month < cny_month or (month == cny_month and day < cny_day):
        return year - 1
    return year


def animal_for_year(chinese_year: int) -> str:
    # Floored modulo keeps pre-1924 years on the cycle (1900 -> Rat).
    return config.ZODIAC_ANIMALS[(chinese_year - config.ZODIAC_BASE_YEAR) % 12]


# ── Public API ─────────────────────────────────────────────────────────────────

def chinese_zodiac(date_text: str) -> str:
    """
    Zodiac animal for a "D/M/Y" or "D-M-Y" date.

    Example, 05/02/2024 (before Lunar New Year on 10 Feb):
      effective year 2023 → Rabbit
    """
    parts = parse_date_parts(date_text)
    return animal_for_year(effective_chinese_year(parts.day, parts.month, parts.year))


def month_zodiac(month_year: str) -> str:
    """Zodiac for a month label, evaluated on the 15th of that month."""
    month, year = split_month_year(month_year)
    # Numeric month keeps the Lunar New Year cut-off in play: Jan 2024 is Rabbit.
    return chinese_zodiac(f"{config.MONTH_ZODIAC_DAY}/{month}/{year}")
