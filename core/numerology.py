"""
Numerology Engine — incorporation-date calendar arithmetic.

Provides:
  - Flexible D/M/Y and D-M-Y date parsing (two-digit years windowed)
  - Month/year label normalization ("Mar-24" -> "Mar 2024")
  - Master-number-aware digit reduction
  - Life Path Number (from an incorporation date)
  - Personal Year / Personal Month Number (incorporation date vs. a month)
  - Chart colour for a numerology number

Every function is pure; failures are raised as NumerologyError subclasses.
"""
from typing import NamedTuple

import config
from core.errors import InvalidMonthName, UnparseableDate


class DateParts(NamedTuple):
    day: int
    month: int
    year: int          # windowed to four digits
    year_token: str    # the year exactly as written


# ── Parsing ───────────────────────────────────────────────────────────────────

def expand_two_digit_year(token: str) -> str:
    """
    Window a two-digit year into a four-digit one.

    "24" -> "2024", "81" -> "1981". Tokens of any other length pass through.
    """
    token = token.strip()
    if len(token) != 2 or not token.isdecimal():
        return token
    prefix = "20" if int(token) < config.YEAR_WINDOW_PIVOT else "19"
    return prefix + token


def parse_date_parts(text: str) -> DateParts:
    """
    Split a "D/M/Y" or "D-M-Y" string into its numeric parts.

    Splits on "/" when present, otherwise on "-". No calendar validity check
    beyond the day and month ranges: 31/02/2001 parses fine.
    """
    if not isinstance(text, str) or not text.strip():
        raise UnparseableDate(text, "empty")
    raw = text.strip()
    parts = [p.strip() for p in raw.split("/" if "/" in raw else "-")]
    if len(parts) != 3 or not all(p.isdecimal() for p in parts):
        raise UnparseableDate(text)

    day, month = int(parts[0]), int(parts[1])
    if not 1 <= day <= 31:
        raise UnparseableDate(text, f"day {day} out of range")
    if not 1 <= month <= 12:
        raise UnparseableDate(text, f"month {month} out of range")

    year_token = parts[2]
    return DateParts(day, month, int(expand_two_digit_year(year_token)), year_token)


def normalize_month_year(text: str) -> str:
    """
    Normalize a month/year token to "<Month> <Year>".

    Only dash-separated input is rewritten ("Mar-24" -> "Mar 2024");
    anything else, including an already-normalized label, comes back as is.
    """
    if "-" not in text:
        return text
    parts = text.split("-")
    month = parts[0].strip()
    year = expand_two_digit_year(parts[1]) if len(parts) > 1 else ""
    return f"{month} {year}"


def strip_month_year(text: str) -> str:
    """
    Clean a free-text month label before it reaches the engine.

    Drops trailing day/time tokens ("Mar 2024 00:00" -> "Mar 2024") and
    normalizes dash forms.
    """
    tokens = text.strip().split()
    if not tokens:
        return ""
    if "-" in tokens[0]:
        return normalize_month_year(tokens[0])
    return " ".join(tokens[:2])


def split_month_year(label: str) -> tuple[int, int]:
    """Resolve a month/year label to (month_number, four_digit_year)."""
    normalized = normalize_month_year(label)
    parts = normalized.split()
    if len(parts) < 2:
        raise UnparseableDate(label, "expected '<Month> <Year>'")

    month = config.MONTH_NUMBERS.get(parts[0])
    if month is None:
        raise InvalidMonthName(parts[0], label)
    if not parts[1].isdecimal():
        raise UnparseableDate(label, f"year {parts[1]!r} is not numeric")
    return month, int(parts[1])


# ── Reduction ─────────────────────────────────────────────────────────────────

def digit_sum(value) -> int:
    """Sum the decimal digits of an int or a digit string."""
    return sum(int(ch) for ch in str(value))


def reduce_number(total: int) -> int:
    """
    Reduce a running total to a single digit, stopping on a master number.

    The master check runs on the raw total and again after every reduction
    step, so 28 stays 28 and 47 -> 11 stays 11.
    """
    if total in config.MASTER_NUMBERS:
        return total
    while total > 9:
        total = digit_sum(total)
        if total in config.MASTER_NUMBERS:
            return total
    return total


# ── Life path ─────────────────────────────────────────────────────────────────

def life_path_number(incorporation_date: str) -> int:
    """
    Life Path Number of an incorporation date.

    Formula: reduce(day + month + digits of the year as written)

    Example, 02/07/1981:
      2 + 7 + (1+9+8+1) = 28 → master number, returned as is
    """
    parts = parse_date_parts(incorporation_date)
    return reduce_number(parts.day + parts.month + digit_sum(parts.year_token))


# ── Personal year / month ─────────────────────────────────────────────────────

def year_to_use(target_month: int, target_year: int, birth_month: int) -> int:
    """The numerology year starts on the incorporation month, not January."""
    return target_year if target_month >= birth_month else target_year - 1


def personal_year_number(incorporation_date: str, month_year: str) -> int:
    """
    Personal Year Number for an incorporation date in a given month.

    Example, 15/6/2000 in "May 2024" (May is before June, so 2023 counts):
      15 + 6 + (2+0+2+3) = 28 → master number
    """
    birth = parse_date_parts(incorporation_date)
    month, year = split_month_year(month_year)
    year = year_to_use(month, year, birth.month)
    return reduce_number(birth.day + birth.month + digit_sum(year))


def personal_month_number(incorporation_date: str, month_year: str) -> int:
    """Personal Year total plus the target month number, then reduced."""
    birth = parse_date_parts(incorporation_date)
    month, year = split_month_year(month_year)
    year = year_to_use(month, year, birth.month)
    return reduce_number(birth.day + birth.month + month + digit_sum(year))


# ── Display ───────────────────────────────────────────────────────────────────

def numerology_color(number: int) -> str:
    return config.NUMEROLOGY_COLORS.get(number, config.DEFAULT_NUMEROLOGY_COLOR)
