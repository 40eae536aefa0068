"""
Central configuration for the numerology console.
All tunable parameters and fixed lookup tables live here. Loaded from
environment where applicable.
"""
import os
from types import MappingProxyType

from dotenv import load_dotenv

load_dotenv()

# ── Paths ─────────────────────────────────────────────────────────────────────
LOG_DIR = os.getenv("LOG_DIR", "logs")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")
REGISTRY_PATH = os.getenv("REGISTRY_PATH", "public/registered_companies.csv")

# ── Two-digit year windowing ──────────────────────────────────────────────────
# Registry dates come as D-M-YY. Years below the pivot land in the 2000s,
# the rest in the 1900s ("24" -> 2024, "81" -> 1981).
YEAR_WINDOW_PIVOT = int(os.getenv("YEAR_WINDOW_PIVOT", "50"))

# ── Master numbers ────────────────────────────────────────────────────────────
# Reduction stops the moment a running digit-sum hits one of these.
MASTER_NUMBERS = frozenset({11, 22, 28, 33, 20})

# ── Month names ───────────────────────────────────────────────────────────────
# Case-sensitive, exact match only.
MONTH_NUMBERS = MappingProxyType({
    "Jan": 1,  "January": 1,
    "Feb": 2,  "February": 2,
    "Mar": 3,  "March": 3,
    "Apr": 4,  "April": 4,
    "May": 5,
    "Jun": 6,  "June": 6,
    "Jul": 7,  "July": 7,
    "Aug": 8,  "August": 8,
    "Sep": 9,  "Sept": 9, "September": 9,
    "Oct": 10, "October": 10,
    "Nov": 11, "November": 11,
    "Dec": 12, "December": 12,
})

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# ── Chinese zodiac ────────────────────────────────────────────────────────────
# Gregorian (month, day) of Lunar New Year. Years outside the table get no
# adjustment: the Gregorian year is used as the Chinese year.
CHINESE_NEW_YEAR_DATES = MappingProxyType({
    1930: (1, 30), 1931: (2, 17), 1932: (2, 6),  1933: (1, 26), 1934: (2, 14),
    1935: (2, 4),  1936: (1, 24), 1937: (2, 11), 1938: (1, 31), 1939: (2, 19),
    1940: (2, 8),  1941: (1, 27), 1942: (2, 15), 1943: (2, 5),  1944: (1, 25),
    1945: (2, 13), 1946: (2, 2),  1947: (1, 22), 1948: (2, 10), 1949: (1, 29),
    1950: (2, 17), 1951: (2, 6),  1952: (1, 27), 1953: (2, 14), 1954: (2, 3),
    1955: (1, 24), 1956: (2, 12), 1957: (1, 31), 1958: (2, 18), 1959: (2, 8),
    1960: (1, 28), 1961: (2, 15), 1962: (2, 5),  1963: (1, 25), 1964: (2, 13),
    1965: (2, 2),  1966: (1, 21), 1967: (2, 9),  1968: (1, 30), 1969: (2, 17),
    1970: (2, 6),  1971: (1, 27), 1972: (2, 15), 1973: (2, 3),  1974: (1, 23),
    1975: (2, 11), 1976: (1, 31), 1977: (2, 18), 1978: (2, 7),  1979: (1, 28),
    1980: (2, 16), 1981: (2, 5),  1982: (1, 25), 1983: (2, 13), 1984: (2, 2),
    1985: (2, 20), 1986: (2, 9),  1987: (1, 29), 1988: (2, 17), 1989: (2, 6),
    1990: (1, 27), 1991: (2, 15), 1992: (2, 4),  1993: (1, 23), 1994: (2, 10),
    1995: (1, 31), 1996: (2, 19), 1997: (2, 7),  1998: (1, 28), 1999: (2, 16),
    2000: (2, 5),  2001: (1, 24), 2002: (2, 12), 2003: (2, 1),  2004: (1, 22),
    2005: (2, 9),  2006: (1, 29), 2007: (2, 18), 2008: (2, 7),  2009: (1, 26),
    2010: (2, 14), 2011: (2, 3),  2012: (1, 23), 2013: (2, 10), 2014: (1, 31),
    2015: (2, 19), 2016: (2, 8),  2017: (1, 28), 2018: (2, 16), 2019: (2, 5),
    2020: (1, 25), 2021: (2, 12), 2022: (2, 1),  2023: (1, 22), 2024: (2, 10),
    2025: (1, 29), 2026: (2, 17), 2027: (2, 6),  2028: (1, 26), 2029: (2, 13),
    2030: (2, 3),
})

ZODIAC_ANIMALS = (
    "Rat", "Ox", "Tiger", "Rabbit", "Dragon", "Snake",
    "Horse", "Goat", "Monkey", "Rooster", "Dog", "Pig",
)
ZODIAC_BASE_YEAR = 1924  # a Rat year

# Month zodiac is evaluated at mid-month, not on the incorporation day.
MONTH_ZODIAC_DAY = 15

# ── Chart colours ─────────────────────────────────────────────────────────────
NUMEROLOGY_COLORS = MappingProxyType({
    1: "#FF6B6B", 2: "#4ECDC4", 3: "#FFE66D", 4: "#95E1D3", 5: "#F38181",
    6: "#AA96DA", 7: "#6C5B7B", 8: "#355C7D", 9: "#F67280",
    11: "#C3073F", 22: "#1A1A2E", 28: "#2E4057", 33: "#048A81", 20: "#540D6E",
})
DEFAULT_NUMEROLOGY_COLOR = "#888888"

# ── Stock CSV shapes ──────────────────────────────────────────────────────────
NOT_AVAILABLE = frozenset({"Not Available", "N/A"})

COMPANY_NAME_HEADER = "Company Name"
INCORPORATION_DATE_HEADER = "Incorporation Date"

STOCK_SUMMARY_COLUMNS = (
    "Company Name", "Incorporation Date", "Current Price", "Period High",
    "Period Low", "Change", "Change %", "Data Points",
)
MONTHLY_COLUMNS = ("Date", "Open", "Close", "High", "Low", "Change %")

OUTPUT_COLUMNS = (
    "Stock", "Incorporation_Date", "Company_Chinese_Zodiac", "Life_Path",
    "Month_Year", "Month_Chinese_Zodiac", "Personal_Year", "Personal_Month",
    "Open", "Close", "High", "Low", "Change_%",
)

# ── Pattern report ────────────────────────────────────────────────────────────
PATTERN_COLUMNS = (
    "Life_Path", "Personal_Year", "Personal_Month",
    "Company_Chinese_Zodiac", "Month_Chinese_Zodiac",
)

# (exclusive lower bound in percent, label), checked top-down
PATTERN_STRENGTH = (
    (20.0, "Very High"),
    (15.0, "High"),
    (10.0, "Medium"),
)
PATTERN_STRENGTH_FLOOR = "Low"

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
