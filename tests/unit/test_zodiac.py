"""
Unit tests for the Chinese zodiac mapping.

Coverage:
- Lunar New Year boundary (strictly-before rule)
- Years outside the Lunar New Year table
- Pre-1924 years on the 12-year cycle
- Month zodiac on the 15th
"""
import pytest

import config
from core.errors import InvalidMonthName, UnparseableDate
from core.zodiac import (
    animal_for_year,
    chinese_new_year,
    chinese_zodiac,
    effective_chinese_year,
    month_zodiac,
)


class TestLunarNewYearBoundary:
    def test_before_new_year_is_previous_animal(self):
        assert chinese_zodiac("05/02/2024") == "Rabbit"

    def test_after_new_year(self):
        assert chinese_zodiac("15/02/2024") == "Dragon"

    def test_new_year_day_counts_as_new_year(self):
        assert chinese_zodiac("10/02/2024") == "Dragon"
        assert chinese_zodiac("09/02/2024") == "Rabbit"

    def test_january_before_late_january_new_year(self):
        """1930 New Year is 30 Jan, so 1 Jan 1930 is still a Snake (1929)."""
        assert chinese_zodiac("01/01/1930") == "Snake"

    def test_effective_year(self):
        assert effective_chinese_year(10, 2, 2024) == 2024
        assert effective_chinese_year(9, 2, 2024) == 2023
        assert effective_chinese_year(1, 3, 2024) == 2024

    def test_table_lookup(self):
        assert chinese_new_year(2024) == (2, 10)
        assert chinese_new_year(1985) == (2, 20)
        assert chinese_new_year(1900) is None

    def test_table_spans_1930_to_2030(self):
        assert min(config.CHINESE_NEW_YEAR_DATES) == 1930
        assert max(config.CHINESE_NEW_YEAR_DATES) == 2030
        assert len(config.CHINESE_NEW_YEAR_DATES) == 101
        assert all(month in (1, 2) for month, _ in config.CHINESE_NEW_YEAR_DATES.values())


class TestZodiacMapping:
    @pytest.mark.parametrize("date_text,animal", [
        ("02/07/1981", "Rooster"),
        ("02-07-81", "Rooster"),
        ("15/6/2000", "Dragon"),
        ("08/05/1973", "Ox"),
    ])
    def test_known_dates(self, date_text, animal):
        assert chinese_zodiac(date_text) == animal

    def test_year_outside_table_is_not_adjusted(self):
        assert chinese_zodiac("01/01/1925") == "Ox"
        assert chinese_zodiac("15/03/2031") == "Pig"

    def test_pre_1924_years_stay_on_the_cycle(self):
        assert chinese_zodiac("01/06/1900") == "Rat"
        assert chinese_zodiac("01/06/1923") == "Pig"

    def test_cycle_starts_at_rat(self):
        assert [animal_for_year(y) for y in range(1924, 1936)] == list(config.ZODIAC_ANIMALS)

    def test_unparseable(self):
        with pytest.raises(UnparseableDate):
            chinese_zodiac("Not Available")


class TestMonthZodiac:
    @pytest.mark.parametrize("label,animal", [
        ("Jan 2024", "Rabbit"),
        ("Feb-24", "Dragon"),
        ("Mar 2024", "Dragon"),
        ("Feb 2026", "Snake"),
        ("Mar 2026", "Horse"),
    ])
    def test_mid_month(self, label, animal):
        assert month_zodiac(label) == animal

    def test_invalid_month(self):
        with pytest.raises(InvalidMonthName):
            month_zodiac("Foo 2024")
