"""
Unit tests for the batch annotation pipeline.

Coverage:
- Per-company constants (Life Path, company zodiac)
- Per-month Personal Year / Month and month zodiac
- Company-level skips (missing / sentinel / unparseable incorporation date)
- Record-level isolation of bad month labels
- Output ordering and export columns
"""
import pytest

import config
from core.annotator import annotate_companies, annotate_company, to_dataframe
from core.records import CompanyBlock, MonthlyRecord


def _month(label, open_="100.00", close="110.00", high="115.00", low="95.00", change="10.00"):
    return MonthlyRecord(label, open_, close, high, low, change)


@pytest.fixture
def acme():
    return CompanyBlock(
        stock="ACME",
        incorporation_date="15/6/2000",
        months=(_month("May 2024"), _month("Jun 2024", close="120.50"), _month("Foo 2024")),
    )


class TestAnnotateCompany:
    def test_company_constants(self, acme):
        records, _ = annotate_company(acme)
        # 15 + 6 + (2+0+0+0) = 23 -> 5
        assert {r.life_path for r in records} == {5}
        assert {r.company_zodiac for r in records} == {"Dragon"}
        assert {r.incorporation_date for r in records} == {"15/6/2000"}

    def test_month_numbers(self, acme):
        records, _ = annotate_company(acme)
        may, jun = records
        assert (may.month_year, may.personal_year, may.personal_month) == ("May 2024", 28, 33)
        assert (jun.month_year, jun.personal_year, jun.personal_month) == ("Jun 2024", 11, 8)
        assert may.month_zodiac == jun.month_zodiac == "Dragon"

    def test_price_fields_are_carried_verbatim(self, acme):
        records, _ = annotate_company(acme)
        jun = records[1]
        assert (jun.open, jun.close, jun.high, jun.low, jun.change_pct) == (
            "100.00", "120.50", "115.00", "95.00", "10.00")

    def test_bad_month_is_skipped_not_fatal(self, acme):
        records, skipped = annotate_company(acme)
        assert len(records) == 2
        assert len(skipped) == 1
        assert skipped[0].stock == "ACME"
        assert skipped[0].month_year == "Foo 2024"
        assert "Foo" in skipped[0].reason

    def test_labels_are_cleaned(self):
        block = CompanyBlock("ACME", "15/6/2000", (_month("Jun-24"), _month("Jun 2024 00:00")))
        records, skipped = annotate_company(block)
        assert not skipped
        assert [r.month_year for r in records] == ["Jun 2024", "Jun 2024"]
        assert [r.personal_year for r in records] == [11, 11]

    @pytest.mark.parametrize("inc_date", ["Not Available", "N/A", "", None, "   "])
    def test_missing_incorporation_date_skips_company(self, inc_date):
        block = CompanyBlock("NOPE", inc_date, (_month("Jan 2024"),))
        records, skipped = annotate_company(block)
        assert records == []
        assert len(skipped) == 1
        assert skipped[0].month_year is None

    def test_unparseable_incorporation_date_skips_company(self):
        block = CompanyBlock("BAD", "1981-07-02", (_month("Jan 2024"),))
        records, skipped = annotate_company(block)
        assert records == []
        assert skipped[0].stock == "BAD"
        assert skipped[0].month_year is None


class TestAnnotateCompanies:
    def test_not_available_only_batch_completes(self):
        result = annotate_companies([CompanyBlock("NOPE", "Not Available", (_month("Jan 2024"),))])
        assert result.count == 0
        assert result.companies_processed == 0
        assert len(result.skipped) == 1

    def test_order_is_preserved(self, acme):
        other = CompanyBlock("ZETA", "02/07/1981", (_month("Mar 2024"), _month("Jan 2024")))
        result = annotate_companies([other, acme])
        assert [(r.stock, r.month_year) for r in result.records] == [
            ("ZETA", "Mar 2024"), ("ZETA", "Jan 2024"),
            ("ACME", "May 2024"), ("ACME", "Jun 2024"),
        ]
        assert result.companies_processed == 2
        assert result.count == 4

    def test_skips_do_not_abort_the_batch(self, acme):
        blocks = [CompanyBlock("NOPE", "Not Available", ()), acme]
        result = annotate_companies(blocks)
        assert result.count == 2
        assert result.companies_processed == 1
        assert [s.stock for s in result.skipped] == ["NOPE", "ACME"]

    def test_non_ascii_digits_in_date_skip_only_that_company(self):
        blocks = [
            CompanyBlock("BAD", "02/07/19²1", (_month("Jan 2024"),)),
            CompanyBlock("GOOD", "02/07/1981", (_month("Jan 2024"),)),
        ]
        result = annotate_companies(blocks)
        assert result.count == 1
        assert result.companies_processed == 1
        assert result.records[0].stock == "GOOD"
        assert [(s.stock, s.month_year) for s in result.skipped] == [("BAD", None)]

    def test_company_without_months(self):
        result = annotate_companies([CompanyBlock("EMPTY", "02/07/1981", ())])
        assert result.count == 0
        assert result.companies_processed == 1
        assert result.skipped == []

    def test_empty_batch(self):
        result = annotate_companies([])
        assert result.count == 0
        assert result.records == []


class TestExportShape:
    def test_row_columns(self, acme):
        records, _ = annotate_company(acme)
        row = records[0].to_row()
        assert tuple(row) == config.OUTPUT_COLUMNS
        assert row["Stock"] == "ACME"
        assert row["Life_Path"] == 5
        assert row["Change_%"] == "10.00"

    def test_dataframe(self, acme):
        records, _ = annotate_company(acme)
        df = to_dataframe(records)
        assert list(df.columns) == list(config.OUTPUT_COLUMNS)
        assert len(df) == 2

    def test_empty_dataframe_keeps_columns(self):
        df = to_dataframe([])
        assert list(df.columns) == list(config.OUTPUT_COLUMNS)
        assert df.empty

    def test_records_are_immutable(self, acme):
        records, _ = annotate_company(acme)
        with pytest.raises(AttributeError):
            records[0].life_path = 1
