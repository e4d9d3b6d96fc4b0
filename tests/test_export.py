"""Tests for CSV schedule export."""

import csv
import io
from decimal import Decimal

import pytest
from investment_calc import (
    CompoundingFrequency,
    ExportError,
    InvestmentParameters,
    ProjectionResult,
    YearlyRecord,
    export_schedule_csv,
    project,
    write_schedule_csv,
)
from investment_calc.export import fmt_csv


def _result(**kw):
    base = dict(
        starting_amount=Decimal("1000"), years=2, annual_rate=Decimal("5"),
        compounding=CompoundingFrequency.MONTHLY,
        annual_contribution=Decimal("120"), contributions_per_year=12,
    )
    base.update(kw)
    return project(InvestmentParameters(**base))


def _lines(result, monthly):
    buf = io.StringIO()
    write_schedule_csv(result, monthly, buf)
    return buf.getvalue().splitlines()


class TestFmtCsv:
    def test_two_decimals(self):
        assert fmt_csv(Decimal("1307.5")) == "1307.50"

    def test_half_up(self):
        assert fmt_csv(Decimal("0.125")) == "0.13"

    def test_no_grouping(self):
        assert fmt_csv(Decimal("1234567.891")) == "1234567.89"

    def test_negative_zero(self):
        assert fmt_csv(Decimal("-0.001")) == "0.00"


class TestYearlyCsv:
    def test_handbuilt_result(self):
        """Yearly export of hand-built records."""
        params = InvestmentParameters(
            starting_amount=Decimal("1000"), years=2, annual_rate=Decimal("5"),
            compounding=CompoundingFrequency.ANNUALLY,
        )
        years = (
            YearlyRecord(1, Decimal("1000"), Decimal("100"), Decimal("50"), Decimal("1150")),
            YearlyRecord(2, Decimal("1150"), Decimal("100"), Decimal("57.50"), Decimal("1307.50")),
        )
        result = ProjectionResult(
            params=params,
            end_balance=Decimal("1307.50"),
            total_contributions=Decimal("1200"),
            total_interest=Decimal("107.50"),
            monthly=(),
            yearly=years,
        )
        lines = _lines(result, monthly=False)
        assert lines == [
            "Year,Start Balance,Contributions,Interest,End Balance",
            "1,1000.00,100.00,50.00,1150.00",
            "2,1150.00,100.00,57.50,1307.50",
        ]

    def test_row_per_year(self):
        lines = _lines(_result(years=5), monthly=False)
        assert len(lines) == 6
        assert lines[1].startswith("1,1000.00,")

    def test_header_on_empty_result(self):
        result = ProjectionResult(
            params=InvestmentParameters(), end_balance=Decimal("0"),
            total_contributions=Decimal("0"), total_interest=Decimal("0"),
            monthly=(), yearly=(),
        )
        assert _lines(result, monthly=False) == [
            "Year,Start Balance,Contributions,Interest,End Balance",
        ]


class TestMonthlyCsv:
    def setup_method(self):
        self.result = _result()
        self.lines = _lines(self.result, monthly=True)

    def test_header(self):
        assert self.lines[0] == "Month,Start Balance,Contributions,Interest,End Balance"

    def test_row_per_month(self):
        assert len(self.lines) == 1 + 24

    def test_label_is_quoted(self):
        assert self.lines[1].startswith('"Year 1, Month 1",1000.00,10.00,')

    def test_parses_back(self):
        rows = list(csv.reader(self.lines))
        assert rows[1][0] == "Year 1, Month 1"
        assert len(rows[1]) == 5
        last = rows[-1]
        assert last[0] == "Year 2, Month 12"
        assert last[4] == fmt_csv(self.result.end_balance)

    def test_currency_never_changes_separator(self):
        for row in list(csv.reader(self.lines))[1:]:
            for value in row[1:]:
                assert "," not in value
                assert value.count(".") == 1


class TestExportFile:
    def test_writes_file(self, tmp_path):
        path = export_schedule_csv(_result(), tmp_path / "annual.csv")
        assert path == tmp_path / "annual.csv"
        text = path.read_text(encoding="utf-8")
        assert text.startswith("Year,Start Balance,Contributions,Interest,End Balance\n")

    def test_appends_extension(self, tmp_path):
        path = export_schedule_csv(_result(), tmp_path / "schedule", monthly=True)
        assert path.name == "schedule.csv"
        assert path.exists()

    def test_creates_parent_dirs(self, tmp_path):
        path = export_schedule_csv(_result(), tmp_path / "out" / "deep" / "s.csv")
        assert path.exists()

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        result = _result()
        with pytest.raises(ExportError, match="Error exporting CSV"):
            export_schedule_csv(result, blocker / "s.csv")
        assert len(result.monthly) == 24
