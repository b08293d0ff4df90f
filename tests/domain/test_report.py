"""Tests for etpayroll.domain.report pure functions."""

import random
from datetime import date

from etpayroll.domain.payroll import CustomExpense, RateConfig, generate_payroll
from etpayroll.domain.report import REPORT_COLUMNS, format_currency, payroll_report_rows, track_summary

START = date(2024, 7, 1)
END = date(2024, 7, 30)


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_thousands_separator(self) -> None:
        """Should group thousands and keep two decimals."""
        assert format_currency(40400) == "40,400.00"

    def test_small_amount(self) -> None:
        """Should pad to two decimals."""
        assert format_currency(7.5) == "7.50"

    def test_negative_amount(self) -> None:
        """Should keep the sign."""
        assert format_currency(-1234.5) == "-1,234.50"


class TestPayrollReportRows:
    """Tests for payroll_report_rows."""

    def test_one_row_per_entry_and_expense(self) -> None:
        """Should flatten every track plus custom expenses."""
        expenses = [CustomExpense(id="1", description="Cement", amount=1250, category="Materials")]
        result = generate_payroll(START, END, RateConfig(), expenses, rng=random.Random(7))

        rows = payroll_report_rows(result)

        assert len(rows) == 2 + 4 + 4 + 15 + 1
        assert all(list(row) == REPORT_COLUMNS for row in rows)

    def test_track_order(self) -> None:
        """Should list manager rows first and custom expenses last."""
        expenses = [CustomExpense(id="1", description="Cement", amount=1250)]
        rows = payroll_report_rows(generate_payroll(START, END, RateConfig(), expenses))

        assert rows[0]["track"] == "General Manager"
        assert rows[2]["track"] == "Laborer 1"
        assert rows[2]["work_week"] == "Week 1"
        assert rows[-1]["track"] == "Custom Expenses"
        assert rows[-1]["description"] == "Cement"
        assert rows[-1]["total"] == 1250

    def test_transport_rows_have_no_days(self) -> None:
        """Transport rows should leave the days column blank."""
        rows = payroll_report_rows(generate_payroll(START, END, RateConfig()))
        transport = [row for row in rows if row["track"] == "Transport"]

        assert transport
        assert all(row["days"] == "" for row in transport)


class TestTrackSummary:
    """Tests for track_summary."""

    def test_summary_counts_and_totals(self) -> None:
        """Should report count and total for each track."""
        summary = track_summary(generate_payroll(START, END, RateConfig()))

        assert summary == [
            ("General Manager", 2, 15000),
            ("Laborer 1", 4, 11200),
            ("Laborer 2", 4, 11200),
            ("Transport", 15, 3000),
            ("Custom Expenses", 0, 0),
        ]
