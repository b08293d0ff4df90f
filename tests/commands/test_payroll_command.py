"""Tests for payroll command helpers and the CLI wiring."""

import csv
from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from etpayroll.cli import app
from etpayroll.commands.payroll import apply_rate_overrides, compute_payroll_period, export_csv
from etpayroll.domain.payroll import RateConfig, generate_single_period_payroll
from etpayroll.domain.report import REPORT_COLUMNS

runner = CliRunner()


class TestComputePayrollPeriod:
    """Tests for compute_payroll_period."""

    def test_explicit_dates(self) -> None:
        """Should use the given dates and derive the Ethiopian year."""
        start, end, month, year = compute_payroll_period(None, None, "2024-07-01", "2024-07-30")

        assert (start, end) == (date(2024, 7, 1), date(2024, 7, 30))
        assert month is None
        assert year == 2016

    def test_ethiopian_month(self) -> None:
        """Should cover the Gregorian month mapped from the Ethiopian month."""
        start, end, month, year = compute_payroll_period(5, 2017, None, None)

        assert (start, end) == (date(2025, 1, 1), date(2025, 1, 31))
        assert (month, year) == (5, 2017)

    def test_only_start_raises(self) -> None:
        """Should require both ends of a custom period."""
        with pytest.raises(ValueError):
            compute_payroll_period(None, None, "2024-07-01", None)

    def test_invalid_month_raises(self) -> None:
        """Should reject months outside 1-13."""
        with pytest.raises(ValueError):
            compute_payroll_period(14, 2017, None, None)


class TestRateOverrides:
    """Tests for apply_rate_overrides."""

    def test_only_given_values_override(self) -> None:
        """Should ignore options left unset."""
        rates = apply_rate_overrides(RateConfig(), gm_rate=900.0, labor_weeks=None)

        assert rates == RateConfig(gm_rate=900.0)


class TestExportCsv:
    """Tests for export_csv."""

    def test_writes_header_and_rows(self, tmp_path: Path) -> None:
        """Should write one CSV row per report row."""
        period = generate_single_period_payroll(50000, date(2024, 7, 1), date(2024, 7, 30), RateConfig())
        output = tmp_path / "reports" / "payroll.csv"

        export_csv(period, output)

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert list(rows[0]) == REPORT_COLUMNS
        assert len(rows) == 25


class TestCli:
    """Smoke tests for the typer app."""

    def test_to_ec(self) -> None:
        """Should print the converted Ethiopian date."""
        result = runner.invoke(app, ["to-ec", "2024-09-11"])

        assert result.exit_code == 0
        assert "01/01/2017 E.C." in result.output

    def test_to_ec_invalid_date(self) -> None:
        """Should exit with an error for malformed dates."""
        result = runner.invoke(app, ["to-ec", "11/09/2024"])

        assert result.exit_code == 1

    def test_to_gc_invalid_month(self) -> None:
        """Should exit with an error for month 14."""
        result = runner.invoke(app, ["to-gc", "2017", "14", "1"])

        assert result.exit_code == 1

    def test_payroll_custom_period(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should print totals and export the report."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        output = tmp_path / "report.csv"

        result = runner.invoke(
            app,
            ["payroll", "--start", "2024-07-01", "--end", "2024-07-30", "--income", "50000", "--export", str(output)],
        )

        assert result.exit_code == 0
        assert "40,400.00" in result.output
        assert "9,600.00" in result.output
        assert output.exists()

    def test_payroll_inverted_period(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should refuse a start after the end."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))

        result = runner.invoke(app, ["payroll", "--start", "2024-07-30", "--end", "2024-07-01"])

        assert result.exit_code == 1

    def test_payroll_infinite_configured_rate(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should exit with an error when config.toml holds an infinite rate."""
        config_path = tmp_path / "config" / "etpayroll" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[rates]\nlabor_weeks = inf\n", encoding="utf-8")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

        result = runner.invoke(app, ["payroll", "--start", "2024-07-01", "--end", "2024-07-30"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "finite" in result.output

    def test_months_lists_transliterated_names(self) -> None:
        """Should list all thirteen months with their transliterated names."""
        result = runner.invoke(app, ["months", "--year", "2017"])

        assert result.exit_code == 0
        assert "Meskerem" in result.output
        assert "Pagume" in result.output
