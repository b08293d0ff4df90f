"""Tests for etpayroll.domain.payroll pure functions."""

import random
from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta, timezone

import pytest

from etpayroll.domain.payroll import (
    CustomExpense,
    InvalidRateError,
    RateConfig,
    calculate_net_profit,
    generate_payroll,
    generate_single_period_payroll,
    select_transport_days,
    validate_date_range,
    validate_rate_config,
)

# 2024-07-01 is a Monday; the 30-day period ends on 2024-07-30
START = date(2024, 7, 1)
END = date(2024, 7, 30)


class TestManagerTrack:
    """Tests for the general manager track."""

    def test_thirty_days_gives_two_blocks(self) -> None:
        """Should produce two 15-day blocks paid the day after each block."""
        result = generate_payroll(START, END, RateConfig())
        gm = result.entries_by_track.gm

        assert len(gm) == 2
        assert gm[0].payment_date == "2024-07-16"
        assert gm[0].description == "Payment 2024-07-01 - 2024-07-15"
        assert gm[1].payment_date == "2024-07-31"
        assert gm[0].rate == "500.00/day"
        assert gm[0].days == 15
        assert gm[0].total == 7500

    def test_exact_block_gives_one_entry(self) -> None:
        """A range exactly one block long should give one entry."""
        rates = RateConfig(gm_rate=450, gm_payment_days=10)
        result = generate_payroll(START, START + timedelta(days=9), rates)

        assert len(result.entries_by_track.gm) == 1
        assert result.entries_by_track.gm[0].total == 4500

    def test_partial_block_is_dropped(self) -> None:
        """A range one day short of a block should give no entries."""
        rates = RateConfig(gm_payment_days=10)
        result = generate_payroll(START, START + timedelta(days=8), rates)

        assert result.entries_by_track.gm == ()
        assert result.totals_by_track.gm == 0

    def test_zero_payment_days_gives_no_entries(self) -> None:
        """A zero-day block length should give an empty track."""
        result = generate_payroll(START, END, RateConfig(gm_payment_days=0))

        assert result.entries_by_track.gm == ()


class TestLaborerTracks:
    """Tests for the two laborer tracks."""

    def test_four_weeks_fit(self) -> None:
        """Should produce one entry per week when all weeks fit."""
        result = generate_payroll(START, END, RateConfig())
        tracks = result.entries_by_track

        assert len(tracks.laborer1) == 4
        assert len(tracks.laborer2) == 4
        assert tracks.laborer1[0].work_week == "Week 1"
        assert tracks.laborer1[3].work_week == "Week 4"
        assert tracks.laborer1[0].description == "Weekly Wage"
        assert tracks.laborer1[0].total == 2800

    def test_payment_dates_are_staggered(self) -> None:
        """Laborer 1 is paid one day after the worked span, laborer 2 two days."""
        result = generate_payroll(START, END, RateConfig())
        tracks = result.entries_by_track

        assert tracks.laborer1[0].payment_date == "2024-07-05"
        assert tracks.laborer2[0].payment_date == "2024-07-06"
        for first, second in zip(tracks.laborer1, tracks.laborer2):
            assert date.fromisoformat(second.payment_date) - date.fromisoformat(first.payment_date) == timedelta(days=1)
            assert first.total == second.total

    def test_weeks_beyond_range_are_dropped(self) -> None:
        """Weeks whose worked span ends after the range should be skipped."""
        result = generate_payroll(START, START + timedelta(days=9), RateConfig())

        assert len(result.entries_by_track.laborer1) == 1
        assert len(result.entries_by_track.laborer2) == 1
        assert result.totals_by_track.laborer1 == 2800


class TestTransportTrack:
    """Tests for the randomized transport track."""

    def test_requested_days_are_selected(self) -> None:
        """Should pick exactly the requested number of distinct non-Sundays, sorted."""
        result = generate_payroll(START, END, RateConfig())
        dates = [date.fromisoformat(entry.payment_date) for entry in result.entries_by_track.transport]

        assert len(dates) == 15
        assert len(set(dates)) == 15
        assert dates == sorted(dates)
        assert all(d.weekday() != 6 for d in dates)
        assert all(START <= d <= END for d in dates)

    def test_selection_capped_at_pool_size(self) -> None:
        """Should return every non-Sunday when more days are requested than exist."""
        week_end = START + timedelta(days=6)
        result = generate_payroll(START, week_end, RateConfig(transport_payment_days=15))

        assert len(result.entries_by_track.transport) == 6

    def test_flat_rate_entries(self) -> None:
        """Each transport entry should carry the flat daily fee."""
        result = generate_payroll(START, END, RateConfig(transport_rate=250, transport_payment_days=3))

        assert [entry.total for entry in result.entries_by_track.transport] == [250, 250, 250]
        assert result.entries_by_track.transport[0].description == "Daily Transport Fee"
        assert result.totals_by_track.transport == 750

    def test_seeded_generator_is_reproducible(self) -> None:
        """The same seed should give the same selection."""
        first = generate_payroll(START, END, RateConfig(), rng=random.Random(42))
        second = generate_payroll(START, END, RateConfig(), rng=random.Random(42))

        assert first.entries_by_track.transport == second.entries_by_track.transport

    def test_negative_count_selects_nothing(self) -> None:
        """A negative day count should select no days."""
        assert select_transport_days(START, END, -3, random.Random(1)) == []


class TestTotals:
    """Tests for totals, duration, and custom expenses."""

    def test_scenario_totals(self) -> None:
        """Default rates over 30 days should cost 40,400 birr."""
        result = generate_payroll(START, END, RateConfig())
        totals = result.totals_by_track

        assert totals.gm == 15000
        assert totals.laborer1 == 11200
        assert totals.laborer2 == 11200
        assert totals.transport == 3000
        assert totals.overall == 40400
        assert result.duration_days == 30

    def test_overall_is_sum_of_tracks(self) -> None:
        """Overall total should equal the sum of the track totals."""
        expenses = [
            CustomExpense(id="1", description="Cement", amount=1250.5, category="Materials"),
            CustomExpense(id="2", description="Water", amount=80.25),
        ]
        rates = RateConfig(gm_rate=333.33, labor_rate=123.45, transport_rate=99.9)
        result = generate_payroll(START, END, rates, expenses)
        t = result.totals_by_track

        assert t.custom_expenses == pytest.approx(1330.75)
        assert t.overall == pytest.approx(t.gm + t.laborer1 + t.laborer2 + t.transport + t.custom_expenses)

    def test_custom_expenses_pass_through(self) -> None:
        """Custom expenses should be returned unchanged."""
        expenses = [CustomExpense(id="x", description="Fuel", amount=500, category="Transport")]
        result = generate_payroll(START, END, RateConfig(), expenses)

        assert result.entries_by_track.custom_expenses == tuple(expenses)

    def test_inverted_range_gives_empty_tracks(self) -> None:
        """An end date before the start should produce no entries."""
        result = generate_payroll(END, START, RateConfig())
        tracks = result.entries_by_track

        assert tracks.gm == ()
        assert tracks.laborer1 == ()
        assert tracks.laborer2 == ()
        assert tracks.transport == ()
        assert result.totals_by_track.overall == 0

    def test_inverted_range_with_zero_day_weeks(self) -> None:
        """A zero-day work week should not produce entries on an inverted range."""
        result = generate_payroll(date(2024, 7, 2), date(2024, 7, 1), RateConfig(labor_days_per_week=0))
        tracks = result.entries_by_track

        assert tracks.laborer1 == ()
        assert tracks.laborer2 == ()
        assert result.totals_by_track.overall == 0

    def test_zero_day_weeks_give_no_entries(self) -> None:
        """A zero-day work week should give empty laborer tracks."""
        result = generate_payroll(START, END, RateConfig(labor_days_per_week=0))

        assert result.entries_by_track.laborer1 == ()
        assert result.totals_by_track.laborer1 == 0

    def test_tracks_are_immutable(self) -> None:
        """Track entries should not be extendable after generation."""
        tracks = generate_payroll(START, END, RateConfig()).entries_by_track

        assert isinstance(tracks.gm, tuple)
        assert isinstance(tracks.custom_expenses, tuple)
        with pytest.raises(FrozenInstanceError):
            tracks.gm = ()  # type: ignore[misc]

    def test_single_day_duration(self) -> None:
        """A one-day range should have a duration of one."""
        assert generate_payroll(START, START, RateConfig()).duration_days == 1


class TestValidation:
    """Tests for rate and range validation."""

    def test_nan_rate_raises(self) -> None:
        """Should reject NaN rates."""
        with pytest.raises(InvalidRateError):
            generate_payroll(START, END, RateConfig(gm_rate=float("nan")))

    def test_infinite_rate_raises(self) -> None:
        """Should reject infinite rates."""
        with pytest.raises(ValueError):
            validate_rate_config(RateConfig(transport_rate=float("inf")))

    def test_negative_rate_is_accepted(self) -> None:
        """Negative rates are left to form validation."""
        validate_rate_config(RateConfig(labor_rate=-1))

    def test_valid_range(self) -> None:
        """Should accept start before end."""
        assert validate_date_range(START, END) == (True, None)

    def test_inverted_range(self) -> None:
        """Should reject start after end."""
        is_valid, error = validate_date_range(END, START)

        assert not is_valid
        assert error is not None


class TestSinglePeriod:
    """Tests for single-period reports and net profit."""

    def test_net_profit_scenario(self) -> None:
        """Income of 50,000 against 40,400 of costs should net 9,600."""
        period = generate_single_period_payroll(50000, START, END, RateConfig())

        assert period.result.totals_by_track.overall == 40400
        assert period.net_profit == 9600
        assert period.income_amount == 50000
        assert period.start_date == "2024-07-01"
        assert period.end_date == "2024-07-30"

    def test_period_id_from_timestamp(self) -> None:
        """Should build the id from the creation time in milliseconds."""
        created = datetime(2025, 1, 1, tzinfo=timezone.utc)
        period = generate_single_period_payroll(0, START, END, RateConfig(), created_at=created)

        assert period.id == "single-1735689600000"

    def test_default_period_id(self) -> None:
        """Should prefix generated ids with "single-"."""
        period = generate_single_period_payroll(0, START, END, RateConfig())

        assert period.id.startswith("single-")

    def test_loss_is_negative(self) -> None:
        """Costs above income should give a negative net profit."""
        result = generate_payroll(START, END, RateConfig())

        assert calculate_net_profit(1000, result.totals_by_track) == -39400
