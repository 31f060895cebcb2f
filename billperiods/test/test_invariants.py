"""
Property sweeps over every cadence, billing time and billing mode.
"""

import calendar
import itertools
from datetime import date, timedelta

import pytest

from billperiods.calculator import create_period_calculator
from billperiods.schema import BillingContext, BillingTime

START = date(2019, 1, 15)
AMOUNT = 12_345

INTERVALS = ["weekly", "monthly", "quarterly", "yearly"]
BILLING_TIMES = [BillingTime.CALENDAR, BillingTime.ANNIVERSARY]
MODES = list(itertools.product([False, True], [False, True]))

REFERENCE_DATES = [date(2020, 6, 1) + timedelta(days=37 * i) for i in range(30)]


def make_context(billing_time, reference_date, pay_in_advance, bill_charges_monthly, **kwargs):
    return BillingContext(
        anchor_date=START,
        started_at=START,
        reference_date=reference_date,
        billing_time=billing_time,
        pay_in_advance=pay_in_advance,
        bill_charges_monthly=bill_charges_monthly,
        plan_amount_cents=AMOUNT,
        **kwargs,
    )


@pytest.mark.parametrize("interval", INTERVALS)
@pytest.mark.parametrize("billing_time", BILLING_TIMES)
@pytest.mark.parametrize("pay_in_advance, bill_charges_monthly", MODES)
class TestBoundaryInvariants:

    def test_windows_are_ordered_and_start_after_activation(
        self, interval, billing_time, pay_in_advance, bill_charges_monthly
    ):
        for reference_date in REFERENCE_DATES:
            context = make_context(billing_time, reference_date, pay_in_advance, bill_charges_monthly)
            calc = create_period_calculator(context, interval)
            boundaries = calc.boundaries()
            assert boundaries.from_date <= boundaries.to_date
            assert boundaries.charges_from_date <= boundaries.charges_to_date
            assert boundaries.from_date >= START
            assert boundaries.charges_from_date >= START

    def test_termination_clips_both_windows(
        self, interval, billing_time, pay_in_advance, bill_charges_monthly
    ):
        for reference_date in REFERENCE_DATES:
            context = make_context(
                billing_time,
                reference_date,
                pay_in_advance,
                bill_charges_monthly,
                terminated_at=reference_date,
            )
            calc = create_period_calculator(context, interval)
            assert calc.from_date() <= calc.to_date() <= reference_date
            assert calc.charges_to_date() <= reference_date
            assert calc.from_date() >= START

    def test_navigation_round_trip(
        self, interval, billing_time, pay_in_advance, bill_charges_monthly
    ):
        for reference_date in REFERENCE_DATES:
            context = make_context(billing_time, reference_date, pay_in_advance, bill_charges_monthly)
            calc = create_period_calculator(context, interval)

            current_start = calc.previous_beginning_of_period(current_period=True)
            previous_start = calc.previous_beginning_of_period()
            assert previous_start < current_start <= reference_date

            current_end = calc.next_end_of_period(current_start)
            assert current_end >= reference_date
            assert calc.next_end_of_period(reference_date) == current_end
            assert calc.next_end_of_period(current_end) == current_end
            assert calc.next_end_of_period(previous_start) + timedelta(days=1) == current_start

    def test_price_reconstructs_plan_amount(
        self, interval, billing_time, pay_in_advance, bill_charges_monthly
    ):
        for reference_date in REFERENCE_DATES:
            context = make_context(billing_time, reference_date, pay_in_advance, bill_charges_monthly)
            calc = create_period_calculator(context, interval)
            assert abs(calc.single_day_price() * calc.period_day_count() - AMOUNT) < 1

    def test_arrears_charges_stay_inside_the_period_on_boundaries(
        self, interval, billing_time, pay_in_advance, bill_charges_monthly
    ):
        if pay_in_advance:
            pytest.skip("advance charges trail the invoiced period")
        for reference_date in REFERENCE_DATES:
            probe = create_period_calculator(
                make_context(billing_time, reference_date, False, bill_charges_monthly), interval
            )
            billing_date = probe.previous_beginning_of_period(current_period=True)
            calc = create_period_calculator(
                make_context(billing_time, billing_date, False, bill_charges_monthly), interval
            )
            assert calc.from_date() <= calc.charges_from_date()
            assert calc.charges_to_date() <= calc.to_date()


def test_yearly_calendar_day_counts_follow_leap_years():
    for year in range(2019, 2030):
        context = make_context(BillingTime.CALENDAR, date(year, 6, 1), False, False)
        calc = create_period_calculator(context, "yearly")
        expected = 366 if calendar.isleap(year) else 365
        assert calc.period_day_count(date(year, 6, 1)) == expected


def test_anniversary_yearly_day_counts_track_february():
    for year in range(2019, 2030):
        context = make_context(BillingTime.ANNIVERSARY, date(year, 6, 1), False, False)
        calc = create_period_calculator(context, "yearly")
        # Period from Jan 15 of year to Jan 14 of year + 1 contains Feb of year
        expected = 366 if calendar.isleap(year) else 365
        assert calc.period_day_count(date(year, 6, 1)) == expected
