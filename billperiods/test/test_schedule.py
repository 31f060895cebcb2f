"""
Tests for billing schedule generation.
"""

from datetime import date

import pandas as pd
import pytest

from billperiods.conventions import YEARLY
from billperiods.schedule import PeriodBoundaries
from billperiods.schedule.generator import BillingScheduleGenerator, to_frame
from billperiods.schema import BillingContext, BillingTime

PLAN_AMOUNT = 36_500


@pytest.fixture
def yearly_context():
    return BillingContext(
        anchor_date=date(2021, 2, 7),
        started_at=date(2021, 2, 7),
        reference_date=date(2021, 2, 7),
        billing_time=BillingTime.CALENDAR,
        plan_amount_cents=PLAN_AMOUNT,
    )


class TestBillingDates:

    def test_arrears_billing_dates(self, yearly_context):
        generator = BillingScheduleGenerator("yearly")
        assert generator.billing_dates(yearly_context, date(2024, 1, 1)) == [
            date(2022, 1, 1),
            date(2023, 1, 1),
            date(2024, 1, 1),
        ]

    def test_advance_bills_on_start(self, yearly_context):
        generator = BillingScheduleGenerator(YEARLY)
        context = yearly_context.replace(pay_in_advance=True)
        assert generator.billing_dates(context, "2023-06-30") == [
            date(2021, 2, 7),
            date(2022, 1, 1),
            date(2023, 1, 1),
        ]

    def test_termination_limits_billing_dates(self):
        context = BillingContext(
            anchor_date=date(2022, 1, 15),
            started_at=date(2022, 1, 15),
            reference_date=date(2022, 1, 15),
            billing_time=BillingTime.ANNIVERSARY,
            terminated_at=date(2022, 4, 20),
        )
        generator = BillingScheduleGenerator("monthly")
        assert generator.billing_dates(context, date(2022, 12, 31)) == [
            date(2022, 2, 15),
            date(2022, 3, 15),
            date(2022, 4, 15),
        ]


class TestGenerate:

    def test_arrears_schedule(self, yearly_context):
        periods = BillingScheduleGenerator("yearly").generate(yearly_context, date(2024, 1, 1))
        assert len(periods) == 3

        first = periods[0]
        assert first.billing_date == date(2022, 1, 1)
        assert (first.from_date, first.to_date) == (date(2021, 2, 7), date(2021, 12, 31))
        assert (first.charges_from_date, first.charges_to_date) == (
            date(2021, 2, 7),
            date(2021, 12, 31),
        )
        assert first.day_count == 365
        assert first.single_day_price == PLAN_AMOUNT / 365
        assert first.has_charges
        assert not first.is_termination

        second = periods[1]
        assert (second.from_date, second.to_date) == (date(2022, 1, 1), date(2022, 12, 31))
        assert second.year_fraction == pytest.approx(1.0)

    def test_periods_are_contiguous(self, yearly_context):
        periods = BillingScheduleGenerator("yearly").generate(yearly_context, date(2026, 1, 1))
        for previous, current in zip(periods, periods[1:]):
            assert (current.from_date - previous.to_date).days == 1

    def test_advance_schedule(self, yearly_context):
        context = yearly_context.replace(pay_in_advance=True)
        periods = BillingScheduleGenerator("yearly").generate(context, date(2024, 1, 1))
        assert len(periods) == 4

        first = periods[0]
        assert (first.from_date, first.to_date) == (date(2021, 2, 7), date(2021, 12, 31))
        assert not first.has_charges
        assert first.charges_to_date is None

        second = periods[1]
        assert (second.from_date, second.to_date) == (date(2022, 1, 1), date(2022, 12, 31))
        assert (second.charges_from_date, second.charges_to_date) == (
            date(2021, 2, 7),
            date(2021, 12, 31),
        )

    def test_terminated_schedule_ends_with_termination_invoice(self):
        context = BillingContext(
            anchor_date=date(2022, 1, 15),
            started_at=date(2022, 1, 15),
            reference_date=date(2022, 1, 15),
            billing_time=BillingTime.ANNIVERSARY,
            terminated_at=date(2022, 4, 20),
            plan_amount_cents=3_000,
        )
        periods = BillingScheduleGenerator("monthly").generate(context, date(2022, 12, 31))
        assert [p.billing_date for p in periods] == [
            date(2022, 2, 15),
            date(2022, 3, 15),
            date(2022, 4, 15),
            date(2022, 4, 20),
        ]
        assert (periods[2].from_date, periods[2].to_date) == (date(2022, 3, 15), date(2022, 4, 14))

        final = periods[-1]
        assert final.is_termination
        assert (final.from_date, final.to_date) == (date(2022, 4, 15), date(2022, 4, 20))
        assert final.day_count == 30

    def test_termination_after_until_is_not_invoiced(self):
        context = BillingContext(
            anchor_date=date(2022, 1, 15),
            started_at=date(2022, 1, 15),
            reference_date=date(2022, 1, 15),
            billing_time=BillingTime.ANNIVERSARY,
            terminated_at=date(2022, 4, 20),
        )
        periods = BillingScheduleGenerator("monthly").generate(context, date(2022, 3, 31))
        assert len(periods) == 2
        assert not any(p.is_termination for p in periods)


class TestToFrame:

    def test_frame_layout(self, yearly_context):
        context = yearly_context.replace(pay_in_advance=True)
        frame = to_frame(BillingScheduleGenerator("yearly").generate(context, date(2024, 1, 1)))
        assert len(frame) == 4
        assert pd.api.types.is_datetime64_any_dtype(frame["from_date"])
        assert pd.isna(frame.loc[0, "charges_from_date"])
        assert frame.loc[1, "from_date"] == pd.Timestamp("2022-01-01")
        assert frame.loc[2, "year_fraction"] == pytest.approx(1.0)
        assert list(frame["day_count"]) == [365, 365, 365, 366]

    def test_empty_frame(self):
        frame = to_frame([])
        assert frame.empty
        assert "single_day_price" in frame.columns


class TestPeriodBoundaries:

    def test_day_spans_and_dict(self):
        boundaries = PeriodBoundaries(
            from_date=date(2022, 1, 1),
            to_date=date(2022, 12, 31),
            charges_from_date=date(2022, 12, 1),
            charges_to_date=date(2022, 12, 31),
        )
        assert boundaries.days == 365
        assert boundaries.charges_days == 31
        assert boundaries.to_dict() == {
            "from_date": "2022-01-01",
            "to_date": "2022-12-31",
            "charges_from_date": "2022-12-01",
            "charges_to_date": "2022-12-31",
        }
