"""Unit tests for frequency normalization and due-date stepping"""

import pytest
from datetime import date
from finny.domain.frequency import advance_due_date, normalize_to_monthly
from finny.domain.models import Frequency


@pytest.mark.parametrize(
    "amount,frequency,expected",
    [
        (1200, "yearly", 100.0),
        (300, "quarterly", 100.0),
        (500, "monthly", 500.0),
        (100, "weekly", 100 * 52 / 12),
        (100, "bi-weekly", 100 * 26 / 12),
        (1200, "one-time", 100.0),
    ],
)
def test_normalize_to_monthly(amount, frequency, expected):
    assert normalize_to_monthly(amount, frequency) == pytest.approx(expected)


def test_normalize_accepts_enum_members():
    assert normalize_to_monthly(1200, Frequency.YEARLY) == pytest.approx(100.0)


def test_unknown_frequency_is_treated_as_monthly():
    assert normalize_to_monthly(250, "daily") == 250


def test_weekly_is_more_than_four_weeks():
    """52 weeks spread over 12 months, not 4 weeks per month"""
    assert normalize_to_monthly(100, "weekly") > 400


def test_advance_due_date_weekly_and_biweekly():
    assert advance_due_date(date(2024, 3, 1), "weekly") == date(2024, 3, 8)
    assert advance_due_date(date(2024, 3, 1), "bi-weekly") == date(2024, 3, 15)


def test_advance_due_date_clamps_to_month_end():
    """Jan 31 + 1 month lands on the last day of February"""
    assert advance_due_date(date(2023, 1, 31), "monthly") == date(2023, 2, 28)
    assert advance_due_date(date(2024, 1, 31), "monthly") == date(2024, 2, 29)
    assert advance_due_date(date(2024, 11, 30), "quarterly") == date(2025, 2, 28)
    assert advance_due_date(date(2024, 2, 29), "yearly") == date(2025, 2, 28)


def test_advance_due_date_one_time_has_no_next_date():
    assert advance_due_date(date(2024, 3, 1), "one-time") is None
    assert advance_due_date(date(2024, 3, 1), "daily") is None
