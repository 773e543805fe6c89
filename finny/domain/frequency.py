"""Frequency normalization and recurring due-date stepping"""

from datetime import date
from typing import Dict, Optional
from dateutil.relativedelta import relativedelta
from finny.domain.models import Frequency

# Multiplier turning one payment at the given frequency into a monthly amount.
# One-time amounts are spread over a year.
MONTHLY_FACTORS: Dict[str, float] = {
    Frequency.ONE_TIME.value: 1 / 12,
    Frequency.WEEKLY.value: 52 / 12,
    Frequency.BI_WEEKLY.value: 26 / 12,
    Frequency.MONTHLY.value: 1.0,
    Frequency.QUARTERLY.value: 1 / 3,
    Frequency.YEARLY.value: 1 / 12,
}

# Step between consecutive due dates of a recurring bill
DUE_DATE_STEPS: Dict[str, relativedelta] = {
    Frequency.WEEKLY.value: relativedelta(days=7),
    Frequency.BI_WEEKLY.value: relativedelta(days=14),
    Frequency.MONTHLY.value: relativedelta(months=1),
    Frequency.QUARTERLY.value: relativedelta(months=3),
    Frequency.YEARLY.value: relativedelta(years=1),
}


def _key(frequency) -> str:
    return getattr(frequency, "value", frequency)


def normalize_to_monthly(amount: float, frequency: str) -> float:
    """
    Convert an amount paid at `frequency` into its monthly equivalent.

    Unknown frequencies are treated as already monthly.

    Example:
        $1200 yearly -> $100 monthly
        $100 weekly  -> $433.33 monthly (52 weeks / 12 months)
    """
    return amount * MONTHLY_FACTORS.get(_key(frequency), 1.0)


def advance_due_date(due_date: date, frequency: str) -> Optional[date]:
    """Next due date one step after `due_date`; None for one-time or unknown frequencies"""
    step = DUE_DATE_STEPS.get(_key(frequency))
    if step is None:
        return None
    return due_date + step
