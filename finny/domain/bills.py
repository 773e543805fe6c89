"""Bill scheduling rules - next due dates, reminders and on-time payments"""

from datetime import date
from typing import Optional, Tuple
from finny.domain.models import Frequency
from finny.domain.frequency import advance_due_date
from finny.utils.date_utils import days_between

DEFAULT_REMINDER_DAYS = 3


def next_due_date(due_date: date, frequency: str, is_recurring: bool) -> Optional[date]:
    """Due date following `due_date` for recurring bills, None otherwise"""
    if not is_recurring:
        return None
    return advance_due_date(due_date, frequency)


def reschedule(
    current_due_date: date,
    current_frequency: str,
    current_next_due_date: Optional[date],
    is_recurring: Optional[bool] = None,
    due_date: Optional[date] = None,
    frequency: Optional[str] = None,
) -> Tuple[str, Optional[date]]:
    """
    Resolve frequency and next due date after a bill edit.

    Requirements:
    - Turning recurrence off makes the bill one-time with no next due date
    - A recurring bill edited with a new due date or frequency is stepped
      forward from the (new) due date
    - Any other edit keeps the stored next due date

    Returns: (frequency, next_due_date)
    """
    if is_recurring is False:
        return Frequency.ONE_TIME.value, None

    resolved_frequency = frequency or current_frequency

    if is_recurring and (due_date is not None or frequency is not None):
        return resolved_frequency, advance_due_date(due_date or current_due_date, resolved_frequency)

    return resolved_frequency, current_next_due_date


def days_until_due(due_date: date, today: date | None = None) -> int:
    """Days left before the bill is due; negative once overdue"""
    today = today or date.today()
    return days_between(today, due_date)


def is_due_soon(due_date: date, reminder_days: int, today: date | None = None) -> bool:
    """True inside the reminder window (due today up to `reminder_days` ahead)"""
    days = days_until_due(due_date, today)
    return 0 <= days <= reminder_days


def is_on_time(payment_date: date, due_date: date) -> bool:
    return payment_date <= due_date
