"""Badges and challenges evaluated from the user's current budget"""

from typing import List
from finny.domain.models import Achievement, FinancialCalculations

SAVER_BALANCE = 500
TRACKER_DAYS = 14
STREAK_KEEPER_STREAK = 3
EXPENSE_TRACKER_GOAL = 10
SAVING_CHAMPION_RATE = 20


def savings_rate(calculations: FinancialCalculations) -> float:
    """Monthly balance as a percentage of monthly income (0 with no income)"""
    if calculations.total_monthly_income <= 0:
        return 0.0
    return calculations.monthly_balance / calculations.total_monthly_income * 100


def evaluate_achievements(
    calculations: FinancialCalculations,
    expense_count: int,
    tracked_days: int,
    streak: int,
) -> List[Achievement]:
    """
    Evaluate every badge and challenge.

    Args:
        calculations: Current derived metrics
        expense_count: Number of tracked expense entries
        tracked_days: Distinct days on which expenses were recorded
        streak: On-time bill payment streak
    """
    rate = savings_rate(calculations)
    under_budget = (
        calculations.total_monthly_income > 0
        and expense_count > 0
        and calculations.monthly_balance >= 0
    )

    return [
        Achievement(
            name="Saver",
            description=f"Save ${SAVER_BALANCE} in your budget",
            kind="badge",
            earned=calculations.monthly_balance >= SAVER_BALANCE,
        ),
        Achievement(
            name="Tracker",
            description=f"Track expenses for {TRACKER_DAYS} days",
            kind="badge",
            earned=tracked_days >= TRACKER_DAYS,
        ),
        Achievement(
            name="Wise Spender",
            description="Stay under budget for a month",
            kind="badge",
            earned=under_budget,
        ),
        Achievement(
            name="Streak Keeper",
            description=f"Pay {STREAK_KEEPER_STREAK} bills on time in a row",
            kind="badge",
            earned=streak >= STREAK_KEEPER_STREAK,
        ),
        Achievement(
            name="Expense Tracker",
            description=f"Add {EXPENSE_TRACKER_GOAL} expenses to your budget",
            kind="challenge",
            earned=expense_count >= EXPENSE_TRACKER_GOAL,
            progress=min(expense_count, EXPENSE_TRACKER_GOAL),
            goal=EXPENSE_TRACKER_GOAL,
            reward=50,
        ),
        Achievement(
            name="Saving Champion",
            description=f"Save {SAVING_CHAMPION_RATE}% of your monthly income",
            kind="challenge",
            earned=rate >= SAVING_CHAMPION_RATE,
            progress=round(max(0.0, min(rate, SAVING_CHAMPION_RATE)), 1),
            goal=SAVING_CHAMPION_RATE,
            reward=100,
        ),
    ]
