"""Gamification engine - XP/level state machine and financial health score"""

from dataclasses import replace
from typing import Dict, Sequence
from finny.domain.models import FinancialCalculations, GamificationState, MoneyEntry
from finny.domain.exceptions import InvalidExperienceError

# Cumulative XP required to reach each level
LEVEL_THRESHOLDS: Dict[int, int] = {
    1: 0,
    2: 100,
    3: 250,
    4: 450,
    5: 700,
    6: 1000,
    7: 1350,
    8: 1750,
    9: 2200,
    10: 2700,
}
MAX_TABLE_LEVEL = 10
XP_PER_LEVEL_BEYOND_TABLE = 350

# XP rewards
EXPENSE_ENTRY_XP = 5
INCOME_SETTINGS_XP = 10
ON_TIME_PAYMENT_XP = 10
INCOME_ENTRY_BASE_XP = 10
INCOME_ENTRY_MAX_XP = 30


def level_threshold(level: int) -> int:
    """XP needed to reach `level`; past the table each level costs a flat 350"""
    if level <= 1:
        return 0
    if level <= MAX_TABLE_LEVEL:
        return LEVEL_THRESHOLDS[level]
    return (level - 1) * XP_PER_LEVEL_BEYOND_TABLE


def next_level_experience(level: int) -> int:
    """Target XP shown for `level` (the threshold of the following level)"""
    return level_threshold(level + 1)


def level_for_experience(experience: int) -> int:
    """Highest level whose threshold is covered by `experience`"""
    if experience >= level_threshold(MAX_TABLE_LEVEL + 1):
        return experience // XP_PER_LEVEL_BEYOND_TABLE + 1

    level = 1
    for candidate, threshold in LEVEL_THRESHOLDS.items():
        if experience >= threshold:
            level = candidate
    return level


def initial_state(level: int = 1, experience: int = 0, streak: int = 0) -> GamificationState:
    return GamificationState(
        level=level,
        experience=experience,
        next_level_experience=next_level_experience(level),
        streak=streak,
    )


def add_experience(state: GamificationState, amount: int) -> GamificationState:
    """
    Grant XP and resolve a level-up if the current target is reached.

    Rules:
    - Below the target: experience accumulates, level and target unchanged
    - At or above the target: level jumps to lookup(new total) (several levels
      at once if enough XP), but experience is stored as the overflow
      `amount - (target - experience)` rather than the new total

    Example:
        level 1, 90/100 XP, +20 -> level 2, 10 XP, target 250
    """
    if amount < 0:
        raise InvalidExperienceError(f"Experience gain must be non-negative, got {amount}")

    new_experience = state.experience + amount

    if new_experience < state.next_level_experience:
        return replace(state, experience=new_experience)

    new_level = level_for_experience(new_experience)
    overflow = amount - (state.next_level_experience - state.experience)

    return replace(
        state,
        level=new_level,
        experience=overflow,
        next_level_experience=next_level_experience(new_level),
    )


def income_entry_xp(amount: float) -> int:
    """Larger incomes earn more XP: 10 base + 1 per $100, capped at 30"""
    return min(INCOME_ENTRY_BASE_XP + int(amount // 100), INCOME_ENTRY_MAX_XP)


def calculate_health_score(
    monthly_income: float,
    monthly_expenses: float,
    monthly_balance: float,
    income_source_count: int,
    expense_count: int,
) -> int:
    """
    Heuristic 0-100 financial health score.

    Scoring weights:
    - 40%: Income/expense ratio, ratio x 50 capped at 100 (no expenses -> 100)
    - 20%: Income diversity, 20 points per source up to 5
    - 20%: Expense tracking, 10 points per tracked expense up to 10
    - 20%: Balance, surplus scores balance/income x 200 (capped at 100),
           deficit scores 50 + balance/income x 100 (floored at 0)
    """
    if monthly_expenses > 0:
        ratio_score = min(100.0, monthly_income / monthly_expenses * 50)
    else:
        ratio_score = 100.0

    diversity_score = min(5, income_source_count) * 20
    tracking_score = min(10, expense_count) * 10

    if monthly_income <= 0:
        balance_score = 0.0
    elif monthly_balance > 0:
        balance_score = min(100.0, monthly_balance / monthly_income * 200)
    else:
        balance_score = max(0.0, 50 + monthly_balance / monthly_income * 100)

    score = 0.4 * ratio_score + 0.2 * diversity_score + 0.2 * tracking_score + 0.2 * balance_score
    return int(round(min(100.0, max(0.0, score))))


def health_score_for(
    calculations: FinancialCalculations,
    incomes: Sequence[MoneyEntry],
    expenses: Sequence[MoneyEntry],
) -> int:
    """Health score from a calculations record and the lists it was built from"""
    return calculate_health_score(
        monthly_income=calculations.total_monthly_income,
        monthly_expenses=calculations.total_monthly_expenses,
        monthly_balance=calculations.monthly_balance,
        income_source_count=len({income.label for income in incomes}),
        expense_count=len(expenses),
    )
