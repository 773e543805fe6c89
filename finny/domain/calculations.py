"""Financial calculations aggregator - derived metrics over incomes and expenses"""

from typing import Dict, Iterable
from finny.domain.models import EmploymentMode, FinancialCalculations, MoneyEntry
from finny.domain.frequency import normalize_to_monthly
from finny.domain.tax import estimate_tax


def total_monthly(entries: Iterable[MoneyEntry]) -> float:
    """Sum of entries after normalizing each to a monthly amount"""
    return sum((normalize_to_monthly(e.amount, e.frequency) for e in entries), 0.0)


def calculate_financials(
    incomes: Iterable[MoneyEntry],
    expenses: Iterable[MoneyEntry],
    employment_mode: str = EmploymentMode.FULL_TIME.value,
) -> FinancialCalculations:
    """
    Recompute every derived metric from the current income and expense lists.

    Flow:
    1. Normalize incomes and expenses to monthly and sum them
    2. Annualize monthly income and run the tax estimator
    3. Monthly balance = after-tax income / 12 - monthly expenses

    Returns a fresh FinancialCalculations; callers replace the previous
    record as a whole.
    """
    monthly_income = total_monthly(incomes)
    monthly_expenses = total_monthly(expenses)
    annual_income = monthly_income * 12

    tax = estimate_tax(annual_income, employment_mode)

    return FinancialCalculations(
        total_monthly_income=monthly_income,
        total_annual_income=annual_income,
        total_monthly_expenses=monthly_expenses,
        monthly_balance=tax.after_tax_income / 12 - monthly_expenses,
        tax_bracket=tax.bracket,
        tax_amount=tax.tax_amount,
        after_tax_income=tax.after_tax_income,
    )


def category_totals(expenses: Iterable[MoneyEntry]) -> Dict[str, float]:
    """Monthly expense total per category, largest first"""
    totals: Dict[str, float] = {}
    for expense in expenses:
        totals[expense.label] = totals.get(expense.label, 0.0) + normalize_to_monthly(
            expense.amount, expense.frequency
        )
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))
