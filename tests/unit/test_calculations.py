"""Unit tests for the financial calculations aggregator"""

import pytest
from finny.domain.calculations import calculate_financials, category_totals, total_monthly
from helpers import entry


def test_empty_budget():
    calculations = calculate_financials([], [])

    assert calculations.total_monthly_income == 0
    assert calculations.total_monthly_expenses == 0
    assert calculations.monthly_balance == 0
    assert calculations.tax_bracket == 0.10


def test_salary_only():
    """$5,000/month -> $60,000/year -> 22% -> $46,800 after tax -> $3,900/month"""
    calculations = calculate_financials([entry(5000, "Salary")], [])

    assert calculations.total_annual_income == pytest.approx(60_000)
    assert calculations.tax_bracket == 0.22
    assert calculations.tax_amount == pytest.approx(13_200)
    assert calculations.after_tax_income == pytest.approx(46_800)
    assert calculations.monthly_balance == pytest.approx(3_900)


def test_adding_monthly_expense_lowers_balance_by_its_amount():
    incomes = [entry(5000, "Salary")]
    before = calculate_financials(incomes, [])
    after = calculate_financials(incomes, [entry(120, "Food")])

    assert after.total_monthly_expenses == pytest.approx(before.total_monthly_expenses + 120)
    assert after.monthly_balance == pytest.approx(before.monthly_balance - 120)


def test_yearly_income_adds_a_twelfth_per_month():
    incomes = [entry(5000, "Salary")]
    before = calculate_financials(incomes, [])
    after = calculate_financials(incomes + [entry(1200, "Bonus", "yearly")], [])

    assert after.total_monthly_income == pytest.approx(before.total_monthly_income + 100)


def test_contract_mode_lowers_balance():
    incomes = [entry(5000, "Clients")]
    full_time = calculate_financials(incomes, [], "full-time")
    contract = calculate_financials(incomes, [], "contract")

    # 60,000 x 7.65% / 12
    assert full_time.monthly_balance - contract.monthly_balance == pytest.approx(382.5)


def test_mixed_frequencies_are_normalized_before_summing():
    expenses = [entry(1200, "Rent"), entry(100, "Food", "weekly"), entry(600, "Insurance", "yearly")]

    assert total_monthly(expenses) == pytest.approx(1200 + 100 * 52 / 12 + 50)


def test_category_totals_merge_and_sort():
    totals = category_totals(
        [
            entry(100, "Food", "weekly", entry_id="a"),
            entry(50, "Food", entry_id="b"),
            entry(1200, "Rent"),
            entry(600, "Insurance", "yearly"),
        ]
    )

    assert list(totals) == ["Rent", "Food", "Insurance"]
    assert totals["Food"] == pytest.approx(100 * 52 / 12 + 50)
    assert totals["Insurance"] == pytest.approx(50)
