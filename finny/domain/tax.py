"""Tax estimation - single-bracket approximation of US federal income tax"""

from typing import List, Tuple
from finny.domain.models import EmploymentMode, TaxEstimate

# (upper bound inclusive, rate); the last bracket has no upper bound
TAX_BRACKETS: List[Tuple[float, float]] = [
    (11_000, 0.10),
    (44_725, 0.12),
    (95_375, 0.22),
    (182_100, 0.24),
    (231_250, 0.32),
    (578_125, 0.35),
    (float("inf"), 0.37),
]

SELF_EMPLOYMENT_RATE = 0.0765


def calculate_tax_bracket(annual_income: float) -> float:
    """Rate of the single bracket whose range contains `annual_income`"""
    for upper_bound, rate in TAX_BRACKETS:
        if annual_income <= upper_bound:
            return rate
    return TAX_BRACKETS[-1][1]


def estimate_tax(annual_income: float, employment_mode: str = EmploymentMode.FULL_TIME.value) -> TaxEstimate:
    """
    Estimate annual tax and after-tax income.

    The selected bracket rate applies to the whole income rather than
    cumulatively per bracket. Contract work adds the self-employment rate
    on top of the bracket.

    Example:
        $50,000 full-time -> 22% -> tax $11,000, after-tax $39,000
        $50,000 contract  -> 29.65% -> tax $14,825, after-tax $35,175
    """
    bracket = calculate_tax_bracket(annual_income)

    if getattr(employment_mode, "value", employment_mode) == EmploymentMode.CONTRACT.value:
        bracket += SELF_EMPLOYMENT_RATE

    tax_amount = annual_income * bracket
    return TaxEstimate(
        bracket=bracket,
        tax_amount=tax_amount,
        after_tax_income=annual_income - tax_amount,
    )
