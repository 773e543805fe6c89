"""Domain models - pure Python dataclasses representing budgeting entities"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Frequency(str, Enum):
    """Recurrence unit for a money amount"""

    ONE_TIME = "one-time"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class EmploymentMode(str, Enum):
    """How the user earns income; contract work carries self-employment tax"""

    FULL_TIME = "full-time"
    CONTRACT = "contract"
    OTHER = "other"


class BillStatus(str, Enum):
    PAID = "paid"
    UPCOMING = "upcoming"
    OVERDUE = "overdue"


@dataclass(frozen=True)
class MoneyEntry:
    """Income or expense line as seen by the calculation engine.

    `label` is the income source or the expense category.
    """

    id: str
    amount: float
    frequency: str
    label: str
    description: Optional[str] = None


@dataclass(frozen=True)
class TaxEstimate:
    """Output of the tax estimator (annual figures)"""

    bracket: float
    tax_amount: float
    after_tax_income: float


@dataclass(frozen=True)
class FinancialCalculations:
    """Derived metrics recomputed after every income/expense mutation"""

    total_monthly_income: float = 0.0
    total_annual_income: float = 0.0
    total_monthly_expenses: float = 0.0
    monthly_balance: float = 0.0
    tax_bracket: float = 0.0
    tax_amount: float = 0.0
    after_tax_income: float = 0.0


@dataclass(frozen=True)
class GamificationState:
    """XP / level state plus the latest health score"""

    level: int = 1
    experience: int = 0
    next_level_experience: int = 100
    streak: int = 0
    health_score: int = 0


@dataclass(frozen=True)
class Achievement:
    """Badge or challenge evaluated from the user's current numbers"""

    name: str
    description: str
    kind: str  # "badge" or "challenge"
    earned: bool
    progress: float = 0.0
    goal: float = 0.0
    reward: int = 0

