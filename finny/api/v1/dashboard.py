"""GET /dashboard - derived financial metrics, gamification and achievements"""

from dataclasses import asdict
from typing import List, Tuple
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finny.api.v1.schemas import (
    AchievementSchema,
    AchievementsResponse,
    CalculationsSchema,
    DashboardResponse,
    GamificationSchema,
)
from finny.api.dependencies import get_current_user
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import (
    ExpenseRepository,
    IncomeRepository,
    expense_entry,
    income_entry,
)
from finny.infrastructure.database.models import User
from finny.domain.achievements import evaluate_achievements
from finny.domain.calculations import calculate_financials, category_totals
from finny.domain.gamification import health_score_for, next_level_experience
from finny.domain.models import FinancialCalculations, MoneyEntry

router = APIRouter()


def _load_entries(db: Session, user: User) -> Tuple[List[MoneyEntry], List[MoneyEntry]]:
    incomes = [income_entry(i) for i in IncomeRepository(db).list_for_user(user.id)]
    expenses = [expense_entry(e) for e in ExpenseRepository(db).list_for_user(user.id)]
    return incomes, expenses


def _calculate(db: Session, user: User) -> Tuple[FinancialCalculations, List[MoneyEntry], List[MoneyEntry]]:
    incomes, expenses = _load_entries(db, user)
    return calculate_financials(incomes, expenses, user.employment_mode), incomes, expenses


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """
    Recompute the dashboard from the stored incomes and expenses.

    Nothing here is persisted; the numbers are a pure function of the
    current entries and the user's employment mode.
    """
    calculations, incomes, expenses = _calculate(db, user)

    return DashboardResponse(
        employment_mode=user.employment_mode,
        calculations=CalculationsSchema(**asdict(calculations)),
        category_totals=category_totals(expenses),
        gamification=GamificationSchema(
            level=user.level,
            experience=user.experience,
            next_level_experience=next_level_experience(user.level),
            streak=user.streak,
            health_score=health_score_for(calculations, incomes, expenses),
        ),
    )


@router.get("/dashboard/achievements", response_model=AchievementsResponse)
def get_achievements(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    calculations, _, expenses = _calculate(db, user)
    achievements = evaluate_achievements(
        calculations,
        expense_count=len(expenses),
        tracked_days=ExpenseRepository(db).tracked_days(user.id),
        streak=user.streak,
    )
    return AchievementsResponse(
        streak=user.streak,
        achievements=[AchievementSchema(**asdict(a)) for a in achievements],
    )
