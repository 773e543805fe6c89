"""Data access layer for Finny entities"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, selectinload
from finny.infrastructure.database.models import User, Income, Expense, Bill, BillPayment
from finny.domain.models import MoneyEntry, GamificationState


def income_entry(income: Income) -> MoneyEntry:
    """Map an income row onto the calculation engine's entry type"""
    return MoneyEntry(
        id=str(income.id),
        amount=float(income.amount),
        frequency=income.frequency,
        label=income.source,
        description=income.description,
    )


def expense_entry(expense: Expense) -> MoneyEntry:
    return MoneyEntry(
        id=str(expense.id),
        amount=float(expense.amount),
        frequency=expense.frequency,
        label=expense.category,
        description=expense.description,
    )


def _apply(row: Any, changes: Dict[str, Any]) -> None:
    for key, value in changes.items():
        setattr(row, key, value)


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, email: str, password_hash: str, name: Optional[str] = None) -> User:
        db_user = User(email=email, password_hash=password_hash, name=name)
        self.db.add(db_user)
        self.db.flush()  # Get ID without committing
        return db_user

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def update(self, user: User, **changes: Any) -> User:
        """Apply the given column changes and flush"""
        _apply(user, changes)
        self.db.flush()
        return user

    def save_gamification(self, user: User, state: GamificationState) -> User:
        """Persist level, experience and streak from a gamification state"""
        return self.update(user, level=state.level, experience=state.experience, streak=state.streak)


class _OwnedRepository:
    """Shared queries for rows that belong to a single user"""

    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def get(self, entry_id: uuid.UUID) -> Optional[Any]:
        return self.db.get(self.model, entry_id)

    def create(self, user_id: uuid.UUID, **fields: Any) -> Any:
        row = self.model(user_id=user_id, **fields)
        self.db.add(row)
        self.db.flush()
        return row

    def update(self, row: Any, **changes: Any) -> Any:
        _apply(row, changes)
        self.db.flush()
        return row

    def delete(self, row: Any) -> None:
        self.db.delete(row)
        self.db.flush()


class IncomeRepository(_OwnedRepository):
    """Repository for income entries"""

    model = Income

    def list_for_user(self, user_id: uuid.UUID) -> List[Income]:
        """Income records, most recent date first"""
        return (
            self.db.query(Income)
            .filter(Income.user_id == user_id)
            .order_by(Income.date.desc(), Income.created_at.desc())
            .all()
        )


class ExpenseRepository(_OwnedRepository):
    """Repository for expense entries"""

    model = Expense

    def list_for_user(self, user_id: uuid.UUID) -> List[Expense]:
        """Expenses, newest first"""
        return (
            self.db.query(Expense)
            .filter(Expense.user_id == user_id)
            .order_by(Expense.created_at.desc())
            .all()
        )

    def tracked_days(self, user_id: uuid.UUID) -> int:
        """Distinct days on which the user recorded an expense"""
        rows = self.db.query(Expense.date).filter(Expense.user_id == user_id).distinct().all()
        return len(rows)


class BillRepository(_OwnedRepository):
    """Repository for bills and their payment history"""

    model = Bill

    def list_for_user(self, user_id: uuid.UUID) -> List[Bill]:
        """Bills ordered by due date, payment history loaded"""
        return (
            self.db.query(Bill)
            .options(selectinload(Bill.payments))
            .filter(Bill.user_id == user_id)
            .order_by(Bill.due_date.asc())
            .all()
        )

    def add_payment(
        self,
        bill: Bill,
        amount: float,
        payment_date: date,
        notes: Optional[str] = None,
        method: Optional[str] = None,
    ) -> BillPayment:
        """Append a payment event to the bill's history"""
        payment = BillPayment(
            bill_id=bill.id,
            amount=amount,
            payment_date=payment_date,
            notes=notes,
            method=method,
        )
        self.db.add(payment)
        self.db.flush()
        return payment
