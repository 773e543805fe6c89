"""Expense endpoints - CRUD on the user's tracked expenses"""

import logging
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import DeleteResponse, ExpenseCreate, ExpenseResponse, ExpenseUpdate
from finny.api.dependencies import ensure_owner, get_current_user, get_request_id, parse_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import ExpenseRepository
from finny.infrastructure.database.models import Expense, User
from finny.infrastructure.observability.logging import log_entry_created
from finny.infrastructure.observability.metrics import entries_created_counter, entries_deleted_counter
from finny.domain.frequency import normalize_to_monthly

router = APIRouter()


def expense_response(expense: Expense) -> ExpenseResponse:
    amount = float(expense.amount)
    return ExpenseResponse(
        id=str(expense.id),
        category=expense.category,
        amount=amount,
        frequency=expense.frequency,
        monthly_amount=normalize_to_monthly(amount, expense.frequency),
        description=expense.description,
        date=expense.date,
        created_at=expense.created_at,
    )


def _owned_expense(expense_id: str, db: Session, user: User) -> Expense:
    row = ExpenseRepository(db).get(parse_id(expense_id, "expense"))
    return ensure_owner(row, user, "Expense")


@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return [expense_response(e) for e in ExpenseRepository(db).list_for_user(user.id)]


@router.post("/expenses", response_model=ExpenseResponse, status_code=201)
def create_expense(
    body: ExpenseCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Record an expense dated today"""
    request_id = get_request_id(request)

    try:
        expense = ExpenseRepository(db).create(
            user.id,
            category=body.category,
            amount=body.amount,
            frequency=body.frequency.value,
            description=body.description,
            date=date.today(),
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error creating expense: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Something went wrong")

    entries_created_counter.labels(kind="expense").inc()
    log_entry_created(request_id, str(user.id), "expense", str(expense.id), body.amount, body.frequency.value)

    return expense_response(expense)


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return expense_response(_owned_expense(expense_id, db, user))


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    body: ExpenseUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    expense = _owned_expense(expense_id, db, user)
    changes = body.model_dump(exclude_unset=True, exclude_none=True, mode="json")

    try:
        ExpenseRepository(db).update(expense, **changes)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating expense: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to update expense")

    return expense_response(expense)


@router.delete("/expenses/{expense_id}", response_model=DeleteResponse)
def delete_expense(
    expense_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    expense = _owned_expense(expense_id, db, user)

    try:
        ExpenseRepository(db).delete(expense)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error deleting expense: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to delete expense")

    entries_deleted_counter.labels(kind="expense").inc()
    return DeleteResponse()
