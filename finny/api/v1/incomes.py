"""Income endpoints - CRUD on the user's income sources"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import DeleteResponse, IncomeCreate, IncomeResponse, IncomeUpdate
from finny.api.dependencies import ensure_owner, get_current_user, get_request_id, parse_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import IncomeRepository
from finny.infrastructure.database.models import Income, User
from finny.infrastructure.observability.logging import log_entry_created
from finny.infrastructure.observability.metrics import entries_created_counter, entries_deleted_counter
from finny.domain.frequency import normalize_to_monthly

router = APIRouter()


def income_response(income: Income) -> IncomeResponse:
    amount = float(income.amount)
    return IncomeResponse(
        id=str(income.id),
        source=income.source,
        amount=amount,
        frequency=income.frequency,
        monthly_amount=normalize_to_monthly(amount, income.frequency),
        description=income.description,
        date=income.date,
        created_at=income.created_at,
    )


def _owned_income(income_id: str, db: Session, user: User) -> Income:
    row = IncomeRepository(db).get(parse_id(income_id, "income"))
    return ensure_owner(row, user, "Income record")


@router.get("/income", response_model=List[IncomeResponse])
def list_incomes(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """All income records for the signed-in user, most recent first"""
    return [income_response(i) for i in IncomeRepository(db).list_for_user(user.id)]


@router.post("/income", response_model=IncomeResponse, status_code=201)
def create_income(
    body: IncomeCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    request_id = get_request_id(request)

    try:
        income = IncomeRepository(db).create(
            user.id,
            source=body.source,
            amount=body.amount,
            frequency=body.frequency.value,
            description=body.description,
            date=body.date,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error creating income record: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create income record")

    entries_created_counter.labels(kind="income").inc()
    log_entry_created(request_id, str(user.id), "income", str(income.id), body.amount, body.frequency.value)

    return income_response(income)


@router.get("/income/{income_id}", response_model=IncomeResponse)
def get_income(income_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return income_response(_owned_income(income_id, db, user))


@router.put("/income/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: str,
    body: IncomeUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update the provided fields; omitted fields keep their stored values"""
    income = _owned_income(income_id, db, user)
    changes = body.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    if "date" in changes:
        changes["date"] = body.date

    try:
        IncomeRepository(db).update(income, **changes)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating income record: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to update income record")

    return income_response(income)


@router.delete("/income/{income_id}", response_model=DeleteResponse)
def delete_income(
    income_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    income = _owned_income(income_id, db, user)

    try:
        IncomeRepository(db).delete(income)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error deleting income record: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to delete income record")

    entries_deleted_counter.labels(kind="income").inc()
    return DeleteResponse()
