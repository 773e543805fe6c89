"""Bill endpoints - recurring bills with due-date tracking"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import BillCreate, BillPaymentSchema, BillResponse, BillUpdate, DeleteResponse
from finny.api.dependencies import ensure_owner, get_current_user, get_request_id, parse_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import BillRepository
from finny.infrastructure.database.models import Bill, BillPayment, User
from finny.infrastructure.observability.logging import log_entry_created
from finny.infrastructure.observability.metrics import entries_created_counter, entries_deleted_counter
from finny.domain.bills import days_until_due, is_due_soon, next_due_date, reschedule
from finny.domain.models import BillStatus, Frequency
from finny.utils.date_utils import utcnow

router = APIRouter()

RECENT_PAYMENTS_IN_LIST = 3


def payment_schema(payment: BillPayment) -> BillPaymentSchema:
    return BillPaymentSchema(
        id=str(payment.id),
        amount=float(payment.amount),
        payment_date=payment.payment_date,
        notes=payment.notes,
        method=payment.method,
    )


def bill_response(bill: Bill, payment_limit: Optional[int] = None) -> BillResponse:
    """Serialize a bill with its payment history (newest first, optionally truncated)"""
    payments = bill.payments if payment_limit is None else bill.payments[:payment_limit]
    return BillResponse(
        id=str(bill.id),
        name=bill.name,
        amount=float(bill.amount),
        category=bill.category,
        description=bill.description,
        due_date=bill.due_date,
        next_due_date=bill.next_due_date,
        is_recurring=bill.is_recurring,
        frequency=bill.frequency,
        reminder_days=bill.reminder_days,
        is_paid=bill.is_paid,
        last_paid=bill.last_paid,
        status=bill.status,
        auto_pay=bill.auto_pay,
        payment_url=bill.payment_url,
        is_pinned=bill.is_pinned,
        days_until_due=days_until_due(bill.due_date),
        is_due_soon=is_due_soon(bill.due_date, bill.reminder_days),
        payment_history=[payment_schema(p) for p in payments],
    )


def owned_bill(bill_id: str, db: Session, user: User) -> Bill:
    row = BillRepository(db).get(parse_id(bill_id, "bill"))
    return ensure_owner(row, user, "Bill")


@router.get("/bills", response_model=List[BillResponse])
def list_bills(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Bills ordered by due date, each with its 3 most recent payments"""
    bills = BillRepository(db).list_for_user(user.id)
    return [bill_response(b, payment_limit=RECENT_PAYMENTS_IN_LIST) for b in bills]


@router.post("/bills", response_model=BillResponse, status_code=201)
def create_bill(
    body: BillCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Create a bill in `upcoming` status.

    Recurring bills get their next due date one frequency step after the
    due date; non-recurring bills are stored as one-time.
    """
    request_id = get_request_id(request)
    frequency = body.frequency.value if body.is_recurring else Frequency.ONE_TIME.value

    try:
        bill = BillRepository(db).create(
            user.id,
            name=body.name,
            amount=body.amount,
            category=body.category,
            description=body.description,
            due_date=body.due_date,
            next_due_date=next_due_date(body.due_date, frequency, body.is_recurring),
            is_recurring=body.is_recurring,
            frequency=frequency,
            reminder_days=body.reminder_days,
            auto_pay=body.auto_pay,
            payment_url=body.payment_url,
            status=BillStatus.UPCOMING.value,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error creating bill: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create bill")

    entries_created_counter.labels(kind="bill").inc()
    log_entry_created(request_id, str(user.id), "bill", str(bill.id), body.amount, frequency)

    return bill_response(bill)


@router.get("/bills/{bill_id}", response_model=BillResponse)
def get_bill(bill_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    """Bill with its full payment history"""
    return bill_response(owned_bill(bill_id, db, user))


@router.put("/bills/{bill_id}", response_model=BillResponse)
def update_bill(
    bill_id: str,
    body: BillUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Partially update a bill.

    Rules:
    - Recurring bill with a new due date or frequency: next due date recalculated
    - is_recurring=false: frequency becomes one-time, next due date cleared
    - is_paid=true stamps last_paid; is_paid without explicit status sets
      status to paid / upcoming
    """
    bill = owned_bill(bill_id, db, user)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    frequency, next_due = reschedule(
        current_due_date=bill.due_date,
        current_frequency=bill.frequency,
        current_next_due_date=bill.next_due_date,
        is_recurring=body.is_recurring if body.is_recurring is not None else bill.is_recurring,
        due_date=body.due_date,
        frequency=body.frequency.value if body.frequency else None,
    )
    changes["frequency"] = frequency
    changes["next_due_date"] = next_due

    if body.status is not None:
        changes["status"] = body.status.value
    elif body.is_paid is not None:
        changes["status"] = BillStatus.PAID.value if body.is_paid else BillStatus.UPCOMING.value

    if body.is_paid:
        changes["last_paid"] = utcnow()

    try:
        BillRepository(db).update(bill, **changes)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating bill: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to update bill")

    return bill_response(bill)


@router.delete("/bills/{bill_id}", response_model=DeleteResponse)
def delete_bill(
    bill_id: str,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Delete a bill together with its payment history"""
    bill = owned_bill(bill_id, db, user)

    try:
        BillRepository(db).delete(bill)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error deleting bill: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to delete bill")

    entries_deleted_counter.labels(kind="bill").inc()
    return DeleteResponse()
