"""POST /bills/payment - record a bill payment and reward on-time payers"""

import logging
from dataclasses import replace
from datetime import datetime, time, timezone
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import PaymentCreate, PaymentResponse
from finny.api.v1.bills import bill_response, owned_bill, payment_schema
from finny.api.v1.users import experience_response
from finny.api.dependencies import get_current_user, get_request_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import BillRepository, UserRepository
from finny.infrastructure.database.models import User
from finny.infrastructure.observability.logging import log_bill_payment
from finny.infrastructure.observability.metrics import record_bill_payment
from finny.domain.bills import is_on_time, next_due_date
from finny.domain.gamification import ON_TIME_PAYMENT_XP, add_experience, initial_state
from finny.domain.models import BillStatus

router = APIRouter()


@router.post("/bills/payment", response_model=PaymentResponse)
def record_payment(
    body: PaymentCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Record a payment against a bill.

    Flow:
    1. Append the payment to the bill's history
    2. Mark the bill paid and step the next due date (recurring) or clear it
    3. Payment on or before the due date: +10 XP through the gamification
       engine and +1 streak
    4. Commit everything in one transaction
    """
    request_id = get_request_id(request)
    bill = owned_bill(body.bill_id, db, user)

    on_time = is_on_time(body.payment_date, bill.due_date)
    previous_level = user.level
    gained = 0

    try:
        bill_repo = BillRepository(db)
        payment = bill_repo.add_payment(
            bill,
            amount=body.amount,
            payment_date=body.payment_date,
            notes=body.notes,
            method=body.method,
        )
        bill_repo.update(
            bill,
            is_paid=True,
            last_paid=datetime.combine(body.payment_date, time.min, tzinfo=timezone.utc),
            status=BillStatus.PAID.value,
            next_due_date=next_due_date(bill.due_date, bill.frequency, bill.is_recurring),
        )

        if on_time:
            state = add_experience(initial_state(user.level, user.experience, user.streak), ON_TIME_PAYMENT_XP)
            UserRepository(db).save_gamification(user, replace(state, streak=state.streak + 1))
            gained = ON_TIME_PAYMENT_XP

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error recording payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to record payment")

    record_bill_payment(on_time, gained, leveled_up=user.level > previous_level)
    log_bill_payment(request_id, str(user.id), str(bill.id), on_time, user.level, user.experience)

    return PaymentResponse(
        payment=payment_schema(payment),
        bill=bill_response(bill),
        on_time=on_time,
        experience=experience_response(user),
    )
