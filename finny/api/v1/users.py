"""User endpoints - profile, declared income settings and experience sync"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import (
    ExperienceResponse,
    ExperienceUpdateRequest,
    IncomeSettingsRequest,
    IncomeSettingsResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserResponse,
)
from finny.api.dependencies import get_current_user, get_request_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import UserRepository
from finny.infrastructure.database.models import User
from finny.infrastructure.observability.logging import log_experience_change
from finny.infrastructure.observability.metrics import level_up_counter
from finny.domain.gamification import next_level_experience

router = APIRouter()


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        bio=user.bio,
        income=float(user.income or 0),
        income_frequency=user.income_frequency,
        employment_mode=user.employment_mode,
        created_at=user.created_at,
    )


def experience_response(user: User, message: str | None = None) -> ExperienceResponse:
    return ExperienceResponse(
        experience=user.experience,
        level=user.level,
        next_level_experience=next_level_experience(user.level),
        streak=user.streak,
        message=message,
    )


@router.get("/user", response_model=UserResponse)
def get_user(user: User = Depends(get_current_user)):
    return user_response(user)


@router.put("/user/profile", response_model=ProfileUpdateResponse)
def update_profile(
    body: ProfileUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update name and bio; blank values keep the stored ones"""
    changes = {}
    if body.name:
        changes["name"] = body.name
    if body.bio:
        changes["bio"] = body.bio

    try:
        UserRepository(db).update(user, **changes)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating user profile: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Something went wrong")

    db.refresh(user)
    return ProfileUpdateResponse(message="Profile updated successfully", user=user_response(user))


@router.put("/user/income", response_model=IncomeSettingsResponse)
def update_income_settings(
    body: IncomeSettingsRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Store the declared income, its frequency and the employment mode"""
    try:
        UserRepository(db).update(
            user,
            income=body.income,
            income_frequency=body.income_frequency.value,
            employment_mode=body.employment_mode.value,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating income: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Something went wrong")

    return IncomeSettingsResponse(
        id=str(user.id),
        income=float(user.income),
        income_frequency=user.income_frequency,
        employment_mode=user.employment_mode,
    )


@router.get("/user/experience", response_model=ExperienceResponse)
def get_experience(user: User = Depends(get_current_user)):
    return experience_response(user)


@router.put("/user/experience", response_model=ExperienceResponse)
def update_experience(
    body: ExperienceUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Persist level and experience computed by the client-side gamification engine.

    The values are stored as sent; the client owns the XP rules for
    income/expense entries.
    """
    previous_level = user.level

    try:
        UserRepository(db).update(user, experience=body.experience, level=body.level)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating user experience: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Something went wrong")

    if body.level > previous_level:
        level_up_counter.inc(body.level - previous_level)
    log_experience_change(str(user.id), user.level, user.experience, source="sync")

    return experience_response(user, message="Experience updated successfully")
