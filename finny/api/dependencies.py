"""Dependency injection for FastAPI endpoints"""

import uuid
from typing import Any
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import UserRepository
from finny.infrastructure.database.models import User

SESSION_USER_KEY = "user_id"


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Resolve the signed-in user from the session cookie.

    Raises:
        HTTPException 401: No session or a tampered user id
        HTTPException 404: Session points at a deleted user
    """
    raw_user_id = request.session.get(SESSION_USER_KEY)
    if not raw_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        user_id = uuid.UUID(raw_user_id)
    except ValueError:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = UserRepository(db).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user


def parse_id(raw_id: str, label: str = "resource") -> uuid.UUID:
    """Parse a path id, 400 on malformed input"""
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")


def ensure_owner(row: Any, user: User, label: str) -> Any:
    """404 when the row is missing, 403 when another user owns it"""
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    if row.user_id != user.id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return row
