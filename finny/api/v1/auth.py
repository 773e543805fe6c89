"""Session endpoints - register, login, logout and session inspection"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from finny.api.v1.schemas import LoginRequest, RegisterRequest, SessionResponse, SessionUpdateRequest
from finny.api.dependencies import SESSION_USER_KEY, get_current_user, get_request_id
from finny.infrastructure.database.session import get_db
from finny.infrastructure.database.repositories import UserRepository
from finny.infrastructure.database.models import User
from finny.infrastructure.security import hash_password, verify_password
from finny.domain.exceptions import DuplicateEmailError, InvalidCredentialsError

router = APIRouter()


def _session_response(user: User) -> SessionResponse:
    return SessionResponse(user_id=str(user.id), email=user.email, name=user.name)


def register_user(db: Session, email: str, password: str, name: str | None = None) -> User:
    """Create an account; raises DuplicateEmailError when the email is taken"""
    repo = UserRepository(db)
    if repo.get_by_email(email):
        raise DuplicateEmailError(f"Account already exists for {email}")
    return repo.create_user(email=email, password_hash=hash_password(password), name=name)


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user for valid credentials; raises InvalidCredentialsError otherwise"""
    user = UserRepository(db).get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid email or password")
    return user


@router.post("/auth/register", response_model=SessionResponse, status_code=201)
def register(body: RegisterRequest, request: Request, db: Session = Depends(get_db)):
    """Create an account and sign it in"""
    request_id = get_request_id(request)
    email = body.email.strip().lower()

    try:
        user = register_user(db, email, body.password, body.name)
        db.commit()
    except DuplicateEmailError as e:
        db.rollback()
        logging.warning(f"Registration rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Email already registered")
    except IntegrityError as e:
        db.rollback()
        logging.warning(f"Registration conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Email already registered")
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Unexpected error creating user: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    request.session[SESSION_USER_KEY] = str(user.id)
    return _session_response(user)


@router.post("/auth/login", response_model=SessionResponse)
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Start a session for valid credentials"""
    try:
        user = authenticate(db, body.email.strip().lower(), body.password)
    except InvalidCredentialsError:
        logging.info("Login failed", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=401, detail="Invalid email or password")

    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)
    return _session_response(user)


@router.get("/auth/session", response_model=SessionResponse)
def read_session(user: User = Depends(get_current_user)):
    return _session_response(user)


@router.post("/auth/session/update", dependencies=[Depends(get_current_user)])
def update_session(body: SessionUpdateRequest, request: Request):
    """Refresh the display name cached in the session cookie"""
    request.session["name"] = body.name
    return {"message": "Session updated", "success": True}


@router.post("/auth/logout")
def logout(request: Request):
    request.session.clear()
    return {"success": True}
