# app/routers/auth.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_account_id
from app.database import get_session
from app.repositories.account_repo import AccountRepository
from app.schemas.account import AuthResponse, LoginRequest, MeResponse, SignupRequest
from app.services.account_service import AccountService

router = APIRouter(tags=["Auth"])

repo = AccountRepository()
service = AccountService(repo)


@router.post(
    "/auth/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    payload: SignupRequest,
    session: Session = Depends(get_session),
):
    """
    Create an account and return an access token.

    Email is stored lowercase; a duplicate email is rejected with 409.
    """
    return service.signup(session, payload)


@router.post("/auth/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange email + password for an access token.
    """
    return service.login(session, payload)


@router.get("/me", response_model=MeResponse)
def read_me(
    session: Session = Depends(get_session),
    account_id: uuid.UUID = Depends(require_account_id),
):
    """
    Return the authenticated user's profile.
    """
    return service.me(session, account_id)
