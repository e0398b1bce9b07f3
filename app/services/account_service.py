# app/services/account_service.py
import logging
import uuid

from sqlmodel import Session

from app.core.errors import AccountNotFoundError, ConflictError, UnauthorizedError
from app.core.params import normalize_email
from app.core.security import create_access_token, hash_password, verify_password
from app.models.account import Account
from app.repositories.account_repo import AccountRepository
from app.schemas.account import (
    AccountRead,
    AuthResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
)

logger = logging.getLogger(__name__)


class AccountService:
    """
    Business logic for Account.

    Responsibilities:
      - signup with lowercase, unique email and an empty cart
      - credential check and token issuance
      - profile lookup for the authenticated caller
    """

    def __init__(self, repo: AccountRepository):
        self.repo = repo

    @staticmethod
    def _auth_response(account: Account) -> AuthResponse:
        token = create_access_token(str(account.id), account.email)
        return AuthResponse(token=token, user=AccountRead.model_validate(account, from_attributes=True))

    def signup(self, session: Session, payload: SignupRequest) -> AuthResponse:
        """
        Create an account.

        Raises:
            ConflictError(409): if the email is already registered.
        """
        email = normalize_email(payload.email)
        if self.repo.get_by_email(session, email) is not None:
            raise ConflictError("Email already in use")

        account = Account(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            cart=[],
        )
        account = self.repo.create(session, account)
        logger.info("Created account %s", account.id)
        return self._auth_response(account)

    def login(self, session: Session, payload: LoginRequest) -> AuthResponse:
        """
        Verify credentials and issue a token.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        account = self.repo.get_by_email(session, normalize_email(payload.email))
        if account is None or not verify_password(payload.password, account.password_hash):
            raise UnauthorizedError("Invalid credentials")
        return self._auth_response(account)

    def me(self, session: Session, account_id: uuid.UUID) -> MeResponse:
        account = self.repo.get_by_id(session, account_id)
        if account is None:
            raise AccountNotFoundError()
        return MeResponse(user=AccountRead.model_validate(account, from_attributes=True))
