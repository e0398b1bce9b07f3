# app/core/auth.py
import uuid
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from app.core.config import get_settings
from app.core.errors import UnauthorizedError

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => a missing/non-Bearer Authorization header yields None
#   so we can answer with our own 401 body instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT).

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)

    Args:
        token: raw JWT from the Authorization header.

    Returns:
        Decoded JWT claims.

    Raises:
        UnauthorizedError: if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")


def require_account_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> uuid.UUID:
    """
    Resolve the caller to an account id.

    Flow:
      1. No Bearer credentials => 401.
      2. Decode JWT => extract 'sub'.
      3. Convert 'sub' to UUID to match Account.id type.

    The account itself is not loaded here; services raise
    AccountNotFoundError when the id no longer resolves.

    Raises:
        UnauthorizedError: if the header is missing or the token is unusable.
    """
    if credentials is None:
        raise UnauthorizedError("Missing Authorization header")

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise UnauthorizedError("Invalid or expired token")

    try:
        return uuid.UUID(str(sub))
    except ValueError:
        raise UnauthorizedError("Invalid or expired token")
