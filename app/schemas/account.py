# app/schemas/account.py
import uuid

from pydantic import ConfigDict, EmailStr, field_validator
from sqlmodel import SQLModel, Field

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


def _check_password_length(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return v


class SignupRequest(SQLModel):
    """
    Payload for account creation.

    Validation rules:
      - name cannot be empty or whitespace
      - email must be a valid EmailStr (lowercased by the service)
      - password cannot be empty or longer than 72 bytes (UTF-8)
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("password")
    @classmethod
    def limit_password(cls, v: str) -> str:
        return _check_password_length(v)


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def limit_password(cls, v: str) -> str:
        return _check_password_length(v)


class AccountRead(SQLModel):
    """Public view of an account. The credential hash is never included."""

    id: uuid.UUID
    name: str
    email: str


class AuthResponse(SQLModel):
    token: str
    user: AccountRead


class MeResponse(SQLModel):
    user: AccountRead
