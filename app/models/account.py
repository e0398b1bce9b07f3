# app/models/account.py
import uuid
from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

from app.models.item import utcnow


class Account(SQLModel, table=True):
    """
    Customer account with its embedded cart.

    Email:
      - unique, stored lowercase (normalized at signup and lookup)

    Cart:
      - ordered list of {"item": "<item uuid>", "quantity": int}
      - at most one line per item, every quantity >= 1
      - no prices are stored; subtotals are computed from the live catalog
      - the whole list is rewritten on every change, so an update is a
        single row write
    """

    __tablename__ = "accounts"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        description="Display name",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Lowercase login email",
    )

    password_hash: str = Field(
        description="bcrypt hash; never returned to clients",
    )

    cart: list[dict] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last modification timestamp (UTC)",
    )
