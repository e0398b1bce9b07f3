# app/models/item.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Item(SQLModel, table=True):
    """
    Catalog entry.

    `stock` is informational only; cart operations never check or
    decrement it. `created_at` is the default sort key of catalog queries.
    """

    __tablename__ = "items"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        min_length=1,
        index=True,
        description="Display name, matched by free-text search",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        ge=0,
        index=True,
        description="Unit price",
    )

    category: str | None = Field(
        default=None,
        index=True,
        description="Used for catalog filtering",
    )

    image_url: str | None = Field(
        default=None,
        description="Image reference",
    )

    stock: int = Field(
        default=0,
        ge=0,
        description="Units on hand (informational)",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last modification timestamp (UTC)",
    )
