# app/schemas/item.py
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Wire format is camelCase (imageUrl, createdAt); Python stays snake_case.
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class ItemCreate(BaseModel):
    """
    Payload for creating an item.

    Only `name` and `price` are required.
    """

    model_config = CAMEL_CONFIG

    name: str
    description: str | None = None
    price: float = Field(ge=0)
    category: str | None = None
    image_url: str | None = None
    stock: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("category")
    @classmethod
    def normalize_category(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None


class ItemUpdate(BaseModel):
    """
    Partial update payload for items.
    All fields are optional; omitted fields are left untouched.
    """

    model_config = CAMEL_CONFIG

    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: str | None = None
    image_url: str | None = None
    stock: int | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ItemRead(BaseModel):
    """
    Item representation for clients.
    """

    model_config = CAMEL_CONFIG

    id: uuid.UUID
    name: str
    description: str | None = None
    price: float
    category: str | None = None
    image_url: str | None = None
    stock: int
    created_at: datetime
    updated_at: datetime


class ItemPage(BaseModel):
    """
    One page of catalog results.

    `pages` is ceil(total / effective page size).
    """

    items: list[ItemRead]
    total: int
    page: int
    pages: int


class DeleteResult(BaseModel):
    success: bool = True
