# app/schemas/cart.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.item import ItemRead


class CartLineChange(BaseModel):
    """
    Body of add / remove requests: `{itemId, quantity?}`.

    `quantity` is optional. On add it defaults to 1; on remove an omitted
    quantity deletes the whole line. Values are clamped into [1, 10000]
    by the service.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str = Field(min_length=1)
    quantity: int | None = None


class QuotedCartLine(BaseModel):
    """
    A cart line resolved against the live catalog.
    """

    item: ItemRead
    quantity: int
    subtotal: float


class CartView(BaseModel):
    """
    Response of every cart operation.
    """

    cart: list[QuotedCartLine]
    total: float
