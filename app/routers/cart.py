# app/routers/cart.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_account_id
from app.database import get_session
from app.repositories.account_repo import AccountRepository
from app.repositories.item_repo import ItemRepository
from app.schemas.cart import CartLineChange, CartView
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

account_repo = AccountRepository()
item_repo = ItemRepository()
service = CartService(account_repo, item_repo)


@router.get("", response_model=CartView)
def get_my_cart(
    session: Session = Depends(get_session),
    account_id: uuid.UUID = Depends(require_account_id),
):
    """
    Get the current user's cart with live prices and subtotals.

    Lines whose item was deleted are dropped (and the cart saved).
    """
    return service.read(session, account_id)


@router.post("/add", response_model=CartView)
def add_to_cart(
    payload: CartLineChange,
    session: Session = Depends(get_session),
    account_id: uuid.UUID = Depends(require_account_id),
):
    """
    Add an item to the cart (`quantity` defaults to 1).

    Returns the updated cart.
    """
    return service.add(session, account_id, payload.item_id, payload.quantity)


@router.post("/remove", response_model=CartView)
def remove_from_cart(
    payload: CartLineChange,
    session: Session = Depends(get_session),
    account_id: uuid.UUID = Depends(require_account_id),
):
    """
    Remove an item from the cart.

    Without `quantity` the whole line goes; otherwise it is decremented.
    Returns the updated cart.
    """
    return service.remove(session, account_id, payload.item_id, payload.quantity)


@router.delete("/clear", response_model=CartView)
def clear_cart(
    session: Session = Depends(get_session),
    account_id: uuid.UUID = Depends(require_account_id),
):
    """
    Clear the entire cart.

    Returns an empty cart.
    """
    return service.clear(session, account_id)
