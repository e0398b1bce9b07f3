# app/routers/items.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_account_id
from app.database import get_session
from app.repositories.item_repo import ItemRepository
from app.schemas.item import DeleteResult, ItemCreate, ItemPage, ItemRead, ItemUpdate
from app.services.catalog_service import CatalogQuery, CatalogService

router = APIRouter(prefix="/items", tags=["Items"])

repo = ItemRepository()
service = CatalogService(repo)


# -------- Public endpoints --------


@router.get("", response_model=ItemPage)
def list_items(
    session: Session = Depends(get_session),
    q: str | None = None,
    category: list[str] | None = Query(default=None),
    categories: str | None = None,
    min_price: str | None = Query(default=None, alias="minPrice"),
    max_price: str | None = Query(default=None, alias="maxPrice"),
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
):
    """
    Search the catalog.

    - `q`: case-insensitive substring of the item name
    - `category` (repeatable) / `categories` (comma list): union of categories
    - `minPrice` / `maxPrice`: inclusive bounds
    - `sort`: newest | price_asc | price_desc (anything else = insertion order)
    - `page` (1-based, clamped to >= 1), `limit` (default 12, max 100)
    """
    query = CatalogQuery.from_params(
        q=q,
        category=category,
        categories=categories,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        limit=limit,
    )
    return service.search(session, query)


@router.get("/{item_id}", response_model=ItemRead)
def get_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single item by id.

    - Public endpoint.
    - Malformed ids are rejected with 400.
    """
    return service.get_item(session, item_id)


# -------- Authenticated endpoints --------


@router.post(
    "",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_account_id)],
)
def create_item(
    payload: ItemCreate,
    session: Session = Depends(get_session),
):
    """
    Create a new item. `name` and `price` are required.
    """
    return service.create_item(session, payload)


@router.put(
    "/{item_id}",
    response_model=ItemRead,
    dependencies=[Depends(require_account_id)],
)
def update_item(
    item_id: uuid.UUID,
    payload: ItemUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing item. Fields left out of the body are unchanged.
    """
    return service.update_item(session, item_id, payload)


@router.delete(
    "/{item_id}",
    response_model=DeleteResult,
    dependencies=[Depends(require_account_id)],
)
def delete_item(
    item_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete an item. Carts still holding it drop the line on their next read.
    """
    service.delete_item(session, item_id)
    return DeleteResult(success=True)
