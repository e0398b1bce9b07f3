# app/services/catalog_service.py
import logging
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterable

from sqlmodel import Session

from app.core.errors import ItemNotFoundError
from app.core.params import (
    page_count,
    parse_categories,
    parse_item_id,
    parse_limit,
    parse_page,
    parse_price,
)
from app.models.item import Item, utcnow
from app.repositories.item_repo import ItemRepository
from app.schemas.item import ItemCreate, ItemPage, ItemRead, ItemUpdate

logger = logging.getLogger(__name__)

# Default catalog inserted on first startup against an empty store.
DEFAULT_ITEMS: list[dict] = [
    {
        "name": "Wireless Headphones",
        "description": "Noise-cancelling Bluetooth over-ear headphones",
        "price": 99.99,
        "category": "electronics",
        "image_url": "https://as2.ftcdn.net/jpg/13/51/79/99/1000_F_1351799931_l5t4oPt30SQg9gYi4q3xfoWNCXqHA0b2.webp",
        "stock": 25,
    },
    {
        "name": "Smartwatch Series 5",
        "description": "Fitness tracking, heart-rate monitor, notifications",
        "price": 149.0,
        "category": "electronics",
        "image_url": "https://t3.ftcdn.net/jpg/00/85/51/56/240_F_85515668_dbMmOjChn3nNgpl8vKlQ7IXtHgboiuPB.jpg",
        "stock": 30,
    },
    {
        "name": "Modern Desk Lamp",
        "description": "LED lamp with adjustable arm and brightness",
        "price": 39.5,
        "category": "home",
        "image_url": "https://encrypted-tbn0.gstatic.com/images?q=tbn:ANd9GcShF5orblI4whGp8wB_BMSAJMH-IqQK40R9lA&s",
        "stock": 40,
    },
    {
        "name": "Cotton T-Shirt",
        "description": "Premium cotton tee, classic fit",
        "price": 19.99,
        "category": "clothing",
        "image_url": "https://t3.ftcdn.net/jpg/03/37/48/98/240_F_337489890_imUZsO8hprZyr5VryTUuCg3O4WkQpN7O.jpg",
        "stock": 100,
    },
    {
        "name": "Cooking Essentials Cookbook",
        "description": "100+ recipes for everyday cooking",
        "price": 24.99,
        "category": "books",
        "image_url": "https://t4.ftcdn.net/jpg/00/38/29/53/240_F_38295340_lelB8VrDWCp3RUJFShsIWdraJ8puvyHW.jpg",
        "stock": 60,
    },
    {
        "name": "Ergonomic Mouse",
        "description": "Wireless ergonomic mouse with programmable buttons",
        "price": 29.99,
        "category": "electronics",
        "image_url": "https://t3.ftcdn.net/jpg/13/65/92/16/240_F_1365921690_C5aawx8PxkvAFoHN2VaajtVWbINCPqxl.jpg",
        "stock": 50,
    },
]


@dataclass
class CatalogQuery:
    """
    A sanitized catalog request.

    Build it with `from_params` so every loosely typed input goes through
    the parse-and-clamp helpers exactly once.
    """

    term: str | None = None
    categories: list[str] = field(default_factory=list)
    min_price: float | None = None
    max_price: float | None = None
    sort: str | None = None
    page: int = 1
    limit: int = 12

    @classmethod
    def from_params(
        cls,
        *,
        q: str | None = None,
        category: str | Iterable[str] | None = None,
        categories: str | Iterable[str] | None = None,
        min_price: str | float | None = None,
        max_price: str | float | None = None,
        sort: str | None = None,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> "CatalogQuery":
        term = q.strip() if q else None
        return cls(
            term=term or None,
            categories=parse_categories(categories, category),
            min_price=parse_price(min_price, "minPrice"),
            max_price=parse_price(max_price, "maxPrice"),
            sort=sort.strip() if sort else None,
            page=parse_page(page),
            limit=parse_limit(limit),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class CatalogService:
    """
    Catalog queries and catalog maintenance.

    Responsibilities:
      - filtered / sorted / paged search with bounded inputs
      - point lookup (unknown or malformed ids => ItemNotFoundError)
      - create / partial update / delete
      - seeding the default catalog
    """

    def __init__(self, repo: ItemRepository):
        self.repo = repo

    # ----- Queries -----

    def search(self, session: Session, query: CatalogQuery) -> ItemPage:
        """
        Run a catalog query.

        Inverted price bounds are passed through untouched and simply match
        nothing. Unknown sort keys fall back to insertion order.
        """
        items, total = self.repo.search(
            session,
            term=query.term,
            categories=query.categories,
            min_price=query.min_price,
            max_price=query.max_price,
            sort=query.sort,
            offset=query.offset,
            limit=query.limit,
        )
        return ItemPage(
            items=[ItemRead.model_validate(item) for item in items],
            total=total,
            page=query.page,
            pages=page_count(total, query.limit),
        )

    def get_item(self, session: Session, item_id: str | uuid.UUID) -> Item:
        parsed = parse_item_id(item_id)
        item = self.repo.get_by_id(session, parsed) if parsed else None
        if item is None:
            raise ItemNotFoundError()
        return item

    # ----- Maintenance -----

    def create_item(self, session: Session, payload: ItemCreate) -> Item:
        item = Item(**payload.model_dump())
        return self.repo.create(session, item)

    def update_item(
        self,
        session: Session,
        item_id: str | uuid.UUID,
        payload: ItemUpdate,
    ) -> Item:
        """
        Partial update.

        Only fields present in the payload are applied. `name`, `price` and
        `stock` cannot be cleared, so an explicit null for them is ignored;
        the optional fields accept null to clear their value.
        """
        item = self.get_item(session, item_id)
        changes = payload.model_dump(exclude_unset=True)

        for name, value in changes.items():
            if value is None and name in ("name", "price", "stock"):
                continue
            setattr(item, name, value)

        item.updated_at = utcnow()
        return self.repo.update(session, item)

    def delete_item(self, session: Session, item_id: str | uuid.UUID) -> None:
        """
        Delete an item.

        Cart lines that still reference it are pruned lazily the next time
        their cart is read.
        """
        item = self.get_item(session, item_id)
        self.repo.delete(session, item)

    def seed_default_items(self, session: Session) -> int:
        """Insert DEFAULT_ITEMS when the catalog is empty. Returns the number inserted."""
        if self.repo.count(session) > 0:
            return 0
        # Distinct timestamps keep the listed order as insertion order.
        now = utcnow()
        items = [
            Item(**data, created_at=now + timedelta(microseconds=i))
            for i, data in enumerate(DEFAULT_ITEMS)
        ]
        self.repo.create_many(session, items)
        logger.info("Seeded %d items", len(items))
        return len(items)
