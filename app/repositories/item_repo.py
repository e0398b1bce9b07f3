# app/repositories/item_repo.py
import uuid
from typing import Iterable

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.models.item import Item

SORT_NEWEST = "newest"
SORT_PRICE_ASC = "price_asc"
SORT_PRICE_DESC = "price_desc"


class ItemRepository:
    """
    Data access layer for Item (the Catalog Store).

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    # ----- Point lookups -----

    def get_by_id(self, session: Session, item_id: uuid.UUID) -> Item | None:
        return session.get(Item, item_id)

    def get_many(self, session: Session, item_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, Item]:
        """Resolve several ids in one query. Missing ids are simply absent from the result."""
        ids = list(set(item_ids))
        if not ids:
            return {}
        stmt = select(Item).where(col(Item.id).in_(ids))
        return {item.id: item for item in session.exec(stmt).all()}

    def count(self, session: Session) -> int:
        return session.exec(select(func.count()).select_from(Item)).one()

    # ----- Filtered query -----

    @staticmethod
    def _filtered(
        stmt,
        term: str | None,
        categories: list[str],
        min_price: float | None,
        max_price: float | None,
    ):
        if term:
            stmt = stmt.where(col(Item.name).icontains(term, autoescape=True))
        if categories:
            stmt = stmt.where(col(Item.category).in_(categories))
        if min_price is not None:
            stmt = stmt.where(Item.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Item.price <= max_price)
        return stmt

    @staticmethod
    def _ordering(sort: str | None) -> list:
        # Ties fall back to insertion order, then to id.
        if sort == SORT_NEWEST:
            keys = [col(Item.created_at).desc()]
        elif sort == SORT_PRICE_ASC:
            keys = [col(Item.price).asc(), col(Item.created_at).asc()]
        elif sort == SORT_PRICE_DESC:
            keys = [col(Item.price).desc(), col(Item.created_at).asc()]
        else:
            keys = [col(Item.created_at).asc()]
        return keys + [col(Item.id).asc()]

    def search(
        self,
        session: Session,
        *,
        term: str | None = None,
        categories: list[str] | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        sort: str | None = None,
        offset: int = 0,
        limit: int = 12,
    ) -> tuple[list[Item], int]:
        """
        Return one page of matching items plus the total number of matches.

        Only the requested page is loaded; the total comes from a COUNT over
        the same filter.
        """
        categories = categories or []

        stmt = self._filtered(select(Item), term, categories, min_price, max_price)
        stmt = stmt.order_by(*self._ordering(sort)).offset(offset).limit(limit)
        items = list(session.exec(stmt).all())

        count_stmt = self._filtered(
            select(func.count()).select_from(Item), term, categories, min_price, max_price
        )
        total = session.exec(count_stmt).one()
        return items, total

    # ----- CRUD -----

    def create(self, session: Session, item: Item) -> Item:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def create_many(self, session: Session, items: list[Item]) -> list[Item]:
        session.add_all(items)
        session.commit()
        for item in items:
            session.refresh(item)
        return items

    def update(self, session: Session, item: Item) -> Item:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    def delete(self, session: Session, item: Item) -> None:
        session.delete(item)
        session.commit()
