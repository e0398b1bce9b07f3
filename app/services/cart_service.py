# app/services/cart_service.py
import logging
import uuid
from dataclasses import dataclass

from sqlmodel import Session

from app.core.errors import AccountNotFoundError, ItemNotFoundError, LineNotFoundError
from app.core.params import MAX_QUANTITY, coerce_quantity, parse_item_id
from app.models.account import Account
from app.models.item import Item
from app.repositories.account_repo import AccountRepository
from app.repositories.item_repo import ItemRepository
from app.schemas.cart import CartView, QuotedCartLine
from app.schemas.item import ItemRead

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    """One (item, quantity) pair as stored in Account.cart."""

    item_id: uuid.UUID
    quantity: int

    @classmethod
    def from_stored(cls, raw: dict) -> "CartLine | None":
        item_id = parse_item_id(raw.get("item"))
        quantity = raw.get("quantity")
        if item_id is None or not isinstance(quantity, int) or not 1 <= quantity <= MAX_QUANTITY:
            return None
        return cls(item_id=item_id, quantity=quantity)

    def to_stored(self) -> dict:
        return {"item": str(self.item_id), "quantity": self.quantity}


class CartService:
    """
    Business logic for the per-account cart.

    Responsibilities:
      - merge / decrement / remove / clear lines, keeping one line per item
        and every quantity >= 1
      - clamp caller quantities into [1, MAX_QUANTITY]
      - prune lines whose item was deleted from the catalog, writing the
        pruned cart back only when something changed
      - quote every line against the live catalog (subtotal = price * qty)

    Every operation returns the quoted cart as it stands after the change.
    There is no locking: overlapping mutations of the same cart are last
    writer wins.
    """

    def __init__(self, account_repo: AccountRepository, item_repo: ItemRepository):
        self.account_repo = account_repo
        self.item_repo = item_repo

    # ---- internal helpers ----

    def _get_account(self, session: Session, account_id: uuid.UUID) -> Account:
        account = self.account_repo.get_by_id(session, account_id)
        if account is None:
            raise AccountNotFoundError()
        return account

    def _get_item(self, session: Session, item_id: str) -> Item:
        parsed = parse_item_id(item_id)
        item = self.item_repo.get_by_id(session, parsed) if parsed else None
        if item is None:
            raise ItemNotFoundError()
        return item

    @staticmethod
    def _lines(account: Account) -> list[CartLine]:
        lines: list[CartLine] = []
        for raw in account.cart or []:
            line = CartLine.from_stored(raw)
            if line is not None:
                lines.append(line)
        return lines

    @staticmethod
    def _find(lines: list[CartLine], item_id: uuid.UUID | None) -> int:
        for idx, line in enumerate(lines):
            if line.item_id == item_id:
                return idx
        return -1

    def _save(self, session: Session, account: Account, lines: list[CartLine]) -> None:
        self.account_repo.save_cart(session, account, [line.to_stored() for line in lines])

    def _reconcile(self, session: Session, account: Account) -> list[tuple[Item, int]]:
        """
        Resolve every line against the catalog.

        Lines pointing at deleted items (or unreadable or out-of-range
        entries) are dropped and the pruned cart is persisted. A cart with
        nothing to prune is not written.
        """
        stored = list(account.cart or [])
        lines = self._lines(account)
        items = self.item_repo.get_many(session, [line.item_id for line in lines])

        live = [line for line in lines if line.item_id in items]
        if len(live) != len(stored):
            logger.info(
                "Pruned %d stale cart line(s) for account %s",
                len(stored) - len(live),
                account.id,
            )
            self._save(session, account, live)

        return [(items[line.item_id], line.quantity) for line in live]

    @staticmethod
    def _quote(resolved: list[tuple[Item, int]]) -> CartView:
        quoted = [
            QuotedCartLine(
                item=ItemRead.model_validate(item),
                quantity=quantity,
                subtotal=item.price * quantity,
            )
            for item, quantity in resolved
        ]
        total = sum(line.subtotal for line in quoted)
        return CartView(cart=quoted, total=total)

    def _view(self, session: Session, account: Account) -> CartView:
        return self._quote(self._reconcile(session, account))

    # ---- public operations ----

    def read(self, session: Session, account_id: uuid.UUID) -> CartView:
        """Return the quoted cart, pruning dangling lines first."""
        account = self._get_account(session, account_id)
        return self._view(session, account)

    def add(
        self,
        session: Session,
        account_id: uuid.UUID,
        item_id: str,
        quantity: int | None = None,
    ) -> CartView:
        """
        Add `quantity` (default 1, clamped into [1, MAX_QUANTITY]) of an item.

        An existing line for the item is incremented; otherwise a new line
        is appended at the end of the cart. A merged line never exceeds
        MAX_QUANTITY.
        """
        qty = coerce_quantity(quantity)
        account = self._get_account(session, account_id)
        item = self._get_item(session, item_id)

        lines = self._lines(account)
        idx = self._find(lines, item.id)
        if idx >= 0:
            lines[idx].quantity = min(lines[idx].quantity + qty, MAX_QUANTITY)
        else:
            lines.append(CartLine(item_id=item.id, quantity=qty))

        self._save(session, account, lines)
        return self._view(session, account)

    def remove(
        self,
        session: Session,
        account_id: uuid.UUID,
        item_id: str,
        quantity: int | None = None,
    ) -> CartView:
        """
        Remove an item from the cart.

        - quantity omitted: the whole line is deleted
        - otherwise the line is decremented by max(1, quantity) and deleted
          once it reaches zero or below
        """
        account = self._get_account(session, account_id)
        lines = self._lines(account)
        idx = self._find(lines, parse_item_id(item_id))
        if idx < 0:
            raise LineNotFoundError()

        if quantity is None:
            del lines[idx]
        else:
            lines[idx].quantity -= coerce_quantity(quantity)
            if lines[idx].quantity <= 0:
                del lines[idx]

        self._save(session, account, lines)
        return self._view(session, account)

    def clear(self, session: Session, account_id: uuid.UUID) -> CartView:
        """Empty the cart."""
        account = self._get_account(session, account_id)
        self._save(session, account, [])
        return CartView(cart=[], total=0)
