# app/repositories/account_repo.py
import uuid

from sqlmodel import Session, select

from app.models.account import Account
from app.models.item import utcnow


class AccountRepository:
    """
    Data access layer for Account (the Account Store).

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, account_id: uuid.UUID) -> Account | None:
        """Return an Account by primary key, or None if not found."""
        return session.get(Account, account_id)

    def get_by_email(self, session: Session, email: str) -> Account | None:
        """Return an Account by (already normalized) email, or None if not found."""
        stmt = select(Account).where(Account.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, account: Account) -> Account:
        """Insert a new Account and return the persisted row."""
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    def save_cart(self, session: Session, account: Account, lines: list[dict]) -> Account:
        """
        Replace the embedded cart with `lines` in a single row update.

        A fresh list is assigned so the JSON column is flagged dirty.
        """
        account.cart = [dict(line) for line in lines]
        account.updated_at = utcnow()
        session.add(account)
        session.commit()
        session.refresh(account)
        return account
