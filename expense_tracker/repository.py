"""Transaction repository over the relational backing store."""
from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from numbers import Real
from typing import Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .database import Database
from .errors import NotFoundError, StorageError, ValidationError
from .logging import get_logger

LOG = get_logger(__name__)

REQUIRED_FIELDS = ("type", "category", "amount", "date")
# SQLite INTEGER PRIMARY KEY is a signed 64-bit value.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def validate_fields(type: object, category: object, amount: object, date: object) -> None:
    """Raise :class:`ValidationError` unless every required field is present."""

    values = {"type": type, "category": category, "amount": amount, "date": date}
    missing = [
        name
        for name in REQUIRED_FIELDS
        if values[name] is None or (isinstance(values[name], str) and not values[name].strip())
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    for name in ("type", "category", "date"):
        if not isinstance(values[name], str):
            raise ValidationError(f"Field '{name}' must be a string")
    if isinstance(amount, bool) or not isinstance(amount, Real):
        raise ValidationError("Field 'amount' must be a number")
    try:
        finite = math.isfinite(float(amount))
    except OverflowError:
        finite = False
    if not finite:
        raise ValidationError("Field 'amount' must be a finite number")


def _ensure_storable_id(transaction_id: int) -> None:
    if not MIN_ID <= transaction_id <= MAX_ID:
        raise NotFoundError(f"Transaction {transaction_id} not found")


class TransactionRepository:
    """CRUD access to the ``transactions`` table.

    Every storage failure is logged and re-raised as :class:`StorageError`;
    unknown ids raise :class:`NotFoundError`.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self.database.session_scope() as session:
                yield session
        except SQLAlchemyError as exc:
            LOG.error("Storage failure while %s", action, exc_info=True)
            raise StorageError(f"Error {action}") from exc

    def create(
        self,
        type: str,
        category: str,
        amount: float,
        date: str,
        description: Optional[str] = None,
    ) -> models.Transaction:
        validate_fields(type, category, amount, date)
        transaction = models.Transaction(
            type=type,
            category=category,
            amount=float(amount),
            date=date,
            description=description,
        )
        with self._session("adding transaction") as session:
            session.add(transaction)
            session.flush()
            session.refresh(transaction)
        LOG.info("Created transaction %s", transaction.id, extra={"transaction_id": transaction.id})
        return transaction

    def get_all(self) -> List[models.Transaction]:
        with self._session("fetching transactions") as session:
            stmt = select(models.Transaction).order_by(models.Transaction.id)
            return list(session.scalars(stmt))

    def get_by_id(self, transaction_id: int) -> models.Transaction:
        _ensure_storable_id(transaction_id)
        with self._session("fetching transaction") as session:
            transaction = session.get(models.Transaction, transaction_id)
        if transaction is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return transaction

    def update(
        self,
        transaction_id: int,
        type: str,
        category: str,
        amount: float,
        date: str,
        description: Optional[str] = None,
    ) -> models.Transaction:
        """Replace every field of the transaction; ``description`` is cleared when omitted."""

        validate_fields(type, category, amount, date)
        _ensure_storable_id(transaction_id)
        stmt = (
            update(models.Transaction)
            .where(models.Transaction.id == transaction_id)
            .values(
                type=type,
                category=category,
                amount=float(amount),
                date=date,
                description=description,
            )
            .execution_options(synchronize_session=False)
        )
        with self._session("updating transaction") as session:
            changed = session.execute(stmt).rowcount
            transaction = session.get(models.Transaction, transaction_id) if changed else None
        if transaction is None:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        LOG.info("Updated transaction %s", transaction_id, extra={"transaction_id": transaction_id})
        return transaction

    def delete(self, transaction_id: int) -> None:
        _ensure_storable_id(transaction_id)
        stmt = delete(models.Transaction).where(models.Transaction.id == transaction_id)
        with self._session("deleting transaction") as session:
            changed = session.execute(stmt).rowcount
        if not changed:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        LOG.info("Deleted transaction %s", transaction_id, extra={"transaction_id": transaction_id})

    def totals_by_type(self) -> Dict[str, float]:
        """Return ``SUM(amount)`` for every stored ``type``."""

        stmt = select(
            models.Transaction.type,
            func.coalesce(func.sum(models.Transaction.amount), 0).label("total"),
        ).group_by(models.Transaction.type)
        with self._session("summarising transactions") as session:
            return {row.type: float(row.total) for row in session.execute(stmt)}


__all__ = ["REQUIRED_FIELDS", "TransactionRepository", "validate_fields"]
