"""SQLAlchemy models for the expense tracker."""
from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import Column, Float, Integer, String, Text

from .database import Base


class Transaction(Base):
    __tablename__ = "transactions"
    # AUTOINCREMENT keeps ids monotonic even after the newest row is deleted.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "description": self.description,
        }

    def __repr__(self) -> str:
        return f"Transaction(id={self.id!r}, type={self.type!r}, amount={self.amount!r})"


class Category(Base):
    """Category catalogue; created with the schema but not linked to transactions."""

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
