"""Pydantic schemas for serialising transactions."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class TransactionWrite(BaseModel):
    """Request body for create and full-replace update."""

    type: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: float = Field(..., strict=True, allow_inf_nan=False)
    date: str = Field(..., min_length=1)
    description: Optional[str] = None


class TransactionRead(ORMModel):
    id: int
    type: str
    category: str
    amount: float
    date: str
    description: Optional[str] = None


class TransactionList(BaseModel):
    transactions: List[TransactionRead]


class SummaryRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_income: float = Field(0.0, alias="totalIncome")
    total_expense: float = Field(0.0, alias="totalExpense")
    balance: float = 0.0


class MessageRead(BaseModel):
    message: str


class ErrorRead(BaseModel):
    error: str
