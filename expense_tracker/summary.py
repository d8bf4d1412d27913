"""Income/expense aggregation over the whole transaction store."""
from __future__ import annotations

from typing import Mapping

from . import schemas
from .repository import TransactionRepository

INCOME = "income"
EXPENSE = "expense"


def summarise_totals(totals: Mapping[str, float]) -> schemas.SummaryRead:
    """Build the summary from per-type sums; other types are ignored."""

    total_income = float(totals.get(INCOME, 0) or 0)
    total_expense = float(totals.get(EXPENSE, 0) or 0)
    return schemas.SummaryRead(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
    )


def compute_summary(repository: TransactionRepository) -> schemas.SummaryRead:
    """Aggregate in the store; an empty store yields zero totals, not an error."""

    return summarise_totals(repository.totals_by_type())


__all__ = ["EXPENSE", "INCOME", "compute_summary", "summarise_totals"]
