from __future__ import annotations

import math

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from expense_tracker.database import Database
from expense_tracker.repository import TransactionRepository
from expense_tracker.summary import compute_summary

records = st.lists(
    st.tuples(
        st.sampled_from(["income", "expense", "transfer"]),
        st.integers(min_value=-1_000_000, max_value=1_000_000).map(float),
    ),
    max_size=15,
)


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(records)
def test_balance_is_income_minus_expense(rows) -> None:
    database = Database("sqlite://")
    database.create_all()
    repository = TransactionRepository(database)
    try:
        for kind, amount in rows:
            repository.create(type=kind, category="Any", amount=amount, date="2024-01-01")
        summary = compute_summary(repository)
    finally:
        database.dispose()

    income = sum(amount for kind, amount in rows if kind == "income")
    expense = sum(amount for kind, amount in rows if kind == "expense")
    assert math.isclose(summary.total_income, income)
    assert math.isclose(summary.total_expense, expense)
    assert math.isclose(summary.balance, summary.total_income - summary.total_expense)
