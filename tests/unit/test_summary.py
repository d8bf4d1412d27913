from __future__ import annotations

from expense_tracker.summary import compute_summary, summarise_totals


def test_summary_over_mixed_records(repository):
    for kind, amount in [("income", 100), ("expense", 40), ("income", 10)]:
        repository.create(type=kind, category="General", amount=amount, date="2024-01-01")

    summary = compute_summary(repository)
    assert summary.total_income == 110
    assert summary.total_expense == 40
    assert summary.balance == 70


def test_summary_over_empty_store_is_zero(repository):
    summary = compute_summary(repository)
    assert summary.model_dump(by_alias=True) == {"totalIncome": 0.0, "totalExpense": 0.0, "balance": 0.0}


def test_unknown_types_are_ignored():
    summary = summarise_totals({"income": 5.0, "loan": 1000.0})
    assert summary.total_income == 5.0
    assert summary.total_expense == 0.0
    assert summary.balance == 5.0
