"""Tests for dashboard period filters and financial summaries."""

import pytest
from datetime import date

from buildledger.models.records import (
    PeriodFilter,
    Transaction,
    TransactionCategory,
    TransactionType,
)
from buildledger.queries import calculate_financial_summary, filter_by_period

TODAY = date(2025, 3, 12)  # a Wednesday


def txn(on, amount=100, type_=TransactionType.EXPENSE, category=TransactionCategory.MATERIALS):
    return Transaction(type=type_, amount=amount, category=category, date=on)


class TestFilterByPeriod:
    """Tests for week, month and year filters."""

    def test_week_starts_monday(self):
        items = [txn("2025-03-09"), txn("2025-03-10"), txn("2025-03-16"), txn("2025-03-17")]
        kept = filter_by_period(items, PeriodFilter.WEEK, TODAY)
        assert [t.date.isoformat() for t in kept] == ["2025-03-10", "2025-03-16"]

    def test_month(self):
        items = [txn("2025-02-28"), txn("2025-03-01"), txn("2025-03-31"), txn("2024-03-15")]
        kept = filter_by_period(items, "month", TODAY)
        assert len(kept) == 2

    def test_year(self):
        items = [txn("2024-12-31"), txn("2025-01-01"), txn("2025-12-31")]
        assert len(filter_by_period(items, PeriodFilter.YEAR, TODAY)) == 2


class TestFinancialSummary:
    """Tests for income/expense totals."""

    def test_totals(self):
        items = [
            txn("2025-03-01", 50000, TransactionType.INCOME, TransactionCategory.INCOME),
            txn("2025-03-02", 12000),
            txn("2025-03-03", 8000, category=TransactionCategory.LABOR),
        ]
        summary = calculate_financial_summary(items)
        assert summary.total_income == 50000
        assert summary.total_expenses == 20000
        assert summary.net_profit == 30000
        assert summary.category_breakdown[TransactionCategory.LABOR] == 8000

    def test_every_category_present(self):
        summary = calculate_financial_summary([])
        assert set(summary.category_breakdown) == set(TransactionCategory)
        assert all(v == 0 for v in summary.category_breakdown.values())
        assert summary.net_profit == 0

    def test_loss(self):
        assert calculate_financial_summary([txn("2025-03-01", 500)]).net_profit == -500


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
