"""Dashboard summaries over transactions."""

from datetime import date, timedelta
from typing import Iterable, Optional

from buildledger.models.records import (
    FinancialSummary,
    PeriodFilter,
    Transaction,
    TransactionCategory,
    TransactionType,
)


def filter_by_period(
    transactions: Iterable[Transaction],
    period: PeriodFilter,
    today: Optional[date] = None,
) -> list[Transaction]:
    """
    Keep transactions dated in the current week, month or year.

    Weeks start on Monday. Future-dated entries within the period are kept.
    """
    today = today or date.today()
    period = PeriodFilter(period)

    if period == PeriodFilter.WEEK:
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
        return [t for t in transactions if start <= t.date <= end]
    if period == PeriodFilter.MONTH:
        return [
            t for t in transactions
            if t.date.year == today.year and t.date.month == today.month
        ]
    return [t for t in transactions if t.date.year == today.year]


def calculate_financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    breakdown = {category: 0.0 for category in TransactionCategory}
    income = 0.0
    expenses = 0.0

    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        else:
            expenses += t.amount
        breakdown[t.category] += t.amount

    return FinancialSummary(
        total_income=income,
        total_expenses=expenses,
        net_profit=income - expenses,
        category_breakdown=breakdown,
    )
