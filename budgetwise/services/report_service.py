"""
Chart and summary data computed from a book's visible transactions.

All functions are pure: they take already-fetched transactions and never touch
the database.
"""
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from budgetwise.models.transaction import TransactionType
from budgetwise.schemas.budget import BudgetCategoryItem, BudgetSummary
from budgetwise.schemas.report import CategoryTotal, ComparisonPoint, MonthlyOverview, TrendPoint

UNCATEGORIZED = "Uncategorized"


def _expenses(transactions: Iterable) -> List:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def _sum(transactions: Iterable) -> Decimal:
    return sum((Decimal(t.amount) for t in transactions), Decimal(0))


def _in_month(t, today: date) -> bool:
    return t.date.year == today.year and t.date.month == today.month


def monthly_overview(
    transactions: Iterable,
    today: date,
    visibility: Optional[Dict[str, bool]] = None
) -> MonthlyOverview:
    """
    Income, spending and what is left for the current calendar month.

    ``visibility`` masks totals the viewer may not see: income, expenses and
    balance map to total_income, total_spent and remaining.
    """
    monthly = [t for t in transactions if _in_month(t, today)]
    income = _sum(t for t in monthly if t.type == TransactionType.INCOME)
    spent = _sum(_expenses(monthly))
    overview = MonthlyOverview(
        total_income=income,
        total_spent=spent,
        remaining=income - spent,
        transaction_count=len(monthly)
    )
    if visibility is not None:
        if not visibility.get("income", False):
            overview.total_income = None
        if not visibility.get("expenses", False):
            overview.total_spent = None
        if not visibility.get("balance", False):
            overview.remaining = None
    return overview


def category_totals(transactions: Iterable) -> List[CategoryTotal]:
    """Expense totals per category, largest first, empty categories dropped."""
    totals = defaultdict(Decimal)
    for t in _expenses(transactions):
        totals[t.category or UNCATEGORIZED] += Decimal(t.amount)
    items = [CategoryTotal(category=c, amount=a) for c, a in totals.items() if a > 0]
    items.sort(key=lambda item: (-item.amount, item.category))
    return items


def daily_spending_trend(transactions: Iterable, end: date, days: int = 30) -> List[TrendPoint]:
    """One point per day for the ``days`` days ending at ``end``, zero-filled."""
    start = end - timedelta(days=days - 1)
    per_day = defaultdict(Decimal)
    for t in _expenses(transactions):
        if start <= t.date <= end:
            per_day[t.date] += Decimal(t.amount)
    return [
        TrendPoint(date=(start + timedelta(days=i)).isoformat(), amount=per_day[start + timedelta(days=i)])
        for i in range(days)
    ]


def spending_comparison(transactions: Iterable, now: date) -> List[ComparisonPoint]:
    """Spending over the last week against the last four weeks."""
    expenses = _expenses(transactions)
    week_start = now - timedelta(weeks=1)
    month_start = now - timedelta(weeks=4)
    return [
        ComparisonPoint(name="Last 7 Days", total=_sum(t for t in expenses if week_start <= t.date <= now)),
        ComparisonPoint(name="Last 30 Days", total=_sum(t for t in expenses if month_start <= t.date <= now)),
    ]


def budget_summary(budget_amount: Decimal, transactions: Iterable, today: date) -> BudgetSummary:
    """Month-to-date spending against a budget with a per-category breakdown."""
    budget_amount = Decimal(budget_amount)
    monthly = [t for t in _expenses(transactions) if _in_month(t, today)]
    total_spent = _sum(monthly)

    counts = defaultdict(int)
    for t in monthly:
        counts[t.category or UNCATEGORIZED] += 1

    categories = []
    for item in category_totals(monthly):
        categories.append(BudgetCategoryItem(
            category=item.category,
            spent=item.amount,
            transaction_count=counts[item.category],
            percentage_of_total=float(item.amount / total_spent * 100) if total_spent > 0 else 0.0,
            percentage_of_budget=float(item.amount / budget_amount * 100) if budget_amount > 0 else 0.0
        ))

    return BudgetSummary(
        budget_amount=budget_amount,
        total_spent=total_spent,
        remaining=budget_amount - total_spent,
        fill_ratio=float(total_spent / budget_amount * 100) if budget_amount > 0 else 0.0,
        categories=categories
    )
