"""
Tests for chart data and budgets.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from conftest import add_collaborator, add_transaction
from budgetwise.models.transaction import TransactionType
from budgetwise.services import report_service


def _t(type_, amount, day, category=None):
    return SimpleNamespace(type=TransactionType(type_), amount=Decimal(amount), date=day, category=category)


TODAY = date(2024, 7, 20)

TRANSACTIONS = [
    _t("income", "2000", date(2024, 7, 1)),
    _t("expense", "12.50", date(2024, 7, 15), "Food"),
    _t("expense", "250", date(2024, 7, 14), "Travel"),
    _t("expense", "45", date(2024, 7, 19), "Food"),
    _t("expense", "99", date(2024, 6, 30), "Bills"),
]


def test_monthly_overview():
    overview = report_service.monthly_overview(TRANSACTIONS, TODAY)
    assert overview.total_income == Decimal("2000")
    assert overview.total_spent == Decimal("307.50")
    assert overview.remaining == Decimal("1692.50")
    assert overview.transaction_count == 4


def test_monthly_overview_masks_hidden_totals():
    overview = report_service.monthly_overview(
        TRANSACTIONS, TODAY, {"balance": False, "income": True, "expenses": False}
    )
    assert overview.total_income == Decimal("2000")
    assert overview.total_spent is None
    assert overview.remaining is None


def test_category_totals_sorted_descending():
    totals = report_service.category_totals(TRANSACTIONS)
    assert [(c.category, c.amount) for c in totals] == [
        ("Travel", Decimal("250")),
        ("Bills", Decimal("99")),
        ("Food", Decimal("57.50")),
    ]


def test_daily_spending_trend_zero_fills():
    trend = report_service.daily_spending_trend(TRANSACTIONS, TODAY, days=7)
    assert [p.date for p in trend][0] == "2024-07-14"
    assert [p.date for p in trend][-1] == "2024-07-20"
    amounts = {p.date: p.amount for p in trend}
    assert amounts["2024-07-14"] == Decimal("250")
    assert amounts["2024-07-16"] == Decimal(0)


def test_spending_comparison():
    week, month = report_service.spending_comparison(TRANSACTIONS, TODAY)
    assert (week.name, week.total) == ("Last 7 Days", Decimal("307.50"))
    assert (month.name, month.total) == ("Last 30 Days", Decimal("406.50"))


def test_budget_summary():
    summary = report_service.budget_summary(Decimal("500"), TRANSACTIONS, TODAY)
    assert summary.total_spent == Decimal("307.50")
    assert summary.remaining == Decimal("192.50")
    assert summary.fill_ratio == 61.5
    food = next(c for c in summary.categories if c.category == "Food")
    assert food.transaction_count == 2
    assert food.percentage_of_budget == 11.5


def test_budget_summary_zero_budget():
    summary = report_service.budget_summary(Decimal("0"), TRANSACTIONS, TODAY)
    assert summary.fill_ratio == 0.0


def test_report_endpoint_respects_visibility(client, owner_headers, book_id):
    add_transaction(client, owner_headers, book_id, "income", 1000, day="2024-07-01")
    helper = add_collaborator(client, owner_headers, book_id, "helper@example.com", "Add Transactions Only")
    add_transaction(client, helper, book_id, "expense", 40, category="Food", day="2024-07-18")

    report = client.get(f"/api/reports/{book_id}?as_of=2024-07-20", headers=helper).json()
    assert report["overview"]["total_income"] is None
    assert report["overview"]["remaining"] is None
    assert [c["category"] for c in report["categories"]] == ["Food"]
    assert len(report["trend"]) == 30

    owner_report = client.get(f"/api/reports/{book_id}?as_of=2024-07-20", headers=owner_headers).json()
    assert Decimal(owner_report["overview"]["remaining"]) == Decimal("960")


def test_budget_endpoints(client, owner_headers, book_id):
    assert client.get(f"/api/budget/{book_id}", headers=owner_headers).status_code == 404

    response = client.post(f"/api/budget/{book_id}", json={"amount": 300}, headers=owner_headers)
    assert response.status_code == 201
    response = client.post(f"/api/budget/{book_id}", json={"amount": 400}, headers=owner_headers)
    assert Decimal(response.json()["amount"]) == Decimal("400")

    today = date.today().isoformat()
    add_transaction(client, owner_headers, book_id, "expense", 100, category="Food", day=today)
    summary = client.get(f"/api/budget/{book_id}/summary", headers=owner_headers).json()
    assert Decimal(summary["total_spent"]) == Decimal("100")
    assert Decimal(summary["remaining"]) == Decimal("300")
    assert summary["fill_ratio"] == 25.0
