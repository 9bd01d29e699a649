"""
Tests for book aggregation and per-viewer visibility.
"""
from decimal import Decimal
from types import SimpleNamespace
from conftest import add_collaborator, add_transaction, signup_and_login
from budgetwise.models.transaction import TransactionType
from budgetwise.models.user import User
from budgetwise.services.book_service import compute_totals, get_books_for_user


def _t(type_, amount):
    return SimpleNamespace(type=TransactionType(type_), amount=Decimal(amount))


def test_compute_totals_balance_is_income_minus_expenses():
    transactions = [_t("income", "1000"), _t("expense", "300"), _t("expense", "50")]
    income, expenses, balance = compute_totals(transactions)
    assert income == Decimal("1000")
    assert expenses == Decimal("350")
    assert balance == Decimal("650")


def test_compute_totals_empty():
    assert compute_totals([]) == (Decimal(0), Decimal(0), Decimal(0))


def test_list_books_empty_for_new_user(client):
    headers = signup_and_login(client, "lonely@example.com")
    response = client.get("/api/books", headers=headers)
    assert response.status_code == 200
    assert response.json() == []


def test_book_totals_scenario(client, owner_headers, book_id):
    add_transaction(client, owner_headers, book_id, "income", 1000)
    add_transaction(client, owner_headers, book_id, "expense", 300, category="Food")
    add_transaction(client, owner_headers, book_id, "expense", 50, category="Bills")

    books = client.get("/api/books", headers=owner_headers).json()
    assert len(books) == 1
    book = books[0]
    assert Decimal(book["income"]) == Decimal("1000")
    assert Decimal(book["expenses"]) == Decimal("350")
    assert Decimal(book["balance"]) == Decimal("650")
    assert book["current_user_role"] == "Owner"
    assert book["visibility_settings"] is None


def test_pending_collaborator_does_not_see_book(client, owner_headers, book_id):
    headers = add_collaborator(client, owner_headers, book_id, "pending@example.com", "Full Access", accept=False)
    assert client.get("/api/books", headers=headers).json() == []
    assert client.get(f"/api/books/{book_id}", headers=headers).status_code == 403


def test_full_access_collaborator_sees_everything(client, owner_headers, book_id):
    add_transaction(client, owner_headers, book_id, "income", 200)
    headers = add_collaborator(client, owner_headers, book_id, "full@example.com", "Full Access")

    books = client.get("/api/books", headers=headers).json()
    assert [b["id"] for b in books] == [book_id]
    assert books[0]["current_user_role"] == "Full Access"
    assert Decimal(books[0]["balance"]) == Decimal("200")
    assert books[0]["visibility_settings"] is None


def test_restricted_collaborator_never_receives_hidden_balance(client, owner_headers, book_id):
    add_transaction(client, owner_headers, book_id, "income", 500)
    add_transaction(client, owner_headers, book_id, "expense", 120, category="Food")
    headers = add_collaborator(client, owner_headers, book_id, "helper@example.com", "Add Transactions Only")

    book = client.get(f"/api/books/{book_id}", headers=headers).json()
    assert book["current_user_role"] == "Add Transactions Only"
    assert book["visibility_settings"] == {"balance": False, "income": False, "expenses": False}
    assert book["balance"] is None
    assert book["income"] is None
    assert book["expenses"] is None

    client.patch(
        f"/api/books/{book_id}/collaborators/helper@example.com/permissions",
        json={"field": "income", "value": True},
        headers=owner_headers
    )
    book = client.get("/api/books", headers=headers).json()[0]
    assert Decimal(book["income"]) == Decimal("500")
    assert book["balance"] is None
    assert book["expenses"] is None

    # The owner's view is unaffected
    owner_view = client.get(f"/api/books/{book_id}", headers=owner_headers).json()
    assert Decimal(owner_view["balance"]) == Decimal("380")


def test_rename_is_owner_only(client, owner_headers, book_id):
    headers = add_collaborator(client, owner_headers, book_id, "full@example.com", "Full Access")
    assert client.patch(f"/api/books/{book_id}", json={"name": "Nope"}, headers=headers).status_code == 403

    response = client.patch(f"/api/books/{book_id}", json={"name": "Family"}, headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Family"


def test_missing_book_is_404(client, owner_headers):
    assert client.get("/api/books/9999", headers=owner_headers).status_code == 404


def test_owned_books_listed_without_email(db, client, owner_headers, book_id):
    add_collaborator(client, owner_headers, book_id, "shared@example.com", "Full Access")
    owner = db.query(User).filter(User.email == "owner@example.com").first()

    books = get_books_for_user(db, owner.id, "")
    assert [b.id for b in books] == [book_id]
    assert books[0].current_user_role == "Owner"
