"""
Shared fixtures: an application on a throwaway SQLite database per test.
"""
import pytest
from fastapi.testclient import TestClient
from budgetwise.core.config import Settings
from budgetwise.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        APP_URL="https://budgetwise.test",
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="key",
        CLOUDINARY_API_SECRET="secret",
        OPENAI_API_KEY="sk-test",
        RESEND_API_KEY="",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def signup_and_login(client, email, password="testpassword123", display_name=None):
    """Create an account and return bearer auth headers for it."""
    client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "display_name": display_name}
    )
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def owner_headers(client):
    return signup_and_login(client, "owner@example.com", display_name="Olivia Owner")


@pytest.fixture
def book_id(client, owner_headers):
    response = client.post("/api/books", json={"name": "Household"}, headers=owner_headers)
    assert response.status_code == 201
    return response.json()["id"]


def add_collaborator(client, owner_headers, book_id, email, role, accept=True, password="testpassword123"):
    """Invite ``email`` to the book, optionally accept, and return the collaborator's headers."""
    response = client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": email, "role": role, "send_email": False},
        headers=owner_headers
    )
    assert response.status_code == 201
    headers = signup_and_login(client, email.lower(), password)
    if accept:
        response = client.post(
            "/api/invitations/accept",
            json={"book_id": book_id, "email": email},
            headers=headers
        )
        assert response.json()["success"] is True
    return headers


def add_transaction(client, headers, book_id, type_, amount, category=None, day="2024-07-15", **extra):
    payload = {
        "type": type_,
        "description": extra.pop("description", "Test entry"),
        "amount": amount,
        "category": category,
        "payment_method": extra.pop("payment_method", "Cash"),
        "date": day,
    }
    payload.update(extra)
    response = client.post(f"/api/books/{book_id}/transactions", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
