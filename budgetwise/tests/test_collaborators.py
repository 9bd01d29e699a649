"""
Tests for the collaborator invitation lifecycle.
"""
import pytest
from conftest import add_collaborator, signup_and_login
from budgetwise.api.errors import status_for
from budgetwise.core.exceptions import ConflictError, NotFoundError
from budgetwise.models.book import CollaboratorRole, CollaboratorStatus
from budgetwise.services import collaborator_service
from budgetwise.services.book_service import get_book


def _collaborators(client, owner_headers, book_id):
    response = client.get(f"/api/books/{book_id}/collaborators", headers=owner_headers)
    assert response.status_code == 200
    return response.json()


def test_invite_creates_pending_entry_with_lowercased_email(client, owner_headers, book_id):
    response = client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "Foo@Bar.com", "role": "Add Transactions Only", "send_email": False},
        headers=owner_headers
    )
    assert response.status_code == 201
    body = response.json()
    assert body["invitation_sent"] is False
    assert body["collaborator"] == {
        "email": "foo@bar.com",
        "role": "Add Transactions Only",
        "status": "pending",
        "visibility": {"balance": False, "income": False, "expenses": False},
    }


def test_duplicate_invite_fails_without_mutation(client, owner_headers, book_id):
    payload = {"email": "dup@example.com", "role": "Full Access", "send_email": False}
    client.post(f"/api/books/{book_id}/collaborators", json=payload, headers=owner_headers)
    before = _collaborators(client, owner_headers, book_id)

    payload["email"] = "DUP@Example.com"
    payload["role"] = "Add Transactions Only"
    response = client.post(f"/api/books/{book_id}/collaborators", json=payload, headers=owner_headers)
    assert response.status_code == 409
    assert _collaborators(client, owner_headers, book_id) == before


def test_only_owner_can_manage_collaborators(client, owner_headers, book_id):
    headers = add_collaborator(client, owner_headers, book_id, "full@example.com", "Full Access")
    response = client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "other@example.com", "role": "Full Access", "send_email": False},
        headers=headers
    )
    assert response.status_code == 403
    assert client.get(f"/api/books/{book_id}/collaborators", headers=headers).status_code == 403


def test_accept_is_case_insensitive(client, owner_headers, book_id):
    client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "Foo@Bar.com", "role": "Full Access", "send_email": False},
        headers=owner_headers
    )
    headers = signup_and_login(client, "foo@bar.com")
    response = client.post(
        "/api/invitations/accept",
        json={"book_id": book_id, "email": "foo@bar.com"},
        headers=headers
    )
    assert response.json()["success"] is True
    assert _collaborators(client, owner_headers, book_id)[0]["status"] == "accepted"


def test_accept_twice_reports_failure(client, owner_headers, book_id):
    headers = add_collaborator(client, owner_headers, book_id, "twice@example.com", "Full Access")
    response = client.post(
        "/api/invitations/accept",
        json={"book_id": book_id, "email": "twice@example.com"},
        headers=headers
    )
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert _collaborators(client, owner_headers, book_id)[0]["status"] == "accepted"


def test_accept_for_another_email_is_forbidden(client, owner_headers, book_id):
    client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "invitee@example.com", "role": "Full Access", "send_email": False},
        headers=owner_headers
    )
    intruder = signup_and_login(client, "intruder@example.com")
    response = client.post(
        "/api/invitations/accept",
        json={"book_id": book_id, "email": "invitee@example.com"},
        headers=intruder
    )
    assert response.status_code == 403
    assert _collaborators(client, owner_headers, book_id)[0]["status"] == "pending"


def test_accept_unknown_book_or_email_is_noop(db, client, owner_headers, book_id):
    assert collaborator_service.accept(db, 9999, "nobody@example.com") is False
    assert collaborator_service.accept(db, book_id, "nobody@example.com") is False


def test_remove_collaborator(client, owner_headers, book_id):
    for email in ("a@example.com", "b@example.com"):
        client.post(
            f"/api/books/{book_id}/collaborators",
            json={"email": email, "role": "Full Access", "send_email": False},
            headers=owner_headers
        )
    assert len(_collaborators(client, owner_headers, book_id)) == 2

    response = client.delete(f"/api/books/{book_id}/collaborators/A@example.com", headers=owner_headers)
    assert response.status_code == 200
    remaining = _collaborators(client, owner_headers, book_id)
    assert [c["email"] for c in remaining] == ["b@example.com"]


def test_remove_missing_collaborator_fails_without_mutation(client, owner_headers, book_id):
    client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "keep@example.com", "role": "Full Access", "send_email": False},
        headers=owner_headers
    )
    response = client.delete(f"/api/books/{book_id}/collaborators/ghost@example.com", headers=owner_headers)
    assert response.status_code == 404
    assert len(_collaborators(client, owner_headers, book_id)) == 1


def test_removed_collaborator_loses_access(client, owner_headers, book_id):
    headers = add_collaborator(client, owner_headers, book_id, "gone@example.com", "Full Access")
    client.delete(f"/api/books/{book_id}/collaborators/gone@example.com", headers=owner_headers)
    assert client.get("/api/books", headers=headers).json() == []


def test_update_permission_ignores_full_access(client, owner_headers, book_id):
    add_collaborator(client, owner_headers, book_id, "full@example.com", "Full Access")
    response = client.patch(
        f"/api/books/{book_id}/collaborators/full@example.com/permissions",
        json={"field": "balance", "value": False},
        headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["visibility"] is None


def test_update_permission_changes_only_named_field(client, owner_headers, book_id):
    add_collaborator(client, owner_headers, book_id, "helper@example.com", "Add Transactions Only")
    response = client.patch(
        f"/api/books/{book_id}/collaborators/helper@example.com/permissions",
        json={"field": "expenses", "value": True},
        headers=owner_headers
    )
    assert response.json()["visibility"] == {"balance": False, "income": False, "expenses": True}


def test_invite_service_rejects_duplicates(db, client, owner_headers, book_id):
    book = get_book(db, book_id)
    collaborator_service.invite(db, book, "svc@example.com", CollaboratorRole.FULL_ACCESS)
    with pytest.raises(ConflictError):
        collaborator_service.invite(db, get_book(db, book_id), "SVC@example.com", CollaboratorRole.FULL_ACCESS)
    assert len(get_book(db, book_id).collaborators) == 1


def test_remove_service_raises_for_missing(db, client, owner_headers, book_id):
    with pytest.raises(NotFoundError):
        collaborator_service.remove(db, get_book(db, book_id), "missing@example.com")


def test_collaborator_version_increments(db, client, owner_headers, book_id):
    book = get_book(db, book_id)
    collaborator = collaborator_service.invite(db, book, "ver@example.com", CollaboratorRole.ADD_TRANSACTIONS_ONLY)
    first_version = collaborator.version
    assert collaborator_service.accept(db, book_id, "ver@example.com") is True
    db.refresh(collaborator)
    assert collaborator.status == CollaboratorStatus.ACCEPTED
    assert collaborator.version == first_version + 1


def test_invitation_email_is_best_effort(client, owner_headers, book_id):
    # RESEND_API_KEY is empty in tests: the invite still succeeds
    response = client.post(
        f"/api/books/{book_id}/collaborators",
        json={"email": "mail@example.com", "role": "Full Access"},
        headers=owner_headers
    )
    assert response.status_code == 201
    assert response.json()["invitation_sent"] is False
    assert response.json()["collaborator"]["status"] == "pending"


def test_stale_collaborator_write_is_a_conflict(app, client, owner_headers, book_id):
    add_collaborator(client, owner_headers, book_id, "race@example.com", "Add Transactions Only")
    first = app.state.session_factory()
    second = app.state.session_factory()
    try:
        first_book = get_book(first, book_id)
        second_book = get_book(second, book_id)

        collaborator_service.update_permission(first, first_book, "race@example.com", "income", True)
        with pytest.raises(ConflictError) as exc_info:
            collaborator_service.update_permission(second, second_book, "race@example.com", "balance", True)
        assert status_for(exc_info.value) == 409
    finally:
        first.close()
        second.close()

    response = client.get(f"/api/books/{book_id}/collaborators", headers=owner_headers)
    entry = next(c for c in response.json() if c["email"] == "race@example.com")
    assert entry["visibility"] == {"balance": False, "income": True, "expenses": False}
