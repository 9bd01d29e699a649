"""
Cash book and collaborator management routes.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budgetwise.core.config import Settings
from budgetwise.core.exceptions import BudgetWiseError
from budgetwise.db.session import get_db
from budgetwise.models.book import Collaborator, CollaboratorRole
from budgetwise.models.user import User
from budgetwise.schemas.book import (
    BookCreate, BookUpdate, BookResponse, CollaboratorInvite, CollaboratorResponse,
    InviteResult, PermissionUpdate, SuccessResponse, Visibility
)
from budgetwise.api.dependencies import get_app_settings, get_current_user
from budgetwise.services import book_service, collaborator_service, email_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])


def collaborator_response(collaborator: Collaborator) -> CollaboratorResponse:
    role = CollaboratorRole(collaborator.role)
    return CollaboratorResponse(
        email=collaborator.email,
        role=role,
        status=collaborator.status,
        visibility=Visibility(**collaborator.visibility)
        if role == CollaboratorRole.ADD_TRANSACTIONS_ONLY else None
    )


@router.get("", response_model=List[BookResponse])
async def list_books(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List owned and shared books with their totals."""
    return book_service.get_books_for_user(db, current_user.id, current_user.email)


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    book_data: BookCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new book owned by the current user."""
    book = book_service.create_book(db, book_data.name, current_user)
    return book_service.get_book_view(db, book.id, current_user)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a book with totals as the current user may see them."""
    return book_service.get_book_view(db, book_id, current_user)


@router.patch("/{book_id}", response_model=BookResponse)
async def rename_book(
    book_id: int,
    book_data: BookUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rename a book (owner only)."""
    book_service.rename_book(db, book_id, book_data.name, current_user)
    return book_service.get_book_view(db, book_id, current_user)


@router.get("/{book_id}/collaborators", response_model=List[CollaboratorResponse])
async def list_collaborators(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List collaborators and pending invitations (owner only)."""
    book = book_service.check_book_owner(db, book_id, current_user)
    return [collaborator_response(c) for c in collaborator_service.list_collaborators(book)]


@router.post("/{book_id}/collaborators", response_model=InviteResult, status_code=status.HTTP_201_CREATED)
async def invite_collaborator(
    book_id: int,
    invite: CollaboratorInvite,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """Invite a collaborator; the invitation email is best-effort."""
    book = book_service.check_book_owner(db, book_id, current_user)
    collaborator = collaborator_service.invite(db, book, invite.email, invite.role)

    invitation_sent = False
    if invite.send_email:
        try:
            await email_service.send_invitation(
                settings,
                email=collaborator.email,
                book_id=book.id,
                book_name=book.name,
                owner_name=current_user.display_name or current_user.email
            )
            invitation_sent = True
        except BudgetWiseError as e:
            logger.warning(f"Invitation email to {collaborator.email} not sent: {e}")

    return InviteResult(collaborator=collaborator_response(collaborator), invitation_sent=invitation_sent)


@router.delete("/{book_id}/collaborators/{email}", response_model=SuccessResponse)
async def remove_collaborator(
    book_id: int,
    email: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a collaborator or revoke a pending invitation (owner only)."""
    book = book_service.check_book_owner(db, book_id, current_user)
    collaborator_service.remove(db, book, email)
    return SuccessResponse(success=True, message="Collaborator removed successfully")


@router.patch("/{book_id}/collaborators/{email}/permissions", response_model=CollaboratorResponse)
async def update_collaborator_permissions(
    book_id: int,
    email: str,
    update: PermissionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Toggle one visibility flag of an Add Transactions Only collaborator."""
    book = book_service.check_book_owner(db, book_id, current_user)
    collaborator = collaborator_service.update_permission(db, book, email, update.field, update.value)
    return collaborator_response(collaborator)
