"""
Invitation acceptance and invitation email routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from budgetwise.core.config import Settings
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.schemas.book import InvitationAccept, InvitationEmail, SuccessResponse
from budgetwise.api.dependencies import get_app_settings, get_current_user
from budgetwise.services import book_service, collaborator_service, email_service

router = APIRouter(tags=["invitations"])


@router.post("/invitations/accept", response_model=SuccessResponse)
async def accept_invitation(
    data: InvitationAccept,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept an invitation addressed to the logged-in user's email."""
    if current_user.email.lower() != data.email.lower():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"This invitation is for {data.email}. You are logged in as {current_user.email}."
        )

    if collaborator_service.accept(db, data.book_id, data.email):
        return SuccessResponse(success=True, message="Invitation accepted! You now have access to the cash book.")
    return SuccessResponse(success=False, message="Failed to accept invitation. It may have expired or been revoked.")


@router.post("/send-invitation", response_model=SuccessResponse)
async def send_invitation(
    data: InvitationEmail,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """(Re)send an invitation email for a book the current user owns."""
    book_service.check_book_owner(db, data.book_id, current_user)
    await email_service.send_invitation(
        settings,
        email=data.email.lower(),
        book_id=data.book_id,
        book_name=data.book_name,
        owner_name=data.owner_name
    )
    return SuccessResponse(success=True)
