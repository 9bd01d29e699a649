"""
Pydantic schemas for Book and Collaborator entities.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import List, Literal, Optional
from datetime import datetime
from decimal import Decimal
from budgetwise.models.book import CollaboratorRole, CollaboratorStatus


class BookCreate(BaseModel):
    """Schema for book creation."""
    name: str = Field(min_length=1, max_length=200)


class BookUpdate(BaseModel):
    """Schema for renaming a book."""
    name: str = Field(min_length=1, max_length=200)


class Visibility(BaseModel):
    """Which totals an Add Transactions Only collaborator may see."""
    balance: bool = False
    income: bool = False
    expenses: bool = False


class BookResponse(BaseModel):
    """
    Book view model with derived totals.

    Totals hidden by the viewer's visibility settings are null.
    """
    id: int
    name: str
    owner_id: int
    owner_email: str
    created_at: datetime
    income: Optional[Decimal] = None
    expenses: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    current_user_role: Optional[str] = None
    visibility_settings: Optional[Visibility] = None


class CollaboratorInvite(BaseModel):
    """Schema for inviting a collaborator."""
    email: EmailStr
    role: CollaboratorRole
    send_email: bool = True


class CollaboratorResponse(BaseModel):
    """Schema for collaborator response."""
    email: str
    role: CollaboratorRole
    status: CollaboratorStatus
    visibility: Optional[Visibility] = None


class InviteResult(BaseModel):
    collaborator: CollaboratorResponse
    invitation_sent: bool


class PermissionUpdate(BaseModel):
    """Toggle a single visibility flag."""
    field: Literal["balance", "income", "expenses"]
    value: bool


class InvitationAccept(BaseModel):
    book_id: int
    email: EmailStr


class InvitationEmail(BaseModel):
    """Payload for sending an invitation email."""
    email: EmailStr
    book_id: int
    book_name: str
    owner_name: str


class SuccessResponse(BaseModel):
    success: bool
    message: Optional[str] = None


class BookListResponse(BaseModel):
    books: List[BookResponse]
