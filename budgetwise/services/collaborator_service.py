"""
Collaborator invitation lifecycle: invite -> pending -> accepted, plus removal
and per-field visibility for Add Transactions Only collaborators.
"""
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from budgetwise.core.exceptions import ConflictError, NotFoundError, ValidationError
from budgetwise.models.book import (
    Book, Collaborator, CollaboratorRole, CollaboratorStatus, VISIBILITY_FIELDS
)
from budgetwise.services.book_service import find_collaborator

logger = logging.getLogger(__name__)

# New Add Transactions Only collaborators start with every total hidden
DEFAULT_VISIBILITY = False


def _commit(db: Session):
    """Commit, turning unique-key and version clashes into ConflictError."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("This user is already a collaborator or has a pending invitation.")
    except StaleDataError:
        db.rollback()
        raise ConflictError("The collaborator was modified concurrently. Please retry.")


def invite(db: Session, book: Book, email: str, role: CollaboratorRole) -> Collaborator:
    """Create a pending collaborator; duplicates (case-insensitive) are rejected."""
    lowered = email.strip().lower()
    if not lowered:
        raise ValidationError("Email is required")
    if find_collaborator(book, lowered):
        raise ConflictError("This user is already a collaborator or has a pending invitation.")

    role = CollaboratorRole(role)
    collaborator = Collaborator(
        book_id=book.id,
        email=lowered,
        role=role,
        status=CollaboratorStatus.PENDING,
    )
    if role == CollaboratorRole.ADD_TRANSACTIONS_ONLY:
        collaborator.visibility_balance = DEFAULT_VISIBILITY
        collaborator.visibility_income = DEFAULT_VISIBILITY
        collaborator.visibility_expenses = DEFAULT_VISIBILITY
    db.add(collaborator)
    _commit(db)
    db.refresh(collaborator)
    logger.info("Invited %s to book %s as %s", lowered, book.id, role.value)
    return collaborator


def accept(db: Session, book_id: int, email: str) -> bool:
    """
    Move a pending invitation to accepted.

    Returns False, without changing anything, when the book is missing or no
    pending entry matches the email.
    """
    lowered = email.strip().lower()
    book = db.query(Book).filter(Book.id == book_id).first()
    if not book:
        logger.warning("Invitation accept for missing book %s", book_id)
        return False

    collaborator = find_collaborator(book, lowered)
    if not collaborator or collaborator.status != CollaboratorStatus.PENDING:
        return False

    collaborator.status = CollaboratorStatus.ACCEPTED
    _commit(db)
    logger.info("%s accepted invitation to book %s", lowered, book_id)
    return True


def remove(db: Session, book: Book, email: str):
    """Delete a collaborator regardless of status."""
    collaborator = find_collaborator(book, email)
    if not collaborator:
        raise NotFoundError("Collaborator not found")
    book.collaborators.remove(collaborator)
    _commit(db)
    logger.info("Removed %s from book %s", collaborator.email, book.id)


def update_permission(db: Session, book: Book, email: str, field: str, value: bool) -> Collaborator:
    """
    Set one visibility flag. Full Access collaborators are left untouched.
    """
    if field not in VISIBILITY_FIELDS:
        raise ValidationError(f"Unknown visibility field '{field}'")
    collaborator = find_collaborator(book, email)
    if not collaborator:
        raise NotFoundError("Collaborator not found")
    if CollaboratorRole(collaborator.role) != CollaboratorRole.ADD_TRANSACTIONS_ONLY:
        return collaborator

    setattr(collaborator, f"visibility_{field}", bool(value))
    _commit(db)
    db.refresh(collaborator)
    return collaborator


def list_collaborators(book: Book) -> list:
    return sorted(book.collaborators, key=lambda c: c.created_at)
