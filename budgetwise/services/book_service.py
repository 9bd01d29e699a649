"""
Book access and aggregation.

Balances are recomputed from the full transaction set on every read; nothing is
cached or stored on the book row.
"""
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, selectinload
from budgetwise.core.exceptions import NotFoundError, PermissionDeniedError
from budgetwise.models.book import (
    Book, Collaborator, CollaboratorRole, CollaboratorStatus, OWNER_ROLE, VISIBILITY_FIELDS
)
from budgetwise.models.transaction import Transaction, TransactionType
from budgetwise.models.user import User
from budgetwise.schemas.book import BookResponse, Visibility

logger = logging.getLogger(__name__)


def compute_totals(transactions: Iterable) -> Tuple[Decimal, Decimal, Decimal]:
    """Return (income, expenses, balance) for a set of transactions."""
    income = Decimal(0)
    expenses = Decimal(0)
    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += Decimal(t.amount)
        elif t.type == TransactionType.EXPENSE:
            expenses += Decimal(t.amount)
    return income, expenses, income - expenses


def find_collaborator(book: Book, email: str) -> Optional[Collaborator]:
    """Case-insensitive lookup of a collaborator row on a loaded book."""
    lowered = email.lower()
    for c in book.collaborators:
        if c.email.lower() == lowered:
            return c
    return None


def resolve_role(book: Book, user_id: int, email: str) -> Tuple[Optional[str], Optional[Dict[str, bool]]]:
    """
    Return (current_user_role, visibility_settings) for the viewer.

    Visibility is only reported for Add Transactions Only collaborators;
    owners and Full Access collaborators see everything.
    """
    if book.owner_id == user_id:
        return OWNER_ROLE, None
    collaborator = find_collaborator(book, email)
    if not collaborator:
        return None, None
    role = CollaboratorRole(collaborator.role)
    if role == CollaboratorRole.ADD_TRANSACTIONS_ONLY:
        return role.value, collaborator.visibility
    return role.value, None


def build_book_view(
    book: Book,
    totals: Tuple[Decimal, Decimal, Decimal],
    role: Optional[str],
    visibility: Optional[Dict[str, bool]],
) -> BookResponse:
    """Assemble the view model, blanking any total the viewer may not see."""
    income, expenses, balance = totals
    figures = {"income": income, "expenses": expenses, "balance": balance}
    if visibility is not None:
        for field in VISIBILITY_FIELDS:
            if not visibility.get(field, False):
                figures[field] = None
    return BookResponse(
        id=book.id,
        name=book.name,
        owner_id=book.owner_id,
        owner_email=book.owner_email,
        created_at=book.created_at,
        current_user_role=role,
        visibility_settings=Visibility(**visibility) if visibility is not None else None,
        **figures
    )


def _accessible_books_query(db: Session, user_id: int, email: Optional[str]):
    condition = Book.owner_id == user_id
    # Without an email only owned books can match
    if email:
        accepted = Book.collaborators.any(and_(
            func.lower(Collaborator.email) == email.lower(),
            Collaborator.status == CollaboratorStatus.ACCEPTED
        ))
        condition = or_(condition, accepted)
    return db.query(Book).options(selectinload(Book.collaborators)).filter(condition)


def get_books_for_user(db: Session, user_id: int, email: Optional[str]) -> List[BookResponse]:
    """All books the user owns or has accepted an invitation to, with totals."""
    books = _accessible_books_query(db, user_id, email).order_by(Book.created_at).all()
    if not books:
        return []

    book_ids = [b.id for b in books]
    transactions_by_book = defaultdict(list)
    for t in db.query(Transaction).filter(Transaction.book_id.in_(book_ids)).all():
        transactions_by_book[t.book_id].append(t)

    results = []
    for book in books:
        role, visibility = resolve_role(book, user_id, email)
        totals = compute_totals(transactions_by_book.get(book.id, []))
        results.append(build_book_view(book, totals, role, visibility))
    return results


def get_book(db: Session, book_id: int) -> Book:
    book = db.query(Book).options(selectinload(Book.collaborators)).filter(Book.id == book_id).first()
    if not book:
        raise NotFoundError("Book not found")
    return book


def check_book_access(db: Session, book_id: int, user: User) -> Tuple[Book, str]:
    """
    Load a book the user may see and return it with the user's role.

    Pending invitations do not grant access.
    """
    book = get_book(db, book_id)
    if book.owner_id == user.id:
        return book, OWNER_ROLE
    collaborator = find_collaborator(book, user.email)
    if not collaborator or collaborator.status != CollaboratorStatus.ACCEPTED:
        raise PermissionDeniedError("Access denied to this book")
    return book, CollaboratorRole(collaborator.role).value


def check_book_owner(db: Session, book_id: int, user: User) -> Book:
    book = get_book(db, book_id)
    if book.owner_id != user.id:
        raise PermissionDeniedError("Only the book owner can do this")
    return book


def get_book_view(db: Session, book_id: int, user: User) -> BookResponse:
    book, _ = check_book_access(db, book_id, user)
    transactions = db.query(Transaction).filter(Transaction.book_id == book.id).all()
    role, visibility = resolve_role(book, user.id, user.email)
    return build_book_view(book, compute_totals(transactions), role, visibility)


def create_book(db: Session, name: str, owner: User) -> Book:
    book = Book(name=name.strip(), owner_id=owner.id, owner_email=owner.email.lower())
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info("Created book %s for user %s", book.id, owner.id)
    return book


def rename_book(db: Session, book_id: int, name: str, owner: User) -> Book:
    book = check_book_owner(db, book_id, owner)
    book.name = name.strip()
    db.commit()
    db.refresh(book)
    return book
