"""
Transaction service for transaction-related business logic.
"""
import logging
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from budgetwise.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from budgetwise.models.book import CollaboratorRole, OWNER_ROLE
from budgetwise.models.transaction import Transaction, TransactionType
from budgetwise.models.user import User
from budgetwise.schemas.transaction import REQUIRED_FIELDS, TransactionCreate, TransactionUpdate
from budgetwise.services.book_service import check_book_access

logger = logging.getLogger(__name__)

# Roles that see and manage every transaction in a book
UNRESTRICTED_ROLES = (OWNER_ROLE, CollaboratorRole.FULL_ACCESS.value)


def visible_transactions(transactions: Iterable[Transaction], role: Optional[str], viewer_id: int) -> List[Transaction]:
    """Owners and Full Access see everything; other viewers see only their own rows."""
    if role in UNRESTRICTED_ROLES:
        return list(transactions)
    return [t for t in transactions if t.user_id == viewer_id]


def list_book_transactions(db: Session, book_id: int, user: User) -> List[Transaction]:
    """Transactions of a book as the user is allowed to see them, newest first."""
    book, role = check_book_access(db, book_id, user)
    transactions = db.query(Transaction).filter(
        Transaction.book_id == book.id
    ).order_by(Transaction.date.desc(), Transaction.id.desc()).all()
    return visible_transactions(transactions, role, user.id)


def create_transaction(db: Session, book_id: int, data: TransactionCreate, user: User) -> Transaction:
    """Any principal with access to the book may add transactions."""
    book, _ = check_book_access(db, book_id, user)
    transaction = Transaction(
        book_id=book.id,
        user_id=user.id,
        type=data.type,
        amount=data.amount,
        description=data.description.strip(),
        category=data.category.strip() if data.category else None,
        payment_method=data.payment_method.strip(),
        date=data.date,
        image_url=data.image_url or None,
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info("Created %s transaction %s in book %s", transaction.type.value, transaction.id, book.id)
    return transaction


def get_editable_transaction(db: Session, transaction_id: int, user: User) -> Transaction:
    """
    Load a transaction the user may modify.

    Add Transactions Only collaborators can only touch their own rows.
    """
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise NotFoundError("Transaction not found")
    _, role = check_book_access(db, transaction.book_id, user)
    if role not in UNRESTRICTED_ROLES and transaction.user_id != user.id:
        raise PermissionDeniedError("You can only modify your own transactions")
    return transaction


def update_transaction(db: Session, transaction: Transaction, data: TransactionUpdate) -> Optional[str]:
    """
    Apply a partial update.

    Returns the previous image URL when it was replaced or cleared, so the caller
    can remove it from image hosting.
    """
    updates = data.model_dump(exclude_unset=True)
    new_type = updates.get("type", transaction.type)
    category = updates.get("category", transaction.category)

    if new_type == TransactionType.EXPENSE:
        if not category or not str(category).strip():
            raise ValidationError("Please select a valid category for the expense.")
        updates["category"] = str(category).strip()
    else:
        updates["category"] = None

    for field in REQUIRED_FIELDS:
        if field in updates and updates[field] is None:
            raise ValidationError(f"{field} cannot be empty")

    replaced_image = None
    if "image_url" in updates:
        new_url = updates["image_url"] or None
        if transaction.image_url and transaction.image_url != new_url:
            replaced_image = transaction.image_url
        updates["image_url"] = new_url

    for field, value in updates.items():
        setattr(transaction, field, value)

    db.commit()
    db.refresh(transaction)
    return replaced_image


def delete_transaction(db: Session, transaction: Transaction) -> Optional[str]:
    """Delete a transaction and return its image URL, if any."""
    image_url = transaction.image_url
    transaction_id = transaction.id
    db.delete(transaction)
    db.commit()
    logger.info("Deleted transaction %s", transaction_id)
    return image_url


def clear_image(db: Session, transaction: Transaction):
    transaction.image_url = None
    db.commit()
    db.refresh(transaction)
