"""Models package - Import all models for SQLAlchemy registration."""
from budgetwise.models.user import User
from budgetwise.models.book import (
    Book, Collaborator, CollaboratorRole, CollaboratorStatus, OWNER_ROLE, VISIBILITY_FIELDS
)
from budgetwise.models.transaction import Transaction, TransactionType
from budgetwise.models.lookup import PaymentMethod, ExpenseCategory
from budgetwise.models.budget import Budget

__all__ = [
    "User",
    "Book",
    "Collaborator",
    "CollaboratorRole",
    "CollaboratorStatus",
    "OWNER_ROLE",
    "VISIBILITY_FIELDS",
    "Transaction",
    "TransactionType",
    "PaymentMethod",
    "ExpenseCategory",
    "Budget",
]
