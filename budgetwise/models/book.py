"""
Cash book and collaborator models.
"""
import enum
from sqlalchemy import (
    Column, String, Boolean, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
)
from sqlalchemy.orm import relationship
from budgetwise.db.base import BaseModel


class CollaboratorRole(str, enum.Enum):
    """Role granted to a non-owner collaborator."""
    FULL_ACCESS = "Full Access"
    ADD_TRANSACTIONS_ONLY = "Add Transactions Only"


class CollaboratorStatus(str, enum.Enum):
    """Invitation status."""
    PENDING = "pending"
    ACCEPTED = "accepted"


OWNER_ROLE = "Owner"

VISIBILITY_FIELDS = ("balance", "income", "expenses")


class Book(BaseModel):
    """A named collection of transactions with one owner."""
    __tablename__ = "books"

    name = Column(String(200), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    owner_email = Column(String(100), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="books")
    collaborators = relationship("Collaborator", back_populates="book", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="book", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="book", cascade="all, delete-orphan")


class Collaborator(BaseModel):
    """Collaborator row keyed by (book_id, email), versioned for optimistic locking."""
    __tablename__ = "collaborators"

    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    email = Column(String(100), nullable=False, index=True)  # Always lowercased
    role = Column(SQLEnum(CollaboratorRole, values_callable=lambda e: [m.value for m in e]), nullable=False)
    status = Column(
        SQLEnum(CollaboratorStatus, values_callable=lambda e: [m.value for m in e]),
        default=CollaboratorStatus.PENDING,
        nullable=False
    )
    visibility_balance = Column(Boolean, default=False, nullable=False)
    visibility_income = Column(Boolean, default=False, nullable=False)
    visibility_expenses = Column(Boolean, default=False, nullable=False)
    version = Column(Integer, nullable=False)

    # Relationships
    book = relationship("Book", back_populates="collaborators")

    __table_args__ = (
        UniqueConstraint('book_id', 'email', name='uq_book_collaborator_email'),
    )
    __mapper_args__ = {"version_id_col": version}

    @property
    def visibility(self) -> dict:
        return {field: getattr(self, f"visibility_{field}") for field in VISIBILITY_FIELDS}
