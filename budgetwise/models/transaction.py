"""
Transaction model for income and expense entries.
"""
import enum
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from budgetwise.db.base import BaseModel


class TransactionType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    """A single income or expense in a book, created by user_id."""
    __tablename__ = "transactions"

    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(SQLEnum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True)  # Null for income
    payment_method = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, index=True)
    image_url = Column(String(500), nullable=True)

    # Relationships
    book = relationship("Book", back_populates="transactions")
    user = relationship("User", back_populates="transactions")
