"""
Budget model for personal budget tracking.
"""
from sqlalchemy import Column, Numeric, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from budgetwise.db.base import BaseModel


class Budget(BaseModel):
    """Monthly budget per user per book."""
    __tablename__ = "budgets"

    book_id = Column(Integer, ForeignKey("books.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)

    # Relationships
    book = relationship("Book", back_populates="budgets")
    user = relationship("User", back_populates="budgets")

    # Unique constraint: one budget per user per book
    __table_args__ = (
        UniqueConstraint('book_id', 'user_id', name='uq_book_user_budget'),
    )
