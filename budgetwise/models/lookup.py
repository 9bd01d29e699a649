"""
User-scoped lookup lists: payment methods and custom expense categories.

Both tables carry a unique index on (user_id, lower(name)).
"""
from sqlalchemy import Column, String, ForeignKey, Integer, Index, func
from sqlalchemy.orm import relationship
from budgetwise.db.base import BaseModel


class PaymentMethod(BaseModel):
    __tablename__ = "payment_methods"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)

    user = relationship("User", back_populates="payment_methods")


class ExpenseCategory(BaseModel):
    __tablename__ = "expense_categories"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)

    user = relationship("User", back_populates="expense_categories")


Index(
    "uq_payment_methods_user_name",
    PaymentMethod.user_id, func.lower(PaymentMethod.name),
    unique=True
)
Index(
    "uq_expense_categories_user_name",
    ExpenseCategory.user_id, func.lower(ExpenseCategory.name),
    unique=True
)
