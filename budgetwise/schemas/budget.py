"""
Pydantic schemas for Budget entity.
"""
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from decimal import Decimal


class BudgetCreate(BaseModel):
    """Schema for budget creation."""
    amount: Decimal = Field(ge=0)


class BudgetResponse(BaseModel):
    """Schema for budget response."""
    id: int
    book_id: int
    user_id: int
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BudgetCategoryItem(BaseModel):
    """Schema for category spending item in budget summary."""
    category: str
    spent: Decimal
    transaction_count: int
    percentage_of_total: float  # Percentage of total spending (0-100)
    percentage_of_budget: float  # Percentage of budget (0-100)


class BudgetSummary(BaseModel):
    """Month-to-date spending against the budget."""
    budget_amount: Decimal
    total_spent: Decimal
    remaining: Decimal
    fill_ratio: float  # Percentage of budget used
    categories: List[BudgetCategoryItem] = []
