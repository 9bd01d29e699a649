"""
Pydantic schemas for Transaction entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
import datetime as dt
from decimal import Decimal
from budgetwise.models.transaction import TransactionType

# Columns that can be changed but never cleared
REQUIRED_FIELDS = ("type", "description", "amount", "payment_method", "date")


class TransactionCreate(BaseModel):
    """Schema for transaction creation."""
    type: TransactionType
    description: str = Field(min_length=3, max_length=100)
    amount: Decimal = Field(gt=0)
    category: Optional[str] = None
    payment_method: str = Field(min_length=1, max_length=100)
    date: dt.date
    image_url: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @model_validator(mode="after")
    def check_category(self):
        """Expenses need a category; income never keeps one."""
        if self.type == TransactionType.EXPENSE:
            if not self.category:
                raise ValueError("Please select a valid category for the expense.")
        else:
            self.category = None
        return self


class TransactionUpdate(BaseModel):
    """Schema for transaction update."""
    type: Optional[TransactionType] = None
    description: Optional[str] = Field(default=None, min_length=3, max_length=100)
    amount: Optional[Decimal] = Field(default=None, gt=0)
    category: Optional[str] = None
    payment_method: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date: Optional[dt.date] = None
    image_url: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @model_validator(mode="after")
    def check_required_not_null(self):
        for field in REQUIRED_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self


class TransactionResponse(BaseModel):
    """Schema for transaction response."""
    id: int
    book_id: int
    user_id: int
    type: TransactionType
    amount: Decimal
    description: str
    category: Optional[str] = None
    payment_method: str
    date: dt.date
    image_url: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True
