"""
Pydantic schemas for chart data.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal


class MonthlyOverview(BaseModel):
    total_income: Optional[Decimal] = None
    total_spent: Optional[Decimal] = None
    remaining: Optional[Decimal] = None
    transaction_count: int


class CategoryTotal(BaseModel):
    category: str
    amount: Decimal


class TrendPoint(BaseModel):
    date: str
    amount: Decimal


class ComparisonPoint(BaseModel):
    name: str
    total: Decimal


class BookReport(BaseModel):
    book_id: int
    overview: MonthlyOverview
    categories: List[CategoryTotal]
    trend: List[TrendPoint]
    comparison: List[ComparisonPoint]
