"""
Chart data routes.
"""
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.schemas.report import BookReport
from budgetwise.api.dependencies import get_current_user
from budgetwise.services import book_service, report_service, transaction_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/{book_id}", response_model=BookReport)
async def get_book_report(
    book_id: int,
    as_of: Optional[date] = Query(default=None, description="Reference day, defaults to today"),
    days: int = Query(default=30, ge=1, le=366),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Overview cards, category breakdown, spending trend and comparison for a book."""
    today = as_of or date.today()
    book, _ = book_service.check_book_access(db, book_id, current_user)
    _, visibility = book_service.resolve_role(book, current_user.id, current_user.email)
    transactions = transaction_service.list_book_transactions(db, book_id, current_user)

    return BookReport(
        book_id=book_id,
        overview=report_service.monthly_overview(transactions, today, visibility),
        categories=report_service.category_totals(transactions),
        trend=report_service.daily_spending_trend(transactions, today, days),
        comparison=report_service.spending_comparison(transactions, today)
    )
