"""
Budget management routes.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.models.budget import Budget
from budgetwise.schemas.budget import BudgetCreate, BudgetResponse, BudgetSummary
from budgetwise.api.dependencies import get_current_user
from budgetwise.services import report_service, transaction_service
from budgetwise.services.book_service import check_book_access

router = APIRouter(prefix="/budget", tags=["budget"])


def _get_user_budget(db: Session, book_id: int, user_id: int) -> Budget:
    budget = db.query(Budget).filter(
        Budget.book_id == book_id,
        Budget.user_id == user_id
    ).first()

    if not budget:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget not found"
        )
    return budget


@router.get("/{book_id}", response_model=BudgetResponse)
async def get_budget(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get current budget for a book."""
    check_book_access(db, book_id, current_user)
    return _get_user_budget(db, book_id, current_user.id)


@router.post("/{book_id}", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_or_update_budget(
    book_id: int,
    budget_data: BudgetCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set or edit the monthly budget for a book."""
    check_book_access(db, book_id, current_user)

    budget = db.query(Budget).filter(
        Budget.book_id == book_id,
        Budget.user_id == current_user.id
    ).first()

    if budget:
        budget.amount = budget_data.amount
    else:
        budget = Budget(
            book_id=book_id,
            user_id=current_user.id,
            amount=budget_data.amount
        )
        db.add(budget)

    db.commit()
    db.refresh(budget)

    return budget


@router.get("/{book_id}/summary", response_model=BudgetSummary)
async def get_budget_summary(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Month-to-date spending of the transactions the user can see, against the budget."""
    transactions = transaction_service.list_book_transactions(db, book_id, current_user)
    budget = _get_user_budget(db, book_id, current_user.id)
    return report_service.budget_summary(budget.amount, transactions, date.today())
