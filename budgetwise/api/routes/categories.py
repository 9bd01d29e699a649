"""
Expense category routes, including AI suggestions.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from budgetwise.core.config import Settings
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.schemas.book import SuccessResponse
from budgetwise.schemas.lookup import (
    CategoryListResponse, CategorySuggestRequest, CategorySuggestResponse, LookupCreate, LookupResponse
)
from budgetwise.api.dependencies import get_app_settings, get_current_user
from budgetwise.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Built-in categories and the user's custom ones."""
    return CategoryListResponse(
        defaults=list(category_service.EXPENSE_CATEGORIES),
        custom=[
            LookupResponse.model_validate(c)
            for c in category_service.get_custom_categories(db, current_user.id)
        ]
    )


@router.post("", response_model=LookupResponse, status_code=status.HTTP_201_CREATED)
async def add_category(
    data: LookupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return category_service.add_custom_category(db, current_user.id, data.name)


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    category_service.delete_custom_category(db, current_user.id, category_id)
    return SuccessResponse(success=True)


@router.post("/suggest", response_model=CategorySuggestResponse)
async def suggest_categories(
    data: CategorySuggestRequest,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings)
):
    """Suggest categories for a description. Failures yield an empty list."""
    if len(data.description.strip()) < category_service.MIN_DESCRIPTION_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please enter a longer description to get suggestions."
        )
    categories = await category_service.suggest_categories(data.description, settings)
    return CategorySuggestResponse(categories=categories)
