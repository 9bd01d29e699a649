"""
Payment method routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.schemas.book import SuccessResponse
from budgetwise.schemas.lookup import LookupCreate, LookupResponse
from budgetwise.api.dependencies import get_current_user
from budgetwise.services import payment_method_service

router = APIRouter(prefix="/payment-methods", tags=["payment-methods"])


@router.get("", response_model=List[LookupResponse])
async def list_payment_methods(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return payment_method_service.get_payment_methods(db, current_user.id)


@router.post("", response_model=LookupResponse, status_code=status.HTTP_201_CREATED)
async def add_payment_method(
    data: LookupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return payment_method_service.add_payment_method(db, current_user.id, data.name)


@router.delete("/{method_id}", response_model=SuccessResponse)
async def delete_payment_method(
    method_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    payment_method_service.delete_payment_method(db, current_user.id, method_id)
    return SuccessResponse(success=True)
