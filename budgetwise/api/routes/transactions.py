"""
Transaction management routes.
"""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from budgetwise.core.config import Settings
from budgetwise.db.session import get_db
from budgetwise.models.user import User
from budgetwise.schemas.book import SuccessResponse
from budgetwise.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate
from budgetwise.api.dependencies import get_app_settings, get_current_user
from budgetwise.services import image_service, transaction_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transactions"])


@router.get("/books/{book_id}/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    book_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Transactions of a book; restricted collaborators only see their own."""
    return transaction_service.list_book_transactions(db, book_id, current_user)


@router.post(
    "/books/{book_id}/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_transaction(
    book_id: int,
    transaction_data: TransactionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an income or expense to a book."""
    return transaction_service.create_transaction(db, book_id, transaction_data, current_user)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: int,
    transaction_data: TransactionUpdate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """Edit a transaction. A replaced receipt image is removed from hosting."""
    transaction = transaction_service.get_editable_transaction(db, transaction_id, current_user)
    replaced_image = transaction_service.update_transaction(db, transaction, transaction_data)
    image_service.delete_image_quietly(replaced_image, settings)
    return transaction


@router.delete("/transactions/{transaction_id}", response_model=SuccessResponse)
async def delete_transaction(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """Delete a transaction and, best-effort, its receipt image."""
    transaction = transaction_service.get_editable_transaction(db, transaction_id, current_user)
    image_url = transaction_service.delete_transaction(db, transaction)
    image_service.delete_image_quietly(image_url, settings)
    return SuccessResponse(success=True, message="Transaction deleted")


@router.delete("/transactions/{transaction_id}/image", response_model=TransactionResponse)
async def delete_transaction_image(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db)
):
    """Delete the receipt image from hosting, then detach it from the transaction."""
    transaction = transaction_service.get_editable_transaction(db, transaction_id, current_user)
    if transaction.image_url:
        image_service.delete_image(transaction.image_url, settings)
        transaction_service.clear_image(db, transaction)
    return transaction
