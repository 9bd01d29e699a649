"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from budgetwise.api.routes import (
    auth, users, books, invitations, transactions, images,
    payment_methods, categories, budget, reports
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(books.router)
api_router.include_router(invitations.router)
api_router.include_router(transactions.router)
api_router.include_router(images.router)
api_router.include_router(payment_methods.router)
api_router.include_router(categories.router)
api_router.include_router(budget.router)
api_router.include_router(reports.router)
