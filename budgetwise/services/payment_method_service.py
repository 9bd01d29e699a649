"""
Payment method lookup list per user.
"""
from typing import List
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from budgetwise.core.exceptions import ConflictError, NotFoundError, ValidationError
from budgetwise.models.lookup import PaymentMethod


def get_payment_methods(db: Session, user_id: int) -> List[PaymentMethod]:
    return db.query(PaymentMethod).filter(
        PaymentMethod.user_id == user_id
    ).order_by(PaymentMethod.id).all()


def add_payment_method(db: Session, user_id: int, name: str) -> PaymentMethod:
    """Create a payment method; case-insensitive duplicates are rejected."""
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Payment method name cannot be empty.")

    existing = db.query(PaymentMethod).filter(
        PaymentMethod.user_id == user_id,
        func.lower(PaymentMethod.name) == cleaned.lower()
    ).first()
    if existing:
        raise ConflictError("This payment method already exists.")

    method = PaymentMethod(user_id=user_id, name=cleaned)
    db.add(method)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("This payment method already exists.")
    db.refresh(method)
    return method


def delete_payment_method(db: Session, user_id: int, method_id: int):
    method = db.query(PaymentMethod).filter(
        PaymentMethod.id == method_id,
        PaymentMethod.user_id == user_id
    ).first()
    if not method:
        raise NotFoundError("Payment method not found")
    db.delete(method)
    db.commit()
