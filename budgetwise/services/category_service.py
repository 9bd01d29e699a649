"""
Expense category service.

Built-in and user-defined categories, plus best-effort category suggestions
from an OpenAI chat-completions endpoint. Suggestions never raise: any failure
yields an empty list.
"""
import json
import logging
from typing import List
import httpx
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from budgetwise.core.config import Settings
from budgetwise.core.exceptions import ConflictError, NotFoundError, ValidationError
from budgetwise.models.lookup import ExpenseCategory

logger = logging.getLogger(__name__)

# Built-in categories offered to every user
EXPENSE_CATEGORIES = [
    "Food",
    "Travel",
    "Shopping",
    "Bills",
    "Entertainment",
    "Health",
    "Groceries",
    "Transport",
    "Education",
    "Other",
]

MIN_DESCRIPTION_LENGTH = 3

SUGGESTION_PROMPT = (
    "Given the following expense description, suggest relevant expense categories. "
    "Return the categories as a JSON object of the form {{\"categories\": [\"...\"]}}.\n\n"
    "Description: {description}"
)


def _parse_categories(content: str) -> List[str]:
    """Extract the category strings from the model output."""
    data = json.loads(content)
    if isinstance(data, dict):
        data = data.get("categories", [])
    if not isinstance(data, list):
        return []
    categories = []
    for item in data:
        if isinstance(item, str) and item.strip() and item.strip() not in categories:
            categories.append(item.strip())
    return categories


async def suggest_categories(description: str, settings: Settings) -> List[str]:
    """
    Ask the text-generation service for categories matching a description.

    Args:
        description: Free-text description of the expense
        settings: Application settings holding the OpenAI credentials

    Returns:
        Suggested category names, or an empty list on any failure
    """
    if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        return []

    if not settings.OPENAI_API_KEY:
        logger.warning("OpenAI API key not configured. Skipping category suggestions.")
        return []

    prompt = SUGGESTION_PROMPT.format(description=description.strip())

    try:
        async with httpx.AsyncClient(timeout=settings.OPENAI_TIMEOUT) as client:
            response = await client.post(
                settings.OPENAI_API_URL,
                headers={
                    "Authorization": f"Bearer {settings.OPENAI_API_KEY}",
                    "Content-Type": "application/json"
                },
                json={
                    "model": settings.OPENAI_MODEL,
                    "messages": [
                        {
                            "role": "system",
                            "content": "You suggest expense categories. Always respond with JSON only."
                        },
                        {
                            "role": "user",
                            "content": prompt
                        }
                    ],
                    "response_format": {"type": "json_object"},
                    "temperature": 0.3
                }
            )

        if response.status_code != 200:
            logger.error(f"OpenAI API error {response.status_code}: {response.text}")
            return []

        result = response.json()
        content = result.get("choices", [{}])[0].get("message", {}).get("content", "")
        categories = _parse_categories(content)
        logger.debug(f"Suggested {categories} for '{description}'")
        return categories

    except httpx.TimeoutException:
        logger.error("OpenAI API request timed out. Returning no suggestions.")
        return []
    except Exception as e:
        logger.error(f"Error suggesting expense categories: {e}", exc_info=True)
        return []


def get_custom_categories(db: Session, user_id: int) -> List[ExpenseCategory]:
    return db.query(ExpenseCategory).filter(
        ExpenseCategory.user_id == user_id
    ).order_by(ExpenseCategory.name).all()


def add_custom_category(db: Session, user_id: int, name: str) -> ExpenseCategory:
    """Create a custom category; names clashing with defaults or existing ones are rejected."""
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Category name cannot be empty.")

    lowered = cleaned.lower()
    if any(c.lower() == lowered for c in EXPENSE_CATEGORIES):
        raise ConflictError("This category name is already in use.")
    existing = db.query(ExpenseCategory).filter(
        ExpenseCategory.user_id == user_id,
        func.lower(ExpenseCategory.name) == lowered
    ).first()
    if existing:
        raise ConflictError("This category name is already in use.")

    category = ExpenseCategory(user_id=user_id, name=cleaned)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("This category name is already in use.")
    db.refresh(category)
    return category


def delete_custom_category(db: Session, user_id: int, category_id: int):
    category = db.query(ExpenseCategory).filter(
        ExpenseCategory.id == category_id,
        ExpenseCategory.user_id == user_id
    ).first()
    if not category:
        raise NotFoundError("Category not found")
    db.delete(category)
    db.commit()
