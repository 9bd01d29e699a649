"""
Pydantic schemas for payment methods and expense categories.
"""
from pydantic import BaseModel, Field
from typing import List


class LookupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)


class LookupResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    """Built-in categories followed by the user's own."""
    defaults: List[str]
    custom: List[LookupResponse]


class CategorySuggestRequest(BaseModel):
    description: str


class CategorySuggestResponse(BaseModel):
    categories: List[str]
