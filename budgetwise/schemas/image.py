"""
Pydantic schemas for receipt image upload and deletion.
"""
from pydantic import BaseModel
from typing import Optional


class ImageUploadRequest(BaseModel):
    image: str  # data URL (data:image/png;base64,...)


class ImageUploadResponse(BaseModel):
    success: bool
    url: Optional[str] = None


class ImageDeleteRequest(BaseModel):
    image_url: str
