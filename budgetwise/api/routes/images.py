"""
Receipt image upload and deletion routes.
"""
from fastapi import APIRouter, Depends
from budgetwise.core.config import Settings
from budgetwise.models.user import User
from budgetwise.schemas.book import SuccessResponse
from budgetwise.schemas.image import ImageDeleteRequest, ImageUploadRequest, ImageUploadResponse
from budgetwise.api.dependencies import get_app_settings, get_current_user
from budgetwise.services import image_service

router = APIRouter(tags=["images"])


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(
    data: ImageUploadRequest,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings)
):
    """Upload a receipt image given as a data URL and return its public URL."""
    url = image_service.upload_image(data.image, settings)
    return ImageUploadResponse(success=True, url=url)


@router.post("/delete-image", response_model=SuccessResponse)
async def delete_image(
    data: ImageDeleteRequest,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings)
):
    """Delete a hosted image; an already deleted image counts as success."""
    image_service.delete_image(data.image_url, settings)
    return SuccessResponse(success=True)
