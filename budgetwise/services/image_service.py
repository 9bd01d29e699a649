"""
Receipt image hosting on Cloudinary.

Upload takes a data URL and returns the public HTTPS URL; delete derives the
Cloudinary public id back from that URL.
"""
import base64
import binascii
import logging
import re
from typing import Optional
import cloudinary
import cloudinary.uploader
from budgetwise.core.config import Settings
from budgetwise.core.exceptions import ConfigurationError, ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)
_VERSION_SEGMENT_RE = re.compile(r"^v\d+$")

# Cloudinary destroy results that mean the image is gone
_DELETED_RESULTS = ("ok", "not found")


def _configure(settings: Settings):
    if not settings.cloudinary_configured:
        logger.error("Cloudinary credentials are not set on the server.")
        raise ConfigurationError("Image service is not configured. Please contact the administrator.")
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def validate_data_url(image: str, settings: Settings):
    """Reject data URLs with an unsupported type or a payload over the size limit."""
    match = _DATA_URL_RE.match(image or "")
    if not match:
        raise ValidationError("Image must be a base64 data URL")
    if match.group("mime").lower() not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only .jpg, .jpeg, .png and .webp formats are supported.")
    try:
        size = len(base64.b64decode(match.group("data"), validate=False))
    except (binascii.Error, ValueError):
        raise ValidationError("Image data is not valid base64")
    if size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(f"Max image size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB.")


def public_id_from_url(url: str) -> Optional[str]:
    """
    Derive the Cloudinary public id from a delivery URL.

    Everything after the ``v<digits>`` version segment, minus the extension:
    ``.../upload/v1712/budgetwise-receipts/abc.jpg`` -> ``budgetwise-receipts/abc``.
    """
    if not url:
        return None
    parts = url.split("/")
    version_index = next((i for i, part in enumerate(parts) if _VERSION_SEGMENT_RE.match(part)), -1)
    if version_index == -1 or version_index + 1 >= len(parts):
        return None
    public_id = "/".join(parts[version_index + 1:])
    stem, dot, _ = public_id.rpartition(".")
    return stem if dot else public_id


def upload_image(image: str, settings: Settings) -> str:
    """Upload a data URL image and return its secure URL."""
    _configure(settings)
    validate_data_url(image, settings)
    try:
        result = cloudinary.uploader.upload(image, folder=settings.CLOUDINARY_FOLDER)
    except Exception as e:
        logger.error(f"Cloudinary upload error: {e}", exc_info=True)
        raise ExternalServiceError("Image upload failed.")
    url = result.get("secure_url")
    if not url:
        raise ExternalServiceError("Image upload failed.")
    logger.info(f"Uploaded receipt image {result.get('public_id')}")
    return url


def delete_image(image_url: str, settings: Settings):
    """Delete a hosted image; an image that is already gone counts as deleted."""
    _configure(settings)
    public_id = public_id_from_url(image_url)
    if not public_id:
        raise ValidationError("Could not extract public ID from URL")
    try:
        result = cloudinary.uploader.destroy(public_id)
    except Exception as e:
        logger.error(f"Cloudinary deletion error: {e}", exc_info=True)
        raise ExternalServiceError("Image deletion failed.")
    if result.get("result") not in _DELETED_RESULTS:
        logger.error(f"Cloudinary deletion of {public_id} returned {result.get('result')}")
        raise ExternalServiceError("Image deletion failed.")


def delete_image_quietly(image_url: Optional[str], settings: Settings) -> bool:
    """Best-effort cleanup used after a transaction edit or delete."""
    if not image_url:
        return True
    try:
        delete_image(image_url, settings)
        return True
    except (ConfigurationError, ExternalServiceError, ValidationError) as e:
        logger.warning(f"Could not delete image {image_url}: {e}")
        return False
