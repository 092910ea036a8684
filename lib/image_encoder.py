# =============================================================================
# lib/image_encoder.py - Sign Photo Validation and Encoding
# =============================================================================
# Turns an uploaded photo into the text payload stored in the `photo` column:
# a data URL of the form "data:<mime>;base64,<payload>".
#
# Validation (type allow-list, size limit) always runs before encoding, and
# each failure has its own error type so the caller can report it inline.
# =============================================================================

import base64
import logging

from fastapi import UploadFile

from app.config import get_settings
from app.exceptions import ImageReadError, ImageTooLargeError, InvalidImageTypeError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
)


def validate_image(content_type: str | None, size: int | None) -> None:
    """
    Check a photo's MIME type and size.

    Args:
        content_type: MIME type reported for the file
        size: Size in bytes (None when not yet known)

    Raises:
        InvalidImageTypeError: If the type is not an accepted image type
        ImageTooLargeError: If size exceeds MAX_IMAGE_SIZE_MB
    """
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidImageTypeError(content_type, list(ALLOWED_IMAGE_TYPES))

    settings = get_settings()
    if size is not None and size > settings.max_image_size_bytes:
        raise ImageTooLargeError(size, settings.MAX_IMAGE_SIZE_MB)


def validate_upload(file: UploadFile) -> None:
    """Run validate_image against an UploadFile's reported type and size."""
    validate_image(file.content_type, file.size)


def to_data_url(content: bytes, content_type: str) -> str:
    """Encode raw bytes as a base64 data URL."""
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{payload}"


async def encode_image(file: UploadFile) -> str:
    """
    Read an uploaded photo and encode it as a data URL.

    The size is checked again against the bytes actually read, since
    the multipart parser doesn't always report it up front.

    Returns:
        "data:<mime>;base64,<payload>"

    Raises:
        ImageReadError: If the file cannot be read
        ImageTooLargeError: If the content exceeds the limit
    """
    try:
        content = await file.read()
    except Exception as e:
        logger.warning(f"Failed to read image {file.filename}: {e}")
        raise ImageReadError(file.filename, str(e))

    validate_image(file.content_type, len(content))

    logger.debug(f"Encoded image {file.filename} ({len(content)} bytes)")
    return to_data_url(content, file.content_type)
