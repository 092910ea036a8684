# =============================================================================
# app/routers/signs.py - Sign Catalog Endpoints
# =============================================================================
# Search mode: list/filter the catalog and view one sign.
# Upload mode: add a sign with its photo (requires upload authorization).
#
# Reads are served from the in-memory catalog; only refresh and upload
# talk to the store.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from app.auth import UploadAuthorization, require_upload_authorization
from app.dependencies import CatalogDep
from app.exceptions import PhotoRequiredError, SignNotFoundError
from core.models.sign import SearchFilters, SignCreate, SignList, SignOptions, SignRecord
from lib.image_encoder import encode_image, validate_upload

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class SignUploadResponse(BaseModel):
    """Response after a sign is stored."""
    sign: SignRecord
    total_count: int = Field(..., ge=0)
    message: str = Field(default="Sign uploaded successfully!")


class RefreshResponse(BaseModel):
    """Response after re-fetching the catalog."""
    total_count: int = Field(..., ge=0)
    message: str = Field(default="Catalog refreshed")


# Required, non-empty text field on the upload form
RequiredText = Annotated[str, Form(min_length=1)]


# =============================================================================
# Search Endpoints
# =============================================================================

@router.get("", response_model=SignList)
async def list_signs(
    catalog_service: CatalogDep,
    filters: SearchFilters = Depends(),
):
    """
    List signs, optionally narrowed by per-field substring filters.

    Each query parameter (sign_type, mutcd_code, ...) matches
    case-insensitively anywhere in that field; all given filters must match.
    Results keep the catalog's newest-first order.
    """
    catalog = catalog_service.snapshot()
    matched = catalog.filter(filters)

    return SignList(
        signs=matched,
        total_count=len(catalog),
        filtered_count=len(matched),
        filters=filters.active(),
    )


@router.get("/options", response_model=SignOptions)
async def get_options():
    """Shape and color choices for the upload and search forms."""
    return SignOptions()


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_signs(catalog_service: CatalogDep):
    """
    Re-fetch the catalog from the store.

    Never called automatically; uploads prepend locally instead.
    """
    await run_in_threadpool(catalog_service.refresh)
    catalog = catalog_service.snapshot()
    return RefreshResponse(total_count=len(catalog))


@router.get("/{sign_id}", response_model=SignRecord)
async def get_sign(
    sign_id: Annotated[str, Path(description="Sign ID")],
    catalog_service: CatalogDep,
):
    """Detail view for one sign, including its photo."""
    record = catalog_service.snapshot().get(sign_id)
    if record is None:
        raise SignNotFoundError(sign_id)
    return record


# =============================================================================
# Upload Endpoint
# =============================================================================

@router.post("", response_model=SignUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_sign(
    catalog_service: CatalogDep,
    sign_details: RequiredText,
    sign_type: RequiredText,
    mutcd_name: RequiredText,
    mutcd_code: RequiredText,
    legend_color: RequiredText,
    background_color: RequiredText,
    sign_shape: RequiredText,
    photo: Annotated[UploadFile | None, File(description="Sign photo (JPEG, PNG, GIF, or WebP)")] = None,
    auth: UploadAuthorization = Depends(require_upload_authorization),
):
    """
    Add a sign to the catalog.

    This endpoint:
    1. Requires upload authorization for the session
    2. Validates required fields and the photo (type, size)
    3. Encodes the photo as a data URL
    4. Inserts the sign into the store
    5. Prepends the stored sign to the catalog (no re-fetch)
    """
    if photo is None or not photo.filename:
        raise PhotoRequiredError()

    validate_upload(photo)
    encoded = await encode_image(photo)

    candidate = SignCreate(
        photo=encoded,
        sign_details=sign_details,
        sign_type=sign_type,
        mutcd_name=mutcd_name,
        mutcd_code=mutcd_code,
        legend_color=legend_color,
        background_color=background_color,
        sign_shape=sign_shape,
        upload_date=datetime.now(timezone.utc).isoformat(),
    )

    record = await run_in_threadpool(catalog_service.add, candidate)
    logger.info(f"Uploaded sign {record.id} ({record.mutcd_code})")

    return SignUploadResponse(sign=record, total_count=len(catalog_service.catalog))
