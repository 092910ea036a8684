# =============================================================================
# core/models/sign.py - Sign Catalog Schemas
# =============================================================================
# These models define the contract for catalog entries:
# - SignRecord: A row of the `signs` table as returned by the store
# - SignCreate: Input for inserting a new sign (no id / created_at)
# - SearchFilters: Per-field substring predicates for the search view
# - SignList: Search response with counts
#
# Records are created once and never updated or deleted by this app.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


# Classification fields that can be searched. Order matches the upload form.
SEARCH_FIELDS: tuple[str, ...] = (
    "sign_details",
    "sign_type",
    "mutcd_name",
    "mutcd_code",
    "legend_color",
    "background_color",
    "sign_shape",
)

# Dropdown values offered by the upload and search forms.
SIGN_SHAPES: tuple[str, ...] = (
    "Circle", "Octagon", "Triangle", "Square", "Rectangle",
    "Diamond", "Pentagon", "Trapezoid", "Arrow", "Custom",
)

SIGN_COLORS: tuple[str, ...] = (
    "Red", "Blue", "Yellow", "Green", "Orange", "White",
    "Black", "Brown", "Purple", "Pink", "Gray", "Other",
)


class SignCreate(BaseModel):
    """
    Schema for inserting a new sign.

    Every field is required and must be non-empty. The store assigns
    `id` and `created_at`, so they are not accepted here.

    Example:
        {
            "photo": "data:image/png;base64,iVBORw0...",
            "sign_details": "Curve ahead, 35 mph advisory",
            "sign_type": "Warning",
            "mutcd_name": "Curve",
            "mutcd_code": "W1-2",
            "legend_color": "Black",
            "background_color": "Yellow",
            "sign_shape": "Diamond",
            "upload_date": "2024-01-15T10:30:00+00:00"
        }
    """

    photo: str = Field(..., min_length=1, description="Data URL of the sign photo")
    sign_details: str = Field(..., min_length=1, description="Free-text description")
    sign_type: str = Field(..., min_length=1, description="e.g., Warning, Regulatory, Guide")
    mutcd_name: str = Field(..., min_length=1, description="MUTCD designation name")
    mutcd_code: str = Field(..., min_length=1, description="MUTCD code, e.g., W1-1, R1-1")
    legend_color: str = Field(..., min_length=1)
    background_color: str = Field(..., min_length=1)
    sign_shape: str = Field(..., min_length=1)
    upload_date: str = Field(..., min_length=1, description="ISO timestamp set at submission")

    model_config = {"extra": "forbid"}


class SignRecord(BaseModel):
    """
    A catalog entry as stored in the `signs` table.

    Classification fields default to "" so partially populated rows
    coming back from the store still load.
    """

    id: str
    photo: str = ""
    sign_details: str = ""
    sign_type: str = ""
    mutcd_name: str = ""
    mutcd_code: str = ""
    legend_color: str = ""
    background_color: str = ""
    sign_shape: str = ""
    upload_date: datetime | None = None
    created_at: datetime | None = None

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    @field_validator("photo", *SEARCH_FIELDS, mode="before")
    @classmethod
    def null_to_empty(cls, value: Any) -> Any:
        """Store NULLs read as empty strings."""
        return "" if value is None else value


class SearchFilters(BaseModel):
    """
    Seven optional substring predicates, one per classification field.

    An empty value imposes no constraint.
    """

    sign_details: str = ""
    sign_type: str = ""
    mutcd_name: str = ""
    mutcd_code: str = ""
    legend_color: str = ""
    background_color: str = ""
    sign_shape: str = ""

    def active(self) -> dict[str, str]:
        """Return only the predicates that carry a value."""
        return {name: value for name, value in self.model_dump().items() if value}

    def is_empty(self) -> bool:
        return not self.active()


class SignList(BaseModel):
    """Search response: the filtered records plus "Showing X of Y" counts."""

    signs: list[SignRecord] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0)
    filtered_count: int = Field(default=0, ge=0)
    filters: dict[str, str] = Field(default_factory=dict)


class SignOptions(BaseModel):
    """Values for the shape and color dropdowns."""

    shapes: list[str] = Field(default_factory=lambda: list(SIGN_SHAPES))
    colors: list[str] = Field(default_factory=lambda: list(SIGN_COLORS))
    search_fields: list[str] = Field(default_factory=lambda: list(SEARCH_FIELDS))
