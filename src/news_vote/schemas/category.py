"""Category schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from news_vote.core.constants import CATEGORY_NAME_MAX_LENGTH

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class _CategoryFields(BaseModel):
    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Trim and reject blank names."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Category name must not be blank")
        return v

    @field_validator("slug", check_fields=False)
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        """Slugs are lowercase words joined by single hyphens."""
        if v is None:
            return v
        v = v.strip()
        if not SLUG_PATTERN.match(v):
            raise ValueError("Slug must be lowercase letters, digits and hyphens")
        return v

    @field_validator("color", check_fields=False)
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        """Validate color is a hex color code."""
        if v is None:
            return v
        if not COLOR_PATTERN.match(v):
            raise ValueError("Color must be a valid hex color code (e.g., #004225)")
        return v


class CategoryCreate(_CategoryFields):
    """Schema for creating a category."""

    name: str = Field(..., max_length=CATEGORY_NAME_MAX_LENGTH)
    slug: str = Field(..., max_length=50)
    color: str = "#004225"
    icon: str | None = None


class CategoryUpdate(_CategoryFields):
    """Partial category update."""

    name: str | None = Field(None, max_length=CATEGORY_NAME_MAX_LENGTH)
    slug: str | None = Field(None, max_length=50)
    color: str | None = None
    icon: str | None = None
    is_active: bool | None = None


class CategoryResponse(BaseModel):
    """Category as returned by the API."""

    id: str
    name: str
    slug: str
    color: str
    icon: str | None
    order_index: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
