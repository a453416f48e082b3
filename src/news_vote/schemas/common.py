"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata returned by list endpoints."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> Pagination:
        """Return pagination metadata for ``total`` items split into pages of ``limit``."""
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class ErrorResponse(BaseModel):
    """Envelope used for every error response."""

    detail: Any = Field(..., description="Developer-facing detail")
    code: str = Field(..., description="Stable error category")
    message: str = Field(..., description="Localized user-facing message")
