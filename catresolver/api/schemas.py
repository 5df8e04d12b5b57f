"""API schemas.

Pydantic models for request/response validation and serialization.
"""

from pydantic import BaseModel, Field

from catresolver.catalog.resolver import PlatformMode


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class CategoryResolveResponse(BaseModel):
    """Result of resolving a category path."""

    category_id: int | None = Field(default=None, description="Search category ID")
    found: bool = Field(..., description="Whether the path exists")
    mode: PlatformMode = Field(..., description="Resolution strategy used")


class CategorySchema(BaseModel):
    """Category node without its descendants."""

    id: int
    name: str | None = None
    url: str
    slug: str
    children_count: int = Field(default=0, ge=0)


class BrandSchema(BaseModel):
    """Catalog brand."""

    id: int
    name: str
    is_active: bool
    title: str | None = None


class PageTypeSchema(BaseModel):
    """Storefront page type for a backend label."""

    label: str
    page_type: str
