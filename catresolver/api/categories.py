"""Category, brand and page-type API endpoints.

Provides endpoints for resolving category paths and looking up
catalog entities by ID or slug.
"""

from typing import Annotated, AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from catresolver.api.schemas import (
    BrandSchema,
    CategoryResolveResponse,
    CategorySchema,
    ErrorResponse,
    PageTypeSchema,
)
from catresolver.catalog.resolver import CategoryPathArgs, PlatformMode
from catresolver.catalog.search_utils import translate_page_type
from catresolver.catalog.service import CatalogService
from catresolver.catalog.tree import CategoryNode
from catresolver.infrastructure.config import settings
from catresolver.infrastructure.search_client import get_search_client

router = APIRouter(prefix="/categories", tags=["Categories"])
brands_router = APIRouter(prefix="/brands", tags=["Brands"])
page_types_router = APIRouter(prefix="/page-types", tags=["Page Types"])


# ============================================================================
# Dependencies
# ============================================================================


async def get_service(request: Request) -> AsyncIterator[CatalogService]:
    """Get catalog service with a request-scoped search client."""
    request_id = getattr(request.state, "request_id", None)
    async with get_search_client(request_id=request_id) as client:
        yield CatalogService(client)


# ============================================================================
# Converters
# ============================================================================


def category_to_response(node: CategoryNode) -> CategorySchema:
    """Convert CategoryNode to response schema."""
    return CategorySchema(
        id=node.id,
        name=node.name,
        url=node.url,
        slug=node.slug,
        children_count=len(node.children),
    )


def _category_not_found(reference: object) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error_code": "CATEGORY_NOT_FOUND",
            "message": f"Category not found: {reference}",
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/resolve",
    response_model=CategoryResolveResponse,
    status_code=status.HTTP_200_OK,
    responses={502: {"model": ErrorResponse}},
    summary="Resolve category path",
    description="Resolve a department/category/subcategory path to a category ID.",
)
async def resolve_category(
    service: Annotated[CatalogService, Depends(get_service)],
    department: str | None = Query(default=None),
    category: str | None = Query(default=None),
    subcategory: str | None = Query(default=None),
    mode: PlatformMode | None = Query(default=None),
) -> CategoryResolveResponse:
    """Resolve a category path.

    A path that does not exist is not an error: the response has
    found=false and no category_id.
    """
    resolved_mode = mode or PlatformMode(settings.platform_mode)
    args = CategoryPathArgs(
        department=department, category=category, subcategory=subcategory
    )
    category_id = await service.resolve_category(args, resolved_mode)
    return CategoryResolveResponse(
        category_id=category_id,
        found=category_id is not None,
        mode=resolved_mode,
    )


@router.get(
    "/search",
    response_model=CategorySchema,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Find category by slug path",
)
async def search_category(
    service: Annotated[CatalogService, Depends(get_service)],
    path: str = Query(..., description="Slug path, e.g. shoes/sneakers"),
    levels: int = Query(default=settings.category_tree_levels, ge=1, le=10),
) -> CategorySchema:
    """Find a category whose URL slugs match the path level by level."""
    slug_path = [segment for segment in path.split("/") if segment]
    node = await service.find_category(slug_path, levels)
    if node is None:
        raise _category_not_found(path)
    return category_to_response(node)


@router.get(
    "/{category_id}",
    response_model=CategorySchema,
    status_code=status.HTTP_200_OK,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: int,
    service: Annotated[CatalogService, Depends(get_service)],
    levels: int = Query(default=settings.category_tree_levels, ge=1, le=10),
) -> CategorySchema:
    """Get a category from the tree by ID."""
    node = await service.get_category_info(category_id, levels)
    if node is None:
        raise _category_not_found(category_id)
    return category_to_response(node)


@brands_router.get(
    "/{brand_slug}",
    response_model=BrandSchema,
    status_code=status.HTTP_200_OK,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get brand by slug",
)
async def get_brand(
    brand_slug: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> BrandSchema:
    """Get the active brand whose name slugifies to brand_slug."""
    brand = await service.get_brand_from_slug(brand_slug.lower())
    if brand is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "BRAND_NOT_FOUND",
                "message": f"Brand not found: {brand_slug}",
            },
        )
    return BrandSchema(
        id=brand.id,
        name=brand.name,
        is_active=brand.is_active,
        title=brand.title,
    )


@page_types_router.get(
    "/{label}",
    response_model=PageTypeSchema,
    status_code=status.HTTP_200_OK,
    summary="Translate page type",
)
async def get_page_type(label: str) -> PageTypeSchema:
    """Translate a search backend page-type label."""
    return PageTypeSchema(label=label, page_type=translate_page_type(label))
