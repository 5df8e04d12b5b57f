"""Search backend HTTP client.

Fetches category trees, page-type classifications and brands from the
storefront search API.
"""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from catresolver.catalog.tree import CategoryNode
from catresolver.infrastructure.config import settings

logger = structlog.get_logger()


# ============================================================================
# Response Models
# ============================================================================


@dataclass(frozen=True)
class PageTypeResult:
    """Classification of a URL path by the search backend.

    Attributes:
        id: ID of the classified entity (None when nothing was found).
        page_type: Backend label, e.g. "Department", "Category", "FullText".
        name: Entity name, when classified.
        url: Canonical URL, when classified.
    """

    id: int | None
    page_type: str
    name: str | None = None
    url: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "PageTypeResult":
        """Create from search API response data."""
        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            page_type=data.get("pageType", ""),
            name=data.get("name"),
            url=data.get("url"),
        )


@dataclass(frozen=True)
class Brand:
    """Brand registered in the catalog."""

    id: int
    name: str
    is_active: bool
    title: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Brand":
        """Create from search API response data."""
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            is_active=data.get("isActive", False),
            title=data.get("title"),
        )


class SearchClientError(Exception):
    """Error from a search API call.

    Raised on transport failures, non-2xx status codes and unreadable
    bodies. The resolver treats it as fatal for tree fetches and as
    "unclassified" for page-type lookups.
    """

    def __init__(
        self, message: str, status_code: int | None = None, path: str | None = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.path = path
        super().__init__(message)


# ============================================================================
# Client Protocol
# ============================================================================


class SearchClient(Protocol):
    """Operations the catalog layer needs from the search backend."""

    async def categories(self, levels: int) -> list[CategoryNode]:
        """Fetch the category tree down to the given depth."""
        ...

    async def page_type(self, path: str) -> PageTypeResult | None:
        """Classify a slug path, or None when the backend has no answer."""
        ...

    async def brands(self) -> list[Brand]:
        """Fetch all brands."""
        ...


# ============================================================================
# HTTP Client
# ============================================================================


class SearchAPIClient:
    """HTTP client for the storefront search API.

    Provides methods for calling catalog endpoints with error
    handling and response normalization.
    """

    CATEGORY_TREE_PATH = "/api/catalog_system/pub/category/tree/{levels}"
    PAGE_TYPE_PATH = "/api/catalog_system/pub/portal/pagetype/{path}"
    BRAND_LIST_PATH = "/api/catalog_system/pub/brand/list"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize search client.

        Args:
            base_url: Search API base URL (defaults to settings).
            timeout: Request timeout in seconds (defaults to settings).
            request_id: Optional request ID for correlation.
        """
        self.base_url = (base_url or settings.search_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.search_api_timeout
        self.request_id = request_id
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.request_id:
                headers["X-Request-ID"] = self.request_id
            if settings.search_app_key and settings.search_app_token:
                headers["X-VTEX-API-AppKey"] = settings.search_app_key
                headers["X-VTEX-API-AppToken"] = settings.search_app_token
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SearchAPIClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    async def _get(self, path: str) -> httpx.Response:
        """Issue a GET request, wrapping transport failures.

        Raises:
            SearchClientError: If the request could not be sent.
        """
        try:
            client = await self._get_client()
            return await client.get(path)
        except httpx.RequestError as e:
            logger.error(
                "Search API request failed",
                path=path,
                error=str(e),
            )
            raise SearchClientError(f"Request failed: {str(e)}", path=path) from e

    async def categories(self, levels: int) -> list[CategoryNode]:
        """Fetch the category tree.

        Args:
            levels: Number of tree levels to fetch.

        Returns:
            Root categories with nested children.

        Raises:
            SearchClientError: On API error or an unreadable tree.
        """
        path = self.CATEGORY_TREE_PATH.format(levels=levels)
        response = await self._get(path)

        if not response.is_success:
            raise SearchClientError(
                f"Failed to fetch category tree: {response.text}",
                response.status_code,
                path,
            )

        try:
            return [CategoryNode.from_api_response(c) for c in response.json() or []]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise SearchClientError(
                f"Invalid category tree response: {str(e)}",
                response.status_code,
                path,
            ) from e

    async def page_type(self, path: str) -> PageTypeResult | None:
        """Classify a slug path.

        Args:
            path: Slash-joined slug path, e.g. "shoes/sneakers".

        Returns:
            Classification, or None if the backend returned nothing.

        Raises:
            SearchClientError: On API error (except 404) or an unreadable body.
        """
        request_path = self.PAGE_TYPE_PATH.format(path=path)
        response = await self._get(request_path)

        if response.status_code == 404:
            return None

        if not response.is_success:
            raise SearchClientError(
                f"Failed to classify path: {response.text}",
                response.status_code,
                request_path,
            )

        if not response.content:
            return None
        try:
            data = response.json()
            if not data:
                return None
            return PageTypeResult.from_api_response(data)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise SearchClientError(
                f"Invalid page type response: {str(e)}",
                response.status_code,
                request_path,
            ) from e

    async def brands(self) -> list[Brand]:
        """Fetch all brands.

        Returns:
            Brands in backend order.

        Raises:
            SearchClientError: On API error.
        """
        response = await self._get(self.BRAND_LIST_PATH)

        if not response.is_success:
            raise SearchClientError(
                f"Failed to list brands: {response.text}",
                response.status_code,
                self.BRAND_LIST_PATH,
            )

        try:
            return [Brand.from_api_response(b) for b in response.json() or []]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise SearchClientError(
                f"Invalid brand list response: {str(e)}",
                response.status_code,
                self.BRAND_LIST_PATH,
            ) from e


def get_search_client(request_id: str | None = None) -> SearchAPIClient:
    """Get a search client configured from settings.

    Args:
        request_id: Request ID for correlation.

    Returns:
        SearchAPIClient instance.
    """
    return SearchAPIClient(request_id=request_id)
