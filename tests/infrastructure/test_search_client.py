"""Tests for the search API client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from catresolver.infrastructure.search_client import (
    Brand,
    PageTypeResult,
    SearchAPIClient,
    SearchClientError,
)


def make_response(status_code: int, payload: object = None, text: str = "") -> MagicMock:
    """Build a fake httpx response."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.json.return_value = payload
    response.content = b"" if payload is None else b"{}"
    response.text = text
    return response


class TestSearchAPIClient:
    """Tests for SearchAPIClient."""

    @pytest.fixture
    def client(self) -> SearchAPIClient:
        """Create a test client."""
        return SearchAPIClient(base_url="http://search.test/", timeout=5.0)

    @pytest.fixture
    def http_client(self, client: SearchAPIClient):
        """Patch the underlying httpx client."""
        with patch.object(client, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_get_client.return_value = mock_http_client
            yield mock_http_client

    def test_client_initialization(self, client: SearchAPIClient) -> None:
        """Base URL is normalized and nothing is connected yet."""
        assert client.base_url == "http://search.test"
        assert client.timeout == 5.0
        assert client._client is None

    @pytest.mark.asyncio
    async def test_categories(self, client: SearchAPIClient, http_client: AsyncMock) -> None:
        """Category tree is fetched with the requested depth."""
        http_client.get.return_value = make_response(
            200,
            [
                {
                    "id": 1,
                    "name": "Shoes",
                    "url": "http://store.test/shoes",
                    "children": [
                        {"id": 2, "name": "Sneakers", "url": "http://store.test/shoes/sneakers", "children": []}
                    ],
                }
            ],
        )

        tree = await client.categories(3)

        http_client.get.assert_awaited_once_with("/api/catalog_system/pub/category/tree/3")
        assert [c.id for c in tree] == [1]
        assert tree[0].children[0].slug == "sneakers"

    @pytest.mark.asyncio
    async def test_categories_error_status(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """Non-200 tree responses raise."""
        http_client.get.return_value = make_response(503, text="unavailable")

        with pytest.raises(SearchClientError) as exc_info:
            await client.categories(3)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [[{"name": "Shoes", "url": "/shoes"}], [{"id": "x", "url": "/shoes"}], {"id": 1}],
    )
    async def test_categories_malformed_payload(
        self, client: SearchAPIClient, http_client: AsyncMock, payload: object
    ) -> None:
        """An unreadable tree raises a client error."""
        http_client.get.return_value = make_response(200, payload)

        with pytest.raises(SearchClientError) as exc_info:
            await client.categories(3)

        assert exc_info.value.path == "/api/catalog_system/pub/category/tree/3"

    @pytest.mark.asyncio
    async def test_transport_error(self, client: SearchAPIClient, http_client: AsyncMock) -> None:
        """Transport failures are wrapped."""
        http_client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(SearchClientError) as exc_info:
            await client.categories(3)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_page_type(self, client: SearchAPIClient, http_client: AsyncMock) -> None:
        """Page type response is parsed."""
        http_client.get.return_value = make_response(
            200, {"id": "42", "pageType": "Category", "name": "Sneakers", "url": "shoes/sneakers"}
        )

        result = await client.page_type("shoes/sneakers")

        http_client.get.assert_awaited_once_with(
            "/api/catalog_system/pub/portal/pagetype/shoes/sneakers"
        )
        assert result == PageTypeResult(
            id=42, page_type="Category", name="Sneakers", url="shoes/sneakers"
        )

    @pytest.mark.asyncio
    async def test_page_type_not_found(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """Page type NotFound has no ID."""
        http_client.get.return_value = make_response(200, {"id": None, "pageType": "NotFound"})

        result = await client.page_type("nothing")

        assert result is not None
        assert result.id is None
        assert result.page_type == "NotFound"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [make_response(404), make_response(200)])
    async def test_page_type_empty(
        self, client: SearchAPIClient, http_client: AsyncMock, response: MagicMock
    ) -> None:
        """404 and empty bodies mean no classification."""
        http_client.get.return_value = response
        assert await client.page_type("shoes") is None

    @pytest.mark.asyncio
    async def test_page_type_error_status(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """Server errors raise."""
        http_client.get.return_value = make_response(500, text="oops")

        with pytest.raises(SearchClientError):
            await client.page_type("shoes")

    @pytest.mark.asyncio
    async def test_page_type_not_json(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """A 200 body that is not JSON raises a client error."""
        response = make_response(200, text="<html>gateway</html>")
        response.content = b"<html>gateway</html>"
        response.json.side_effect = ValueError("Expecting value")
        http_client.get.return_value = response

        with pytest.raises(SearchClientError) as exc_info:
            await client.page_type("shoes")

        assert exc_info.value.status_code == 200
        assert exc_info.value.path == "/api/catalog_system/pub/portal/pagetype/shoes"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [[1, 2], {"id": "abc", "pageType": "Category"}, "Category"],
    )
    async def test_page_type_malformed_payload(
        self, client: SearchAPIClient, http_client: AsyncMock, payload: object
    ) -> None:
        """Payloads that do not describe a page type raise a client error."""
        http_client.get.return_value = make_response(200, payload)

        with pytest.raises(SearchClientError):
            await client.page_type("shoes")

    @pytest.mark.asyncio
    async def test_page_type_no_content(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """204 No Content means no classification."""
        http_client.get.return_value = make_response(204)
        assert await client.page_type("shoes") is None

    @pytest.mark.asyncio
    async def test_brands(self, client: SearchAPIClient, http_client: AsyncMock) -> None:
        """Brand list is parsed."""
        http_client.get.return_value = make_response(
            200,
            [{"id": 2000002, "name": "Orma Carbon", "isActive": True, "title": ""}],
        )

        brands = await client.brands()

        assert brands == [Brand(id=2000002, name="Orma Carbon", is_active=True, title="")]

    @pytest.mark.asyncio
    async def test_brands_malformed_payload(
        self, client: SearchAPIClient, http_client: AsyncMock
    ) -> None:
        """A brand without an ID raises a client error."""
        http_client.get.return_value = make_response(200, [{"name": "Orma Carbon"}])

        with pytest.raises(SearchClientError):
            await client.brands()

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """Closing releases the httpx client."""
        client = SearchAPIClient(base_url="http://search.test", request_id="req-1")
        http_client = await client._get_client()

        assert http_client.headers["X-Request-ID"] == "req-1"
        assert await client._get_client() is http_client

        await client.close()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        """Context manager closes the client on exit."""
        async with SearchAPIClient(base_url="http://search.test") as client:
            await client._get_client()
        assert client._client is None
