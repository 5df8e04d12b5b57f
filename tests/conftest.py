"""Shared fixtures for catalog and API tests."""

from unittest.mock import AsyncMock

import pytest

from catresolver.catalog.tree import CategoryNode
from catresolver.infrastructure.search_client import Brand

STORE = "https://store.example"


def node(id: int, path: str, *children: CategoryNode, name: str | None = None) -> CategoryNode:
    """Build a category node under the test store URL."""
    return CategoryNode(id=id, url=f"{STORE}{path}", name=name, children=children)


@pytest.fixture
def category_tree() -> list[CategoryNode]:
    """Three-level category tree.

    shoes (1)
      sneakers (2)
        running (3)
      boots (4)
    home-garden (10)
      furniture (11)
      kitchen-dining (12)
    t-shirts (20)
    """
    return [
        node(
            1,
            "/shoes",
            node(2, "/shoes/sneakers", node(3, "/shoes/sneakers/running")),
            node(4, "/shoes/boots"),
            name="Shoes",
        ),
        node(
            10,
            "/home-garden",
            node(11, "/home-garden/furniture"),
            node(12, "/home-garden/kitchen-dining", name="Kitchen & Dining"),
            name="Home & Garden",
        ),
        node(20, "/t-shirts", name="T.Shirts"),
    ]


@pytest.fixture
def brands() -> list[Brand]:
    """Brands, including an inactive one."""
    return [
        Brand(id=2000001, name="Old Brand", is_active=False),
        Brand(id=2000002, name="Orma Carbon", is_active=True),
        Brand(id=2000003, name="Café & Co", is_active=True),
    ]


@pytest.fixture
def search_client(category_tree: list[CategoryNode], brands: list[Brand]) -> AsyncMock:
    """Search client mock serving the test tree and brands.

    page_type returns None unless a test sets it.
    """
    client = AsyncMock()
    client.categories.return_value = category_tree
    client.page_type.return_value = None
    client.brands.return_value = brands
    return client
