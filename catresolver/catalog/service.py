"""Catalog service for category and brand operations.

High-level service that combines search backend calls with tree
matching for the API layer.
"""

import structlog

from catresolver.catalog.resolver import (
    CategoryPathArgs,
    CategoryResolver,
    DiagnosticSink,
    PlatformMode,
)
from catresolver.catalog.slug import matches_name
from catresolver.catalog.tree import CategoryNode, build_index, find_in_tree
from catresolver.domain.exceptions import InvalidCategoryPathError
from catresolver.infrastructure.search_client import Brand, SearchClient

logger = structlog.get_logger()


class CatalogService:
    """Service for resolving categories and brands.

    Example usage:
        async with SearchAPIClient() as client:
            service = CatalogService(client)
            category_id = await service.resolve_category(
                CategoryPathArgs(department="shoes", category="sneakers")
            )
    """

    def __init__(
        self,
        client: SearchClient,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """Initialize service.

        Args:
            client: Search backend client.
            diagnostics: Sink for resolver diagnostic events.
        """
        self.client = client
        self.resolver = CategoryResolver(client, diagnostics=diagnostics)

    async def resolve_category(
        self,
        args: CategoryPathArgs,
        mode: PlatformMode = PlatformMode.CLASSIFICATION,
    ) -> int | None:
        """Resolve a category path to a category ID.

        Args:
            args: Category path.
            mode: Platform mode.

        Returns:
            Category ID, or None if not found.
        """
        category_id = await self.resolver.resolve(args, mode)
        logger.info(
            "Category resolved",
            segments=args.segments,
            mode=mode.value,
            category_id=category_id,
        )
        return category_id

    async def find_category(
        self, slug_path: list[str], levels: int
    ) -> CategoryNode | None:
        """Find a category by its exact slug path.

        Args:
            slug_path: One slug per tree level, e.g. ["shoes", "sneakers"].
            levels: Tree depth to fetch.

        Returns:
            Category node, or None if the path is not in the tree.

        Raises:
            InvalidCategoryPathError: If slug_path is empty.
        """
        if not slug_path:
            raise InvalidCategoryPathError(slug_path, "path is empty")
        tree = await self.client.categories(levels)
        return find_in_tree(tree, slug_path)

    async def get_category_info(
        self, category_id: int, levels: int
    ) -> CategoryNode | None:
        """Get a category node by ID.

        The backend's single-category endpoint omits the URL, so the
        node is taken from the tree instead.

        Args:
            category_id: Category ID.
            levels: Tree depth to fetch.

        Returns:
            Category node, or None if the ID is not in the fetched tree.
        """
        tree = await self.client.categories(levels)
        return build_index(tree).get(category_id)

    async def get_brand_from_slug(self, brand_slug: str) -> Brand | None:
        """Find the active brand whose name slugifies to brand_slug.

        Args:
            brand_slug: Lowercase brand slug from a URL.

        Returns:
            Matching brand, or None.
        """
        brands = await self.client.brands()
        return next(
            (
                brand
                for brand in brands
                if brand.is_active and matches_name(brand.name, brand_slug)
            ),
            None,
        )
