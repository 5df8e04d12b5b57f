"""Domain layer for the category resolver."""

from catresolver.domain.exceptions import CatalogError, InvalidCategoryPathError

__all__ = [
    "CatalogError",
    "InvalidCategoryPathError",
]
