"""Domain exceptions.

Errors raised by the catalog layer. A category that cannot be found is
not an error: lookups return None. Exceptions are reserved for invalid
input and for an unavailable search backend.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors should inherit from this class to allow
    catching them at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCategoryPathError(CatalogError):
    """Raised when a slug path cannot be searched."""

    def __init__(self, slug_path: list[str], reason: str) -> None:
        """Initialize invalid category path error.

        Args:
            slug_path: The offending slug path.
            reason: Explanation of why the path is invalid.
        """
        super().__init__(
            f"Invalid category path {slug_path!r}: {reason}",
            details={"slug_path": list(slug_path), "reason": reason},
        )
