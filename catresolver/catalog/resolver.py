"""Category ID resolution.

Turns a department/category/subcategory path into the category ID the
search backend uses. Two strategies are available:

- classification: ask the backend to classify the slug path and trust
  its answer when it names a department, category or subcategory;
  otherwise fall back to the tree lookup;
- tree lookup: fetch the category tree and walk it level by level,
  matching names with every slug strategy.

A classification failure is recoverable (TryNext). A tree fetch
failure is not: SearchClientError propagates to the caller.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable

import structlog

from catresolver.catalog.slug import matches_slug, search_slugify
from catresolver.catalog.tree import CategoryNode, CategoryTree
from catresolver.infrastructure.search_client import SearchClient, SearchClientError

logger = structlog.get_logger()

TRUSTED_PAGE_TYPES = frozenset({"Department", "Category", "SubCategory"})

DIAGNOSTIC_EVENT = "pagetype-category-error"


class PlatformMode(str, Enum):
    """Storefront platform, which decides the resolution strategy."""

    CLASSIFICATION = "vtex"
    GENERIC = "gocommerce"


@dataclass(frozen=True)
class CategoryPathArgs:
    """Partial category path as typed by the user.

    Attributes:
        department: Top-level category name or slug.
        category: Second-level category name or slug.
        subcategory: Third-level category name or slug.
    """

    department: str | None = None
    category: str | None = None
    subcategory: str | None = None

    @property
    def segments(self) -> list[str]:
        """Get the present path segments in order."""
        return [s for s in (self.department, self.category, self.subcategory) if s]

    @property
    def is_empty(self) -> bool:
        """Check if no segment is present."""
        return not self.segments


# ============================================================================
# Classification Outcomes
# ============================================================================


@dataclass(frozen=True)
class Classified:
    """The backend classified the path with a trusted label."""

    category_id: int


@dataclass(frozen=True)
class TryNext:
    """The classification cannot be used; try the next strategy.

    Attributes:
        reason: "unclassified" or "untrusted".
        page_type: Label returned by the backend, if any.
    """

    reason: str
    page_type: str | None = None


ClassificationOutcome = Classified | TryNext

DiagnosticSink = Callable[[str, dict[str, Any]], None]


def log_diagnostic(event: str, fields: dict[str, Any]) -> None:
    """Default diagnostic sink: emit a structured log event."""
    logger.info(event, **fields)


def build_slug_path(args: CategoryPathArgs) -> str:
    """Join the present segments into a search-style slug path."""
    return "/".join(search_slugify(segment) for segment in args.segments)


# ============================================================================
# Resolver
# ============================================================================


class CategoryResolver:
    """Resolves category paths to search backend category IDs."""

    TREE_LOOKUP_LEVELS = 3

    def __init__(
        self,
        client: SearchClient,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            client: Search backend client.
            diagnostics: Sink for diagnostic events (defaults to logging).
        """
        self.client = client
        self.diagnostics = diagnostics or log_diagnostic

    async def resolve(
        self,
        args: CategoryPathArgs,
        mode: PlatformMode = PlatformMode.CLASSIFICATION,
    ) -> int | None:
        """Resolve a category path to a category ID.

        Args:
            args: Category path to resolve.
            mode: Platform mode selecting the strategy.

        Returns:
            Category ID, or None if the path does not exist.

        Raises:
            SearchClientError: If the category tree cannot be fetched.
        """
        if mode == PlatformMode.GENERIC:
            return await self.lookup_by_tree(args)

        if args.is_empty:
            return None

        outcome = await self.classify(args)
        if isinstance(outcome, Classified):
            logger.debug(
                "Category classified",
                category_id=outcome.category_id,
                segments=args.segments,
            )
            return outcome.category_id

        logger.debug(
            "Falling back to category tree lookup",
            reason=outcome.reason,
            page_type=outcome.page_type,
        )
        return await self.lookup_by_tree(args)

    async def classify(self, args: CategoryPathArgs) -> ClassificationOutcome:
        """Ask the backend to classify the slug path of the arguments.

        Never raises: backend errors and untrusted labels both become
        TryNext.

        Args:
            args: Category path with at least one segment.

        Returns:
            Classified with the ID, or TryNext.
        """
        path = build_slug_path(args)
        try:
            result = await self.client.page_type(path)
        except SearchClientError as e:
            logger.debug("Page type lookup failed", path=path, error=e.message)
            result = None

        if result is None or result.id is None:
            return TryNext(reason="unclassified")

        if result.page_type not in TRUSTED_PAGE_TYPES:
            self._emit(
                DIAGNOSTIC_EVENT,
                {
                    "component": self.__class__.__name__,
                    "category_args": asdict(args),
                    "path": path,
                    "page_type": result.page_type,
                },
            )
            return TryNext(reason="untrusted", page_type=result.page_type)

        return Classified(category_id=result.id)

    async def lookup_by_tree(self, args: CategoryPathArgs) -> int | None:
        """Resolve a path by walking the category tree level by level.

        Each requested level is matched only among the children of the
        node matched at the previous level.

        Args:
            args: Category path; the department is required.

        Returns:
            ID of the deepest requested node, or None.

        Raises:
            SearchClientError: If the category tree cannot be fetched.
        """
        if not args.department:
            return None

        departments = await self.client.categories(self.TREE_LOOKUP_LEVELS)

        found = self._match(departments, args.department)

        if args.category and found:
            found = self._match(found.children, args.category)

            if args.subcategory and found:
                found = self._match(found.children, args.subcategory)

        return found.id if found else None

    @staticmethod
    def _match(nodes: CategoryTree, raw: str) -> CategoryNode | None:
        """Get the first node whose URL ends with a slug of raw."""
        return next((node for node in nodes if matches_slug(node.url, raw)), None)

    def _emit(self, event: str, fields: dict[str, Any]) -> None:
        """Send a diagnostic event; sink failures never fail a resolution."""
        try:
            self.diagnostics(event, fields)
        except Exception as e:
            logger.warning("Diagnostic sink failed", diagnostic=event, error=str(e))
