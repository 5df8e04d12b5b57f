"""Category tree model and traversal.

The search backend returns the category tree as nested JSON:

    [{"id": 1, "name": "Shoes", "url": "https://store.com/shoes",
      "children": [{"id": 2, "name": "Sneakers",
                    "url": "https://store.com/shoes/sneakers",
                    "children": []}]}]

Trees are fetched fresh for each resolution and never mutated.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

from catresolver.domain.exceptions import InvalidCategoryPathError


@dataclass(frozen=True)
class CategoryNode:
    """A node of the merchant's category tree.

    Attributes:
        id: Category ID, unique within a tree snapshot.
        url: Canonical category URL; its last segment is the slug.
        name: Display name, when the backend sends one.
        children: Child categories in backend order.
    """

    id: int
    url: str
    name: str | None = None
    children: tuple["CategoryNode", ...] = field(default=(), repr=False)

    @property
    def slug(self) -> str:
        """Get the final "/"-delimited segment of the URL."""
        return self.url.rsplit("/", 1)[-1]

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "CategoryNode":
        """Create a subtree from search API response data.

        Args:
            data: Category object with nested children.

        Returns:
            CategoryNode with all descendants.
        """
        return cls(
            id=int(data["id"]),
            url=data.get("url") or "",
            name=data.get("name"),
            children=tuple(
                cls.from_api_response(child) for child in data.get("children") or []
            ),
        )


CategoryTree = Sequence[CategoryNode]
CategoryIdentifierMap = dict[int, CategoryNode]


def build_index(tree: CategoryTree) -> CategoryIdentifierMap:
    """Flatten a tree into a map of category ID to node.

    Nodes are visited depth-first in pre-order. When two nodes share an
    ID, the one visited later wins.

    Args:
        tree: Root categories.

    Returns:
        Map from category ID to node.
    """
    index: CategoryIdentifierMap = {}
    stack = list(reversed(tree))
    while stack:
        node = stack.pop()
        index[node.id] = node
        stack.extend(reversed(node.children))
    return index


def find_in_tree(
    tree: CategoryTree,
    slug_path: Sequence[str],
    level_index: int = 0,
) -> CategoryNode | None:
    """Find the node reached by following a slug path down the tree.

    At each level the first sibling whose slug matches (case-insensitive)
    is taken. If the path cannot be continued below it, the search fails
    without trying later siblings.

    Args:
        tree: Nodes at the level where the search starts.
        slug_path: One slug per tree level.
        level_index: Index in slug_path matching the first level of tree.

    Returns:
        The matched node, or None if the path is not in the tree.

    Raises:
        InvalidCategoryPathError: If slug_path is empty or level_index is
            out of range.
    """
    if not slug_path:
        raise InvalidCategoryPathError(list(slug_path), "path is empty")
    if not 0 <= level_index < len(slug_path):
        raise InvalidCategoryPathError(
            list(slug_path), f"level index {level_index} out of range"
        )

    level: CategoryTree = tree
    for index in range(level_index, len(slug_path)):
        wanted = slug_path[index].upper()
        match = next((node for node in level if node.slug.upper() == wanted), None)
        if match is None:
            return None
        if index == len(slug_path) - 1:
            return match
        level = match.children
    return None
