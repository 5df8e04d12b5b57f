"""Category catalog: tree model, slug matching and resolution.

Only dependency-free modules are re-exported here; import the resolver
and service from their own modules.
"""

from catresolver.catalog.slug import SLUG_STRATEGIES, matches_slug, search_slugify, slugify
from catresolver.catalog.tree import CategoryNode, build_index, find_in_tree

__all__ = [
    # Slugs
    "SLUG_STRATEGIES",
    "matches_slug",
    "search_slugify",
    "slugify",
    # Tree
    "CategoryNode",
    "build_index",
    "find_in_tree",
]
