"""Helpers for translating between storefront and search backend terms."""

from enum import Enum
from typing import Callable
from urllib.parse import unquote

from catresolver.catalog.resolver import PlatformMode


class SearchCrossSellingTypes(str, Enum):
    """Cross-selling recommendation groups offered by the search backend."""

    WHO_BOUGHT_ALSO_BOUGHT = "whoboughtalsobought"
    SIMILARS = "similars"
    WHO_SAW_ALSO_SAW = "whosawalsosaw"
    WHO_SAW_ALSO_BOUGHT = "whosawalsobought"
    ACCESSORIES = "accessories"
    SUGGESTIONS = "suggestions"


PAGE_TYPE_MAPPING: dict[str, str] = {
    "Brand": "brand",
    "Department": "department",
    "Category": "category",
    "SubCategory": "subcategory",
    "NotFound": "search",
    "FullText": "search",
    "Search": "search",
}

# Characters the search backend cannot take raw in a query term
SEARCH_URI_ESCAPES: dict[str, str] = {
    "%": "@perc@",
    '"': "@quo@",
    "'": "@squo@",
    ".": "@dot@",
    "(": "@lpar@",
    ")": "@rpar@",
}


def translate_page_type(search_page_type: str) -> str:
    """Map a backend page-type label to the storefront page type."""
    return PAGE_TYPE_MAPPING.get(search_page_type, "search")


def zip_query_and_map(
    query: str | None, map_: str | None
) -> list[tuple[str, str]]:
    """Pair query segments with their map entries.

    >>> zip_query_and_map("Shoes/Nike%20Air", "c,b")
    [('shoes', 'c'), ('nike air', 'b')]

    Extra segments on either side are dropped.
    """
    segments = [unquote(part) for part in (query or "").lower().split("/")]
    return list(zip(segments, (map_ or "").split(",")))


def search_encode_uri(mode: PlatformMode) -> Callable[[str], str]:
    """Get an encoder for query terms sent to the search backend.

    Only the classification platform needs escaping; other platforms
    get the identity function.
    """
    if mode != PlatformMode.CLASSIFICATION:
        return lambda value: value

    def encode(value: str) -> str:
        return "".join(SEARCH_URI_ESCAPES.get(ch, ch) for ch in value)

    return encode
