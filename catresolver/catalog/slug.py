"""Slug normalization for category and brand names.

The search backend and the storefront slugify names in two different
ways, and the two can disagree on punctuation and accents:

    search_slugify("Home & Garden")  -> "home---garden"
    slugify("Home & Garden")         -> "home-garden"

Matching code therefore tries every strategy in SLUG_STRATEGIES and
accepts the first one that hits.
"""

import re
import unicodedata
from typing import Callable, Sequence

SlugStrategy = Callable[[str], str]

# Characters the search backend replaces with a dash
_SEARCH_SPECIAL_CHARS_RE = re.compile(r"[*+~.()'\"!:@&\[\]`,/ %$#?{}|><=_^]")

# Separators the generic slug turns into a dash
_GENERIC_SEPARATORS_RE = re.compile(r"[·/_,:;]")
_GENERIC_INVALID_CHARS_RE = re.compile(r"[^a-z0-9 -]")
_WHITESPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")

# Letters NFD does not decompose into base + combining mark
_EXTRA_FOLDS = str.maketrans(
    {
        "Ø": "O",
        "ø": "o",
        "Đ": "D",
        "đ": "d",
        "ð": "d",
        "Þ": "B",
        "þ": "b",
        "Æ": "A",
        "æ": "a",
    }
)


def remove_diacritics(value: str) -> str:
    """Strip accents, keeping the base letters."""
    decomposed = unicodedata.normalize("NFD", value.translate(_EXTRA_FOLDS))
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def search_slugify(value: str) -> str:
    """Slugify the way the search backend builds category URLs.

    Every special character becomes its own dash, so runs of
    punctuation produce runs of dashes.
    """
    replaced = _SEARCH_SPECIAL_CHARS_RE.sub("-", value)
    return remove_diacritics(replaced).lower()


def slugify(value: str) -> str:
    """Slugify the way the storefront builds catalog URLs."""
    slug = remove_diacritics(value.strip().lower())
    slug = _GENERIC_SEPARATORS_RE.sub("-", slug)
    slug = _GENERIC_INVALID_CHARS_RE.sub("", slug)
    slug = _WHITESPACE_RE.sub("-", slug)
    return _DASHES_RE.sub("-", slug)


SLUG_STRATEGIES: tuple[SlugStrategy, ...] = (search_slugify, slugify)


def matches_slug(
    url: str,
    raw: str | None,
    strategies: Sequence[SlugStrategy] = SLUG_STRATEGIES,
) -> bool:
    """Check whether a category URL ends with the slug of a raw name.

    Args:
        url: Category URL or path, e.g. "/home-garden/furniture".
        raw: Display name or slug typed by the user.
        strategies: Slug functions tried in order.

    Returns:
        True if any strategy's slug is the URL's final segment.
    """
    if not raw:
        return False

    url_lower = url.lower()
    for strategy in strategies:
        slug = strategy(raw).lower()
        if slug and url_lower.endswith(f"/{slug}"):
            return True
    return False


def matches_name(
    name: str,
    slug: str,
    strategies: Sequence[SlugStrategy] = SLUG_STRATEGIES,
) -> bool:
    """Check whether any strategy turns a display name into the given slug."""
    if not slug:
        return False
    return any(strategy(name).lower() == slug for strategy in strategies)
