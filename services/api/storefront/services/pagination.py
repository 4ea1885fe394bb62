"""Filter + slice an already-ordered feed into a Page.

Rules:
1. filter_tag None or "all" -> no filtering
2. Otherwise keep items whose content_type is non-empty and contains
   filter_tag (case-sensitive substring)
3. total_pages = ceil(filtered / page_size)
4. selected_page defaults to 0; out-of-range (including negative) pages are empty, not an error

Callers order the input (newest first); this module never re-sorts it.
"""

from collections.abc import Iterable, Sequence
import math
from typing import Protocol, TypeVar

from storefront.errors import InvalidInputError
from storefront.schemas import Page, Post

ALL_TAG = "all"


class Tagged(Protocol):
    content_type: str | None


ItemT = TypeVar("ItemT")


def matches_tag(item: Tagged, filter_tag: str | None) -> bool:
    if filter_tag is None or filter_tag == ALL_TAG:
        return True
    return bool(item.content_type) and filter_tag in item.content_type


def paginate(
    items: Sequence[ItemT],
    filter_tag: str | None = None,
    page_index: int | None = None,
    *,
    page_size: int,
) -> Page:
    """Build one page of `items`.

    Args:
        items: Items in display order.
        filter_tag: Content-type substring to keep, or None/"all".
        page_index: 0-based page, defaults to 0.
        page_size: Items per page (positive).

    Returns:
        Page with the slice, total page count and selected page.
    """
    if page_size < 1:
        raise InvalidInputError(f"page_size must be positive, got {page_size}")
    selected = page_index if page_index is not None else 0
    filtered = [item for item in items if matches_tag(item, filter_tag)]
    total_pages = math.ceil(len(filtered) / page_size)
    if selected < 0:
        # Negative slice starts would wrap around to the tail.
        return Page(items=[], total_pages=total_pages, selected_page=selected)

    start = selected * page_size
    return Page(
        items=filtered[start : start + page_size],
        total_pages=total_pages,
        selected_page=selected,
    )


def newest_first(posts: Iterable[Post]) -> list[Post]:
    """Order posts by created_date descending (stable for equal timestamps)."""
    return sorted(posts, key=lambda p: p.created_date, reverse=True)
