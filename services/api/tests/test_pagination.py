"""Tests for the page/filter engine (pure, no I/O)."""

import pytest

from conftest import make_post
from storefront.errors import InvalidInputError
from storefront.schemas import Post
from storefront.services.pagination import newest_first, paginate


def _feed(count: int, content_type: str | None = "text") -> list:
    return newest_first(make_post(n, content_type) for n in range(1, count + 1))


@pytest.mark.parametrize("count, expected", [(0, 0), (1, 1), (5, 1), (6, 2), (12, 3)])
def test_total_pages(count: int, expected: int) -> None:
    page = paginate(_feed(count), page_size=5)
    assert page.total_pages == expected


def test_empty_input_gives_empty_page() -> None:
    page = paginate([], page_size=5)
    assert page.items == []
    assert page.total_pages == 0
    assert page.selected_page == 0


def test_pages_concatenate_to_filtered_input() -> None:
    feed = _feed(12)
    page_count = paginate(feed, page_size=5).total_pages
    collected = []
    for index in range(page_count):
        collected.extend(paginate(feed, page_index=index, page_size=5).items)
    assert [p.post_id for p in collected] == [p.post_id for p in feed]


def test_page_slice_keeps_caller_order() -> None:
    feed = _feed(12)
    page = paginate(feed, page_index=1, page_size=5)
    assert [p.post_id for p in page.items] == [f"post-{n}" for n in (7, 6, 5, 4, 3)]
    assert page.selected_page == 1


def test_out_of_range_page_is_empty_not_error() -> None:
    page = paginate(_feed(3), page_index=4, page_size=5)
    assert page.items == []
    assert page.total_pages == 1
    assert page.selected_page == 4


@pytest.mark.parametrize("tag", [None, "all"])
def test_no_filter_for_absent_or_all_tag(tag: str | None) -> None:
    feed = [make_post(1, "video"), make_post(2, None), make_post(3, "")]
    page = paginate(feed, tag, page_size=5)
    assert len(page.items) == 3


def test_filter_keeps_substring_matches_only() -> None:
    feed = [
        make_post(1, "video"),
        make_post(2, "videos/tutorial"),
        make_post(3, "image"),
        make_post(4, None),
        make_post(5, ""),
        make_post(6, "Video"),
    ]
    page = paginate(feed, "video", page_size=5)
    assert [p.post_id for p in page.items] == ["post-1", "post-2"]
    assert page.total_pages == 1


def test_filter_applies_before_slicing() -> None:
    feed = newest_first(
        [make_post(n, "image" if n % 2 else "video") for n in range(1, 13)]
    )
    page = paginate(feed, "video", page_index=1, page_size=5)
    assert [p.post_id for p in page.items] == ["post-2"]
    assert page.total_pages == 2


def test_rejects_non_positive_page_size() -> None:
    with pytest.raises(InvalidInputError):
        paginate(_feed(3), page_size=0)


def test_negative_page_is_empty_not_wrapped() -> None:
    page = paginate(_feed(7), page_index=-1, page_size=5)
    assert page.items == []
    assert page.total_pages == 2
    assert page.selected_page == -1


def test_newest_first_orders_descending() -> None:
    ordered = newest_first([make_post(2), make_post(9), make_post(5)])
    assert [p.post_id for p in ordered] == ["post-9", "post-5", "post-2"]


def test_naive_and_aware_timestamps_sort_together() -> None:
    legacy = Post.model_validate({"postId": "legacy", "createdDate": "2017-06-01T10:00:00"})
    posts = newest_first([legacy, make_post(1)])

    assert legacy.created_date.tzinfo is not None
    assert [p.post_id for p in posts] == ["post-1", "legacy"]
