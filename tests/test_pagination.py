from __future__ import annotations

import pytest

from linguastore.services.pagination import Page, QueryOptions, paginate


def test_query_options_offset_and_defaults() -> None:
    options = QueryOptions(page=3, per_page=25)

    assert options.offset == 50
    assert options.order == "asc"
    assert QueryOptions().per_page == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"page": 0},
        {"per_page": 0},
        {"order": "sideways"},
    ],
)
def test_query_options_rejects_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        QueryOptions(**kwargs)


def test_query_options_is_immutable() -> None:
    options = QueryOptions()
    with pytest.raises(AttributeError):
        options.page = 2  # type: ignore[misc]


def test_paginate_reports_length_aware_metadata() -> None:
    items = list(range(1, 151))

    first = paginate(items, QueryOptions(page=1, per_page=100))
    second = paginate(items, QueryOptions(page=2, per_page=100))

    assert first.total == 150
    assert first.last_page == 2
    assert (first.from_, first.to) == (1, 100)
    assert len(second.data) == 50
    assert (second.from_, second.to) == (101, 150)


def test_page_beyond_last_is_empty_with_null_bounds() -> None:
    page = paginate([1, 2, 3], QueryOptions(page=5, per_page=2))

    assert page.data == []
    assert page.total == 3
    assert page.last_page == 2
    assert page.from_ is None
    assert page.to is None


def test_empty_page_has_single_last_page() -> None:
    page: Page[int] = Page.empty(QueryOptions(per_page=100))

    assert page.total == 0
    assert page.last_page == 1
    assert page.current_page == 1
    assert page.from_ is None
