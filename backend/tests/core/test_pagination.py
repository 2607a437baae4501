"""Pagination — 1-based page numbers, offsets and page totals."""

import pytest

from scheduler.core.pagination import Page, PageRequest


def test_first_page_has_zero_offset():
    req = PageRequest(page=1, size=10)
    assert req.index == 0
    assert req.offset == 0


def test_second_page_offset_is_one_page_size():
    assert PageRequest(page=2, size=10).offset == 10
    assert PageRequest(page=3, size=7).offset == 14


@pytest.mark.parametrize("page,size", [(0, 10), (-1, 10), (1, 0)])
def test_rejects_non_positive_values(page, size):
    with pytest.raises(ValueError):
        PageRequest(page=page, size=size)


def test_total_pages_rounds_up():
    assert Page(items=[], page=1, size=10, total_items=15).total_pages == 2
    assert Page(items=[], page=1, size=10, total_items=20).total_pages == 2


def test_empty_result_has_no_pages():
    page = Page(items=[], page=1, size=10, total_items=0)
    assert page.total_pages == 0
    assert not page.has_next


def test_has_next_only_before_last_page():
    assert Page(page=1, size=10, total_items=15).has_next
    assert not Page(page=2, size=10, total_items=15).has_next
