"""Unit tests for Page."""

import pytest

from shared_kernel.pagination import Page


class TestPage:
    def test_empty_result_has_no_pages(self):
        page: Page[str] = Page(items=[], page_number=1, page_size=10)

        assert page.total_pages == 0
        assert page.has_next is False
        assert page.is_last is True

    def test_partial_last_page_counts(self):
        page = Page(items=["a"], page_number=3, page_size=10, total_elements=21)

        assert page.total_pages == 3
        assert page.is_last is True

    def test_has_next_before_last_page(self):
        page = Page(items=["a"] * 10, page_number=1, page_size=10, total_elements=11)

        assert page.has_next is True
        assert page.is_last is False

    @pytest.mark.parametrize(
        ("page_number", "offset"), [(1, 0), (2, 10), (5, 40)]
    )
    def test_offset_for(self, page_number, offset):
        assert Page.offset_for(page_number, 10) == offset

    @pytest.mark.parametrize("page_number", [0, -1])
    def test_offset_rejects_non_positive_pages(self, page_number):
        with pytest.raises(ValueError):
            Page.offset_for(page_number, 10)
