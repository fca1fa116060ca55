"""Unit tests for pagination helpers."""

from __future__ import annotations

from skillswap.pagination import MonitorPageParams, PageParams, build_page, total_pages


class TestTotalPages:
    def test_exact_fit(self):
        assert total_pages(20, 10) == 2

    def test_partial_last_page(self):
        assert total_pages(21, 10) == 3

    def test_empty(self):
        assert total_pages(0, 10) == 0


class TestPageParams:
    def test_defaults(self):
        params = PageParams(page=1, limit=None)
        assert params.limit == 10
        assert params.offset == 0

    def test_limit_capped(self):
        assert PageParams(page=1, limit=500).limit == 100

    def test_offset(self):
        assert PageParams(page=3, limit=5).offset == 10

    def test_monitor_default(self):
        assert MonitorPageParams(page=1, limit=None).limit == 20
        assert MonitorPageParams(page=1, limit=7).limit == 7


class TestBuildPage:
    def test_envelope_is_camel_case(self):
        page = build_page([1, 2], total=12, page=2, limit=2, convert=lambda n: n * 10)
        assert page.model_dump(by_alias=True) == {
            "items": [10, 20],
            "totalPages": 6,
            "currentPage": 2,
            "total": 12,
        }
