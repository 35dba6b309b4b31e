"""Tests for pagination parsing and metadata."""

import pytest

from shopcatalog.api.pagination import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    PaginationParams,
    build_pagination,
    parse_pagination,
)


class TestParsePagination:
    def test_defaults_when_missing(self):
        params = parse_pagination(None, None)
        assert params == PaginationParams(page=1, limit=10)

    def test_valid_values(self):
        params = parse_pagination("3", "25")
        assert params.page == 3
        assert params.limit == 25
        assert params.offset == 50

    @pytest.mark.parametrize("raw", ["0", "-4", "abc", "", "1.5"])
    def test_bad_page_falls_back_to_one(self, raw):
        assert parse_pagination(raw, "10").page == 1

    @pytest.mark.parametrize("raw", ["0", "-1", "101", "x", "1000"])
    def test_bad_limit_falls_back_to_default(self, raw):
        assert parse_pagination("2", raw).limit == DEFAULT_LIMIT

    def test_limit_at_max_is_kept(self):
        assert parse_pagination("1", str(MAX_LIMIT)).limit == MAX_LIMIT

    @pytest.mark.parametrize("raw", ["1_0", "２", " 7 ", "0x10", "1e2"])
    def test_non_decimal_ascii_falls_back(self, raw):
        params = parse_pagination(raw, raw)
        assert params == PaginationParams(page=1, limit=DEFAULT_LIMIT)

    def test_signed_values(self):
        assert parse_pagination("+3", "+20") == PaginationParams(page=3, limit=20)

    def test_offset_beyond_bigint_falls_back(self):
        huge = str(2**63)
        assert parse_pagination(huge, "10").page == 1
        assert parse_pagination("99999999999999999999999999", "1").page == 1

    def test_never_raises_and_stays_in_bounds(self):
        samples = [None, "", "0", "1", "-1", "99", "100", "101", "NaN", " 7 "]
        for page in samples:
            for limit in samples:
                params = parse_pagination(page, limit)
                assert params.page >= 1
                assert 1 <= params.limit <= MAX_LIMIT

    def test_first_page_offset_is_zero(self):
        assert parse_pagination("1", "50").offset == 0


class TestBuildPagination:
    def test_middle_page(self):
        p = build_pagination(2, 10, 35)
        assert p.total_pages == 4
        assert p.total_items == 35
        assert p.has_next is True
        assert p.has_prev is True

    def test_last_page(self):
        p = build_pagination(4, 10, 35)
        assert p.has_next is False
        assert p.has_prev is True

    def test_exact_multiple(self):
        p = build_pagination(1, 5, 15)
        assert p.total_pages == 3

    def test_empty_result(self):
        p = build_pagination(1, 10, 0)
        assert p.total_pages == 0
        assert p.has_next is False
        assert p.has_prev is False

    def test_page_past_end(self):
        p = build_pagination(9, 10, 12)
        assert p.total_pages == 2
        assert p.has_next is False
        assert p.has_prev is True

    def test_camel_case_dump(self):
        dumped = build_pagination(1, 10, 11).model_dump(by_alias=True)
        assert dumped == {
            "page": 1,
            "limit": 10,
            "totalPages": 2,
            "totalItems": 11,
            "hasNext": True,
            "hasPrev": False,
        }
