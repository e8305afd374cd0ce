"""
Unit tests for query-string parsing (compass.services.filters).

Tests cover:
- Comma-separated lists: trimming, empty segments, duplicates
- Enum filters: case-insensitivity, unknown values dropped
- Numeric and boolean filters: malformed values dropped
- Pagination defaults and clamping
- Sort key whitelist and sort order
- Export id lists
"""

import uuid

from compass.core.config import settings
from compass.models.investor import EngagementStatus, InvestorStage, InvestorType
from compass.services.filters import (
    parse_id_list,
    parse_investor_query,
    split_csv_param,
)


class TestSplitCsvParam:
    def test_trims_and_drops_empty_segments(self):
        assert split_csv_param(" Europe , ,Asia,, ") == ["Europe", "Asia"]

    def test_removes_duplicates_keeping_order(self):
        assert split_csv_param("Asia,Europe,Asia") == ["Asia", "Europe"]

    def test_none_and_blank(self):
        assert split_csv_param(None) == []
        assert split_csv_param("") == []
        assert split_csv_param(" , ") == []


class TestListFilters:
    """Filters parsed from the list query string."""

    def test_empty_params_yield_no_filters(self):
        query = parse_investor_query({})
        f = query.filters
        assert f.search is None
        assert f.type == [] and f.engagement_status == []
        assert f.regions == [] and f.sectors == [] and f.stage_focus == [] and f.tags == []
        assert f.investment_size_min is None and f.investment_size_max is None
        assert f.is_active is None

    def test_type_is_case_insensitive_and_unknown_values_dropped(self):
        query = parse_investor_query({"type": "EQUITY,loan, Debt"})
        assert query.filters.type == [InvestorType.EQUITY, InvestorType.DEBT]

    def test_engagement_status_list(self):
        query = parse_investor_query({"engagement_status": "in_discussion,term_sheet,bogus"})
        assert query.filters.engagement_status == [
            EngagementStatus.IN_DISCUSSION,
            EngagementStatus.TERM_SHEET,
        ]

    def test_array_filters(self):
        query = parse_investor_query(
            {"regions": "Europe,Asia", "sectors": "SaaS", "stage_focus": "seed", "tags": "esg"}
        )
        assert query.filters.regions == ["Europe", "Asia"]
        assert query.filters.sectors == ["SaaS"]
        assert query.filters.stage_focus == [InvestorStage.SEED]
        assert query.filters.tags == ["esg"]

    def test_stage_focus_is_case_insensitive_and_unknown_values_dropped(self):
        query = parse_investor_query({"stage_focus": "SEED,banana, Growth,seed"})
        assert query.filters.stage_focus == [InvestorStage.SEED, InvestorStage.GROWTH]

    def test_search_is_stripped(self):
        assert parse_investor_query({"search": "  acme "}).filters.search == "acme"
        assert parse_investor_query({"search": "   "}).filters.search is None

    def test_investment_sizes(self):
        query = parse_investor_query(
            {"investment_size_min": "100000", "investment_size_max": "2000000"}
        )
        assert query.filters.investment_size_min == 100000
        assert query.filters.investment_size_max == 2000000

    def test_malformed_numbers_are_dropped(self):
        query = parse_investor_query({"investment_size_min": "lots", "investment_size_max": "1e6"})
        assert query.filters.investment_size_min is None
        assert query.filters.investment_size_max is None

    def test_is_active(self):
        assert parse_investor_query({"is_active": "TRUE"}).filters.is_active is True
        assert parse_investor_query({"is_active": "false"}).filters.is_active is False
        assert parse_investor_query({"is_active": "yes"}).filters.is_active is None


class TestPagination:
    def test_defaults(self):
        query = parse_investor_query({})
        assert query.page == 1
        assert query.limit == settings.DEFAULT_PAGE_SIZE
        assert query.offset == 0

    def test_explicit_page_and_limit(self):
        query = parse_investor_query({"page": "3", "limit": "10"})
        assert query.page == 3
        assert query.limit == 10
        assert query.offset == 20

    def test_limit_is_clamped(self):
        assert parse_investor_query({"limit": "0"}).limit == 1
        assert parse_investor_query({"limit": "5000"}).limit == settings.MAX_PAGE_SIZE

    def test_bad_page_falls_back_to_first(self):
        assert parse_investor_query({"page": "0"}).page == 1
        assert parse_investor_query({"page": "abc"}).page == 1
        assert parse_investor_query({"limit": "abc"}).limit == settings.DEFAULT_PAGE_SIZE


class TestSorting:
    def test_default_sort(self):
        query = parse_investor_query({})
        assert query.sort_by == "created_at"
        assert query.sort_order == "desc"

    def test_whitelisted_sort_key(self):
        query = parse_investor_query({"sortBy": "name", "sortOrder": "asc"})
        assert query.sort_by == "name"
        assert query.sort_order == "asc"

    def test_unknown_sort_key_falls_back(self):
        assert parse_investor_query({"sortBy": "metadata"}).sort_by == "created_at"

    def test_anything_but_asc_is_desc(self):
        assert parse_investor_query({"sortOrder": "ASC"}).sort_order == "asc"
        assert parse_investor_query({"sortOrder": "up"}).sort_order == "desc"


class TestParseIdList:
    def test_absent_means_all(self):
        assert parse_id_list(None) is None
        assert parse_id_list("") is None

    def test_valid_ids(self):
        a, b = uuid.uuid4(), uuid.uuid4()
        assert parse_id_list(f"{a}, {b}") == [a, b]

    def test_invalid_ids_dropped(self):
        a = uuid.uuid4()
        assert parse_id_list(f"{a},not-a-uuid") == [a]

    def test_no_valid_ids_is_empty_list(self):
        assert parse_id_list("x,y") == []
