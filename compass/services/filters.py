"""
Investor list query parsing.

Turns the flat query-string mapping of ``GET /investors`` into a typed
:class:`InvestorListQuery`.  Parsing is lenient: malformed numbers,
unknown enum values and unknown sort keys are dropped or replaced by
defaults instead of failing the request.
"""

import logging
from enum import Enum
from typing import List, Mapping, Optional, Type, TypeVar
from uuid import UUID

from compass.core.config import settings
from compass.models.investor import EngagementStatus, InvestorStage, InvestorType
from compass.schemas.filters import (
    DEFAULT_SORT_FIELD,
    SORTABLE_FIELDS,
    InvestorFilters,
    InvestorListQuery,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def split_csv_param(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated parameter.

    Segments are trimmed, empty segments dropped and duplicates removed
    while keeping first-seen order.
    """
    if not value:
        return []
    seen: List[str] = []
    for part in value.split(","):
        part = part.strip()
        if part and part not in seen:
            seen.append(part)
    return seen


def _parse_enum_list(value: Optional[str], enum_cls: Type[E]) -> List[E]:
    parsed: List[E] = []
    for raw in split_csv_param(value):
        try:
            member = enum_cls(raw.lower())
        except ValueError:
            logger.debug("Ignoring unknown %s filter value %r", enum_cls.__name__, raw)
            continue
        if member not in parsed:
            parsed.append(member)
    return parsed


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_investor_query(params: Mapping[str, str]) -> InvestorListQuery:
    """Build the typed list query from raw query parameters."""
    search = (params.get("search") or "").strip() or None

    filters = InvestorFilters(
        search=search,
        type=_parse_enum_list(params.get("type"), InvestorType),
        engagement_status=_parse_enum_list(params.get("engagement_status"), EngagementStatus),
        regions=split_csv_param(params.get("regions")),
        sectors=split_csv_param(params.get("sectors")),
        stage_focus=_parse_enum_list(params.get("stage_focus"), InvestorStage),
        tags=split_csv_param(params.get("tags")),
        investment_size_min=parse_int(params.get("investment_size_min")),
        investment_size_max=parse_int(params.get("investment_size_max")),
        is_active=_parse_bool(params.get("is_active")),
    )

    page = parse_int(params.get("page"))
    if page is None or page < 1:
        page = 1

    limit = parse_int(params.get("limit"))
    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE
    limit = max(1, min(limit, settings.MAX_PAGE_SIZE))

    sort_by = params.get("sortBy") or DEFAULT_SORT_FIELD
    if sort_by not in SORTABLE_FIELDS:
        sort_by = DEFAULT_SORT_FIELD
    sort_order = "asc" if (params.get("sortOrder") or "").lower() == "asc" else "desc"

    return InvestorListQuery(
        filters=filters,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def parse_id_list(value: Optional[str]) -> Optional[List[UUID]]:
    """
    Parse a comma-separated list of investor ids.

    Returns ``None`` when the parameter is absent or blank (meaning "all").
    Invalid UUIDs are skipped; if none survive the result is an empty list.
    """
    parts = split_csv_param(value)
    if not parts:
        return None
    ids: List[UUID] = []
    for part in parts:
        try:
            ids.append(UUID(part))
        except ValueError:
            logger.debug("Ignoring malformed investor id %r", part)
    return ids
