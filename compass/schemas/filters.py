"""
Typed form of the investor list query.

``compass.services.filters.parse_investor_query`` builds these from the raw
query string; ``compass.repositories.investor_repo`` turns them into SQL.
Every filter is optional and absent filters add no predicate.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from compass.models.investor import EngagementStatus, InvestorStage, InvestorType

# Columns a client may sort by; anything else falls back to ``created_at``.
SORTABLE_FIELDS = frozenset(
    {
        "name",
        "type",
        "created_at",
        "updated_at",
        "investment_size_min",
        "investment_size_max",
        "engagement_status",
        "founded_year",
        "aum",
    }
)

DEFAULT_SORT_FIELD = "created_at"


class InvestorFilters(BaseModel):
    """Predicates applied to the investor list, AND-ed together."""

    search: Optional[str] = None
    type: List[InvestorType] = Field(default_factory=list)
    engagement_status: List[EngagementStatus] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    sectors: List[str] = Field(default_factory=list)
    stage_focus: List[InvestorStage] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    investment_size_min: Optional[int] = None
    investment_size_max: Optional[int] = None
    is_active: Optional[bool] = None


class InvestorListQuery(BaseModel):
    filters: InvestorFilters = Field(default_factory=InvestorFilters)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: Literal["asc", "desc"] = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
