"""
Pydantic schemas for Investor API request / response serialisation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from compass.models.investor import EngagementStatus, InvestorStage, InvestorType
from compass.schemas.related import (
    ContactResponse,
    DocumentResponse,
    EngagementResponse,
    NoteResponse,
)

# Columns that exist on every investor and cannot be cleared with ``null``.
NON_NULLABLE_FIELDS = frozenset(
    {
        "name",
        "type",
        "regions",
        "sectors",
        "stage_focus",
        "tags",
        "portfolio_companies",
        "notable_investments",
        "engagement_status",
        "is_active",
        "metadata",
    }
)


def _lower_enum_input(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


def _strip_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError("name must not be blank")
    return v.strip()


class InvestorBase(BaseModel):
    """Fields shared by the create payload and the responses."""

    website: Optional[str] = Field(default=None, max_length=2048)
    description: Optional[str] = None
    investment_size_min: Optional[int] = Field(
        default=None, description="Smallest cheque size, in whole currency units"
    )
    investment_size_max: Optional[int] = Field(
        default=None, description="Largest cheque size, in whole currency units"
    )
    regions: List[str] = Field(default_factory=list, examples=[["Europe", "North America"]])
    sectors: List[str] = Field(default_factory=list, examples=[["SaaS", "Fintech"]])
    tags: List[str] = Field(default_factory=list)
    portfolio_companies: List[str] = Field(default_factory=list)
    notable_investments: List[str] = Field(default_factory=list)
    engagement_status: EngagementStatus = EngagementStatus.NOT_CONTACTED
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    founded_year: Optional[int] = None
    aum: Optional[int] = Field(default=None, description="Assets under management")
    investment_thesis: Optional[str] = None
    preferred_contact_method: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = True


class InvestorCreate(InvestorBase):
    """
    Schema for ``POST /investors``.

    ``name`` and ``type`` are required; everything else has a default.
    ``type`` and ``engagement_status`` accept any casing.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Investor or firm name",
        examples=["Acme Ventures"],
    )
    type: InvestorType = Field(..., description="debt, equity, grant or hybrid")
    stage_focus: List[InvestorStage] = Field(default_factory=list, examples=[["seed", "series_a"]])
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", "engagement_status", mode="before")
    @classmethod
    def normalise_enum_case(cls, v: Any) -> Any:
        return _lower_enum_input(v)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        return _strip_name(v)


class InvestorUpdate(BaseModel):
    """
    Schema for ``PUT /investors/{id}``.

    Partial update: only the keys present in the payload are written.
    Explicit ``null`` is allowed for optional columns only.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[InvestorType] = None
    website: Optional[str] = Field(default=None, max_length=2048)
    description: Optional[str] = None
    investment_size_min: Optional[int] = None
    investment_size_max: Optional[int] = None
    regions: Optional[List[str]] = None
    sectors: Optional[List[str]] = None
    stage_focus: Optional[List[InvestorStage]] = None
    tags: Optional[List[str]] = None
    portfolio_companies: Optional[List[str]] = None
    notable_investments: Optional[List[str]] = None
    engagement_status: Optional[EngagementStatus] = None
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    founded_year: Optional[int] = None
    aum: Optional[int] = None
    investment_thesis: Optional[str] = None
    preferred_contact_method: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("type", "engagement_status", mode="before")
    @classmethod
    def normalise_enum_case(cls, v: Any) -> Any:
        return _lower_enum_input(v)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _strip_name(v)

    @model_validator(mode="after")
    def reject_null_for_required_columns(self) -> "InvestorUpdate":
        cleared = sorted(
            name
            for name in self.model_fields_set & NON_NULLABLE_FIELDS
            if getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"These fields cannot be null: {', '.join(cleared)}")
        return self


class InvestorResponse(InvestorBase):
    """Schema returned by the list, create and update endpoints."""

    id: UUID
    name: str
    type: InvestorType
    stage_focus: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("extra_metadata", "metadata"),
    )
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvestorDetail(InvestorResponse):
    """``GET /investors/{id}``: the investor with all related records."""

    contacts: List[ContactResponse] = Field(default_factory=list)
    engagement_history: List[EngagementResponse] = Field(default_factory=list)
    documents: List[DocumentResponse] = Field(default_factory=list)
    notes: List[NoteResponse] = Field(default_factory=list)


class InvestorWithContacts(InvestorResponse):
    """JSON export row: the investor plus its contacts."""

    contacts: List[ContactResponse] = Field(default_factory=list)


class InvestorSummary(BaseModel):
    """Lightweight projection returned by full-text search."""

    id: UUID
    name: str
    type: InvestorType
    sectors: List[str] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    engagement_status: EngagementStatus
    logo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class InvestorPage(BaseModel):
    """Paginated list envelope."""

    data: List[InvestorResponse]
    total: int
    page: int
    limit: int
    total_pages: int = Field(serialization_alias="totalPages")
