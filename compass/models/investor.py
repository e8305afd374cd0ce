"""
Investor domain model.

Represents a prospective funding source persisted in the ``investors`` table,
together with the enumerations shared by the investor-related tables.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, Index, String, Text, func, literal_column
from sqlmodel import Field, Relationship, SQLModel

from compass.db.types import JsonDocument, StringArray

if TYPE_CHECKING:
    from compass.models.contact import InvestorContact
    from compass.models.document import InvestorDocument
    from compass.models.engagement import EngagementHistory
    from compass.models.note import InvestorNote


class InvestorType(str, Enum):
    """Kinds of capital an investor provides."""

    DEBT = "debt"
    EQUITY = "equity"
    GRANT = "grant"
    HYBRID = "hybrid"


class InvestorStage(str, Enum):
    """Funding rounds an investor participates in."""

    PRE_SEED = "pre_seed"
    SEED = "seed"
    SERIES_A = "series_a"
    SERIES_B = "series_b"
    SERIES_C = "series_c"
    GROWTH = "growth"
    LATE_STAGE = "late_stage"


class EngagementStatus(str, Enum):
    """Where the relationship with an investor currently stands."""

    NOT_CONTACTED = "not_contacted"
    INITIAL_OUTREACH = "initial_outreach"
    IN_DISCUSSION = "in_discussion"
    DUE_DILIGENCE = "due_diligence"
    TERM_SHEET = "term_sheet"
    CLOSED_DEAL = "closed_deal"
    PASSED = "passed"
    NO_RESPONSE = "no_response"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _children() -> Dict[str, Any]:
    # Rows are removed by ON DELETE CASCADE; the ORM must not null the FKs.
    return {"cascade": "all, delete-orphan", "passive_deletes": True}


class Investor(SQLModel, table=True):
    """
    SQLModel / SQLAlchemy table definition for investors.

    - ``investment_size_min`` / ``investment_size_max`` are independent
      nullable bounds; their ordering is not enforced.
    - List columns behave as sets but keep insertion order.
    - ``extra_metadata`` maps to the ``metadata`` column (the attribute name
      ``metadata`` is reserved by SQLAlchemy's declarative base).
    """

    __tablename__ = "investors"  # type: ignore[assignment]

    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_investors_name_not_empty"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=255)
    type: InvestorType = Field(index=True)
    website: Optional[str] = Field(default=None, max_length=2048)
    description: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    investment_size_min: Optional[int] = Field(default=None, sa_type=BigInteger)  # type: ignore[arg-type]
    investment_size_max: Optional[int] = Field(default=None, sa_type=BigInteger)  # type: ignore[arg-type]
    regions: List[str] = Field(default_factory=list, sa_column=Column(StringArray, nullable=False))
    sectors: List[str] = Field(default_factory=list, sa_column=Column(StringArray, nullable=False))
    stage_focus: List[str] = Field(default_factory=list, sa_column=Column(StringArray, nullable=False))
    portfolio_companies: List[str] = Field(
        default_factory=list, sa_column=Column(StringArray, nullable=False)
    )
    tags: List[str] = Field(default_factory=list, sa_column=Column(StringArray, nullable=False))
    notable_investments: List[str] = Field(
        default_factory=list, sa_column=Column(StringArray, nullable=False)
    )
    engagement_status: EngagementStatus = Field(default=EngagementStatus.NOT_CONTACTED, index=True)
    logo_url: Optional[str] = Field(default=None, max_length=2048)
    founded_year: Optional[int] = None
    aum: Optional[int] = Field(default=None, sa_type=BigInteger)  # type: ignore[arg-type]
    investment_thesis: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    preferred_contact_method: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = Field(default=True, index=True)
    extra_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column("metadata", JsonDocument, nullable=False),
    )
    created_by: Optional[uuid.UUID] = Field(default=None, index=True)
    created_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
        index=True,
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    # ── Relationships ──
    contacts: List["InvestorContact"] = Relationship(
        back_populates="investor", sa_relationship_kwargs=_children()
    )
    engagement_history: List["EngagementHistory"] = Relationship(
        back_populates="investor", sa_relationship_kwargs=_children()
    )
    documents: List["InvestorDocument"] = Relationship(
        back_populates="investor", sa_relationship_kwargs=_children()
    )
    notes: List["InvestorNote"] = Relationship(
        back_populates="investor", sa_relationship_kwargs=_children()
    )

    def __repr__(self) -> str:
        return f"<Investor id={self.id} name='{self.name}' type={self.type.value}>"


# ── Full-text search document ──

TS_CONFIG = literal_column("'english'::regconfig")
_SPACE = literal_column("' '", String)
_EMPTY = literal_column("''", String)


def search_document():
    """
    ``tsvector`` over name, description and thesis.

    Built only from immutable functions so the same expression backs the
    GIN index below and the ``@@`` match in ``InvestorRepository.search``.
    """
    text_expr = (
        Investor.name
        + _SPACE
        + func.coalesce(Investor.description, _EMPTY)
        + _SPACE
        + func.coalesce(Investor.investment_thesis, _EMPTY)
    )
    return func.to_tsvector(TS_CONFIG, text_expr)


Index(
    "ix_investors_search_document",
    search_document(),
    postgresql_using="gin",
).ddl_if(dialect="postgresql")
