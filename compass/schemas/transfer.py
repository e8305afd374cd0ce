"""
Schemas for bulk import and export.

Import rows arrive as loosely-typed objects (spreadsheet exports, hand-written
JSON).  ``InvestorImportRow`` coerces every cell to a string so the row
validator in ``compass.services.import_service`` works on one shape, and
``ImportResult`` accumulates the per-row outcome returned to the caller.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from compass.models.investor import EngagementStatus, InvestorType


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


# ── Import: input ──


class InvestorImportRow(BaseModel):
    """
    One raw import row.  Unknown columns are ignored.

    Cells are kept as strings: numbers are stringified, lists are joined
    with commas, so ``["EU", "US"]`` and ``"EU, US"`` parse the same way.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    type: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    investment_size_min: Optional[str] = None
    investment_size_max: Optional[str] = None
    regions: Optional[str] = None
    sectors: Optional[str] = None
    stage_focus: Optional[str] = None
    tags: Optional[str] = None
    engagement_status: Optional[str] = None
    founded_year: Optional[str] = None
    aum: Optional[str] = None
    investment_thesis: Optional[str] = None
    logo_url: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_title: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v if item is not None)
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, float) and v.is_integer():
            return str(int(v))
        return str(v)


# ── Import: validated row ──


class ParsedContact(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    title: Optional[str] = None


class ParsedImportRow(BaseModel):
    """A row that passed validation, ready to become an ``Investor``."""

    row: int
    name: str
    type: InvestorType
    website: Optional[str] = None
    description: Optional[str] = None
    investment_size_min: Optional[int] = None
    investment_size_max: Optional[int] = None
    regions: List[str] = Field(default_factory=list)
    sectors: List[str] = Field(default_factory=list)
    stage_focus: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    engagement_status: EngagementStatus = EngagementStatus.NOT_CONTACTED
    founded_year: Optional[int] = None
    aum: Optional[int] = None
    investment_thesis: Optional[str] = None
    logo_url: Optional[str] = None
    contact: Optional[ParsedContact] = None


# ── Import: result ──


class ImportRowError(BaseModel):
    """A row that was not imported."""

    row: int = Field(..., description="1-based spreadsheet row (header is row 1)")
    field: str = Field(..., examples=["name", "type", "general"])
    message: str
    data: Optional[Any] = None


class ImportWarning(BaseModel):
    """A row that was imported, but a secondary write failed."""

    row: int
    field: str = Field(..., examples=["contact"])
    message: str


class ImportResult(BaseModel):
    success: bool = True
    imported: int = 0
    failed: int = 0
    errors: List[ImportRowError] = Field(default_factory=list)
    warnings: List[ImportWarning] = Field(default_factory=list)

    def record_failure(self, error: ImportRowError) -> None:
        self.failed += 1
        self.errors.append(error)
