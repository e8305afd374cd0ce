"""
Pydantic schemas for full-text search and saved searches.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SavedSearchCreate(BaseModel):
    """Schema for ``POST /investors/search/save``."""

    name: str = Field(..., min_length=1, max_length=255, examples=["EU seed funds"])
    filters: Dict[str, Any] = Field(
        ...,
        description="Filter parameters as accepted by GET /investors",
        examples=[{"regions": "Europe", "stage_focus": "seed"}],
    )
    is_default: bool = False

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class SavedSearchResponse(BaseModel):
    id: UUID
    user_id: Optional[UUID] = None
    name: str
    filters: Dict[str, Any]
    is_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
