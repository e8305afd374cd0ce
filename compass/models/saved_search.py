"""
Saved search model.

A named filter configuration owned by one user.  The partial unique index
allows at most one ``is_default`` row per user, so two concurrent "make
default" requests cannot both win.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, Index, text
from sqlmodel import Field, SQLModel

from compass.db.types import JsonDocument


class SavedSearch(SQLModel, table=True):
    """SQLModel / SQLAlchemy table definition for saved searches."""

    __tablename__ = "saved_searches"  # type: ignore[assignment]

    __table_args__ = (
        Index(
            "uq_saved_searches_one_default_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("is_default"),
            sqlite_where=text("is_default = 1"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: Optional[uuid.UUID] = Field(default=None, index=True)
    name: str = Field(max_length=255)
    filters: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JsonDocument, nullable=False),
    )
    is_default: bool = Field(default=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    def __repr__(self) -> str:
        return f"<SavedSearch id={self.id} name='{self.name}' default={self.is_default}>"
