"""Investor note model: free-text annotation written by a user."""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from compass.models.investor import Investor


class InvestorNote(SQLModel, table=True):
    __tablename__ = "investor_notes"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    investor_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="investors.id",
        index=True,
        ondelete="CASCADE",
    )
    user_id: Optional[uuid.UUID] = Field(default=None, index=True)
    note: str = Field(sa_type=Text)  # type: ignore[arg-type]
    is_private: bool = Field(default=False)
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

    investor: Optional["Investor"] = Relationship(back_populates="notes")
