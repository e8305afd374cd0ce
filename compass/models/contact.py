"""
Investor contact model.

People at an investor.  ``investor_id`` is nullable, so orphaned contacts are
representable, and several contacts may be flagged ``is_primary``.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from compass.models.investor import Investor


class InvestorContact(SQLModel, table=True):
    """SQLModel / SQLAlchemy table definition for investor contacts."""

    __tablename__ = "investor_contacts"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    investor_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="investors.id",
        index=True,
        ondelete="CASCADE",
    )
    name: str = Field(max_length=255)
    title: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=320)
    phone: Optional[str] = Field(default=None, max_length=50)
    linkedin: Optional[str] = Field(default=None, max_length=2048)
    twitter: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    is_primary: bool = Field(default=False)
    last_contacted: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )
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

    investor: Optional["Investor"] = Relationship(back_populates="contacts")

    def __repr__(self) -> str:
        return f"<InvestorContact id={self.id} name='{self.name}' primary={self.is_primary}>"
