"""
Engagement history model.

One logged interaction with an investor, optionally with a specific contact.
``reminder_date`` is stored for the UI; nothing in the service acts on it.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, Relationship, SQLModel

from compass.db.types import StringArray

if TYPE_CHECKING:
    from compass.models.investor import Investor


class EngagementType(str, Enum):
    """Kinds of interaction that can be logged."""

    EMAIL = "email"
    CALL = "call"
    MEETING = "meeting"
    CONFERENCE = "conference"
    INTRODUCTION = "introduction"
    FOLLOW_UP = "follow_up"
    DOCUMENT_SHARED = "document_shared"


class EngagementHistory(SQLModel, table=True):
    """SQLModel / SQLAlchemy table definition for engagement events."""

    __tablename__ = "engagement_history"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    investor_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="investors.id",
        index=True,
        ondelete="CASCADE",
    )
    contact_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="investor_contacts.id",
        index=True,
        ondelete="SET NULL",
    )
    date: datetime = Field(sa_type=DateTime(timezone=True), index=True)  # type: ignore[arg-type]
    type: EngagementType
    subject: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    outcome: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    next_steps: Optional[str] = Field(default=None, sa_type=Text)  # type: ignore[arg-type]
    attachments: List[str] = Field(default_factory=list, sa_column=Column(StringArray, nullable=False))
    reminder_date: Optional[datetime] = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )
    created_by: Optional[uuid.UUID] = None
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

    investor: Optional["Investor"] = Relationship(back_populates="engagement_history")

    def __repr__(self) -> str:
        return f"<EngagementHistory id={self.id} type={self.type.value} date={self.date}>"
