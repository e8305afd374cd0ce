"""Investor document model: a link to a file shared with or about an investor."""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from compass.models.investor import Investor


class InvestorDocument(SQLModel, table=True):
    __tablename__ = "investor_documents"  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    investor_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="investors.id",
        index=True,
        ondelete="CASCADE",
    )
    name: str = Field(max_length=255)
    type: Optional[str] = Field(default=None, max_length=100)
    url: str = Field(max_length=2048)
    file_size: Optional[int] = Field(default=None, sa_type=BigInteger)  # type: ignore[arg-type]
    uploaded_by: Optional[uuid.UUID] = None
    uploaded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_type=DateTime(timezone=True),  # type: ignore[arg-type]
    )

    investor: Optional["Investor"] = Relationship(back_populates="documents")
