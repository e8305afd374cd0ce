"""Response schemas for the records attached to an investor."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from compass.models.engagement import EngagementType


class ContactResponse(BaseModel):
    id: UUID
    investor_id: Optional[UUID] = None
    name: str
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    notes: Optional[str] = None
    is_primary: bool = False
    last_contacted: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EngagementResponse(BaseModel):
    id: UUID
    investor_id: Optional[UUID] = None
    contact_id: Optional[UUID] = None
    date: datetime
    type: EngagementType
    subject: Optional[str] = None
    notes: Optional[str] = None
    outcome: Optional[str] = None
    next_steps: Optional[str] = None
    attachments: List[str] = []
    reminder_date: Optional[datetime] = None
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentResponse(BaseModel):
    id: UUID
    investor_id: Optional[UUID] = None
    name: str
    type: Optional[str] = None
    url: str
    file_size: Optional[int] = None
    uploaded_by: Optional[UUID] = None
    uploaded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(BaseModel):
    id: UUID
    investor_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    note: str
    is_private: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
