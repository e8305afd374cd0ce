"""Identity of the caller, as asserted by the verified bearer token."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class CurrentUser(BaseModel):
    id: UUID
    email: Optional[str] = None
    role: str = "authenticated"
