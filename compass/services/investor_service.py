"""
Investor service: business logic layer for investor CRUD.

Every database failure is rolled back and re-raised as a
:class:`StoreError` carrying the database's own message, which the API
returns verbatim with a 500.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from compass.core.exceptions import NotFoundException, StoreError, store_error_message
from compass.models.investor import Investor
from compass.repositories.investor_repo import InvestorRepository
from compass.schemas.filters import InvestorListQuery
from compass.schemas.investor import InvestorCreate, InvestorPage, InvestorResponse, InvestorUpdate

logger = logging.getLogger(__name__)


def _stored_values(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Map API field names and values onto ``Investor`` columns."""
    values = dict(payload)
    if "metadata" in values:
        values["extra_metadata"] = values.pop("metadata")
    if values.get("stage_focus") is not None:
        values["stage_focus"] = [getattr(s, "value", s) for s in values["stage_focus"]]
    return values


class InvestorService:
    """Encapsulates CRUD + business rules for :class:`Investor`."""

    def __init__(self, investor_repo: InvestorRepository):
        self._repo = investor_repo

    async def _store_failure(self, action: str, exc: SQLAlchemyError) -> StoreError:
        await self._repo.db.rollback()
        message = store_error_message(exc)
        logger.error("Failed to %s investor: %s", action, message)
        return StoreError(message)

    # ── Queries ──

    async def list_investors(self, query: InvestorListQuery) -> InvestorPage:
        """Return one filtered, sorted page plus pagination metadata."""
        items, total = await self._repo.list_filtered(query)
        return InvestorPage(
            data=[InvestorResponse.model_validate(item) for item in items],
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit),
        )

    async def get_investor(self, investor_id: UUID) -> Investor:
        """Return the investor with its related records, or raise 404."""
        investor = await self._repo.get_with_relations(investor_id)
        if investor is None:
            raise NotFoundException("Investor", investor_id)
        return investor

    # ── Commands ──

    async def create_investor(self, investor_in: InvestorCreate, user_id: UUID) -> Investor:
        """Create an investor owned by ``user_id``."""
        investor = Investor(**_stored_values(investor_in.model_dump()), created_by=user_id)
        try:
            created = await self._repo.create(investor)
        except SQLAlchemyError as exc:
            raise await self._store_failure("create", exc)

        logger.info(
            "Created investor %s (%s)",
            created.id,
            created.name,
            extra={"user_id": str(user_id)},
        )
        return created

    async def update_investor(self, investor_id: UUID, investor_in: InvestorUpdate) -> Investor:
        """
        Apply a partial update.

        Only fields present in the payload are written; ``updated_at`` is
        always refreshed.
        """
        investor = await self._repo.get(investor_id)
        if investor is None:
            raise NotFoundException("Investor", investor_id)

        for field, value in _stored_values(investor_in.model_dump(exclude_unset=True)).items():
            setattr(investor, field, value)
        investor.updated_at = datetime.now(timezone.utc)

        try:
            updated = await self._repo.update(investor)
        except SQLAlchemyError as exc:
            raise await self._store_failure("update", exc)

        logger.info("Updated investor %s", investor_id)
        return updated

    async def delete_investor(self, investor_id: UUID) -> None:
        """Delete an investor and, through the database cascade, its related rows."""
        try:
            deleted = await self._repo.delete(investor_id)
        except SQLAlchemyError as exc:
            raise await self._store_failure("delete", exc)

        if not deleted:
            raise NotFoundException("Investor", investor_id)
        logger.info("Deleted investor %s", investor_id)
