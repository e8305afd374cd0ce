"""
Search service: full-text investor search and saved searches.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from compass.core.config import settings
from compass.core.exceptions import StoreError, store_error_message
from compass.models.saved_search import SavedSearch
from compass.repositories.investor_repo import InvestorRepository
from compass.repositories.saved_search_repo import SavedSearchRepository
from compass.schemas.investor import InvestorSummary
from compass.schemas.search import SavedSearchCreate

logger = logging.getLogger(__name__)


class SearchService:
    """Encapsulates search queries and saved-search persistence."""

    def __init__(self, investor_repo: InvestorRepository, saved_search_repo: SavedSearchRepository):
        self._investors = investor_repo
        self._saved = saved_search_repo

    async def search(self, q: str, limit: int = settings.SEARCH_RESULT_LIMIT) -> List[InvestorSummary]:
        """
        Ranked full-text search.  A blank query returns nothing without
        touching the database.
        """
        q = (q or "").strip()
        if not q:
            return []
        limit = max(1, min(limit, settings.MAX_PAGE_SIZE))
        investors = await self._investors.search(q, limit)
        return [InvestorSummary.model_validate(investor) for investor in investors]

    async def save_search(self, search_in: SavedSearchCreate, user_id: UUID) -> SavedSearch:
        """Persist a named filter set for ``user_id``, optionally as their default."""
        search = SavedSearch(
            user_id=user_id,
            name=search_in.name,
            filters=search_in.filters,
            is_default=search_in.is_default,
        )
        try:
            saved = await self._saved.create_saved_search(search)
        except SQLAlchemyError as exc:
            await self._saved.db.rollback()
            message = store_error_message(exc)
            logger.error("Failed to save search for user %s: %s", user_id, message)
            raise StoreError(message)

        logger.info("Saved search %s (default=%s)", saved.id, saved.is_default)
        return saved
