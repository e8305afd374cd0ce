"""
Saved-search repository: data-access layer for ``saved_searches``.
"""

import logging

from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from compass.models.saved_search import SavedSearch
from compass.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SavedSearchRepository(BaseRepository[SavedSearch]):
    """Concrete repository for :class:`SavedSearch` entities."""

    async def create_saved_search(self, search: SavedSearch) -> SavedSearch:
        """
        Insert ``search``; if it is the user's new default, clear the old one.

        The UPDATE and the INSERT share one transaction, so a failed insert
        leaves the previous default in place.
        """
        if search.is_default:
            await self.db.execute(
                update(SavedSearch)
                .where(SavedSearch.user_id == search.user_id)
                .where(SavedSearch.is_default.is_(True))
                .values(is_default=False)
            )
        self.db.add(search)
        try:
            await self.db.commit()
        except OperationalError:
            await self.db.rollback()
            logger.error("OperationalError while saving search for user %s", search.user_id)
            raise
        await self.db.refresh(search)
        return search
