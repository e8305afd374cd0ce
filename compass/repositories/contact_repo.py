"""
Contact repository: data-access layer for ``investor_contacts``.

Only the import pipeline writes contacts today; it relies on the generic
``create`` inherited from :class:`BaseRepository`.
"""

from compass.models.contact import InvestorContact
from compass.repositories.base import BaseRepository


class ContactRepository(BaseRepository[InvestorContact]):
    """Concrete repository for :class:`InvestorContact` entities."""
