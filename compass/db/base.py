"""
Database model registry.

Importing this module ensures all table models are registered with
SQLModel's metadata, which is required before calling ``create_all()``.
"""

from compass.models.contact import InvestorContact  # noqa: F401
from compass.models.document import InvestorDocument  # noqa: F401
from compass.models.engagement import EngagementHistory  # noqa: F401
from compass.models.investor import Investor  # noqa: F401
from compass.models.note import InvestorNote  # noqa: F401
from compass.models.saved_search import SavedSearch  # noqa: F401
