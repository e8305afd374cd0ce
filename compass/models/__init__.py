"""SQLModel table models; importing this package registers every table."""

from compass.models.contact import InvestorContact  # noqa: F401
from compass.models.document import InvestorDocument  # noqa: F401
from compass.models.engagement import EngagementHistory, EngagementType  # noqa: F401
from compass.models.investor import (  # noqa: F401
    EngagementStatus,
    Investor,
    InvestorStage,
    InvestorType,
)
from compass.models.note import InvestorNote  # noqa: F401
from compass.models.saved_search import SavedSearch  # noqa: F401
