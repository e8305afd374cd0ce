"""
Shared pytest fixtures for the test suite.

All tests run with ``USE_SQLITE=true`` so that no PostgreSQL server is
needed.  Unit tests mock the repositories; the integration suite uses the
in-memory SQLite engine.  The environment is set here, before anything
imports ``compass.core.config``.
"""

import os

os.environ["USE_SQLITE"] = "true"
os.environ["AUTH_JWT_SECRET"] = "compass-test-secret-0123456789abcdef"

import uuid  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from typing import List, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from compass.core.security import create_access_token  # noqa: E402
from compass.models.contact import InvestorContact  # noqa: E402
from compass.models.investor import EngagementStatus, Investor, InvestorType  # noqa: E402
from compass.schemas.auth import CurrentUser  # noqa: E402

# ────────────────────────────────────────────────────────────────────────────
# Factory helpers: domain objects with sensible defaults
# ────────────────────────────────────────────────────────────────────────────

INVESTOR_ID = uuid.UUID("22222222-2222-4222-8222-222222222222")
INVESTOR_ID_2 = uuid.UUID("55555555-5555-4555-8555-555555555555")
CONTACT_ID = uuid.UUID("33333333-3333-4333-8333-333333333333")
USER_ID = uuid.UUID("11111111-1111-4111-8111-111111111111")


def make_investor(
    *,
    id: uuid.UUID = INVESTOR_ID,
    name: str = "Acme Ventures",
    type: InvestorType = InvestorType.EQUITY,
    website: Optional[str] = "https://acmeventures.com",
    description: Optional[str] = "Leading early-stage investor",
    investment_size_min: Optional[int] = 500000,
    investment_size_max: Optional[int] = 5000000,
    regions: Optional[List[str]] = None,
    sectors: Optional[List[str]] = None,
    stage_focus: Optional[List[str]] = None,
    engagement_status: EngagementStatus = EngagementStatus.NOT_CONTACTED,
    founded_year: Optional[int] = None,
    aum: Optional[int] = None,
    created_at: Optional[datetime] = None,
) -> Investor:
    """Create an Investor domain object with sensible test defaults."""
    now = created_at or datetime.now(timezone.utc)
    return Investor(
        id=id,
        name=name,
        type=type,
        website=website,
        description=description,
        investment_size_min=investment_size_min,
        investment_size_max=investment_size_max,
        regions=["North America", "Europe"] if regions is None else regions,
        sectors=["FinTech", "SaaS"] if sectors is None else sectors,
        stage_focus=["seed", "series_a"] if stage_focus is None else stage_focus,
        tags=[],
        portfolio_companies=[],
        notable_investments=[],
        engagement_status=engagement_status,
        founded_year=founded_year,
        aum=aum,
        is_active=True,
        extra_metadata={},
        created_by=USER_ID,
        created_at=now,
        updated_at=now,
    )


def make_contact(
    *,
    id: uuid.UUID = CONTACT_ID,
    investor_id: Optional[uuid.UUID] = INVESTOR_ID,
    name: str = "John Smith",
    email: Optional[str] = "john@acmeventures.com",
    phone: Optional[str] = "+1234567890",
    title: Optional[str] = "Partner",
    is_primary: bool = True,
) -> InvestorContact:
    """Create an InvestorContact domain object with sensible test defaults."""
    now = datetime.now(timezone.utc)
    return InvestorContact(
        id=id,
        investor_id=investor_id,
        name=name,
        email=email,
        phone=phone,
        title=title,
        is_primary=is_primary,
        created_at=now,
        updated_at=now,
    )


def auth_headers(user_id: uuid.UUID = USER_ID, **kwargs) -> dict:
    """``Authorization`` header carrying a valid token for ``user_id``."""
    token = create_access_token(user_id=user_id, **kwargs)
    return {"Authorization": f"Bearer {token}"}


# ────────────────────────────────────────────────────────────────────────────
# Pytest fixtures
# ────────────────────────────────────────────────────────────────────────────


@pytest.fixture()
def mock_db():
    """A mocked AsyncSession that tracks add/commit/refresh/rollback calls."""
    session = AsyncMock()
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.merge = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture()
def current_user() -> CurrentUser:
    return CurrentUser(id=USER_ID, email="analyst@example.com")
