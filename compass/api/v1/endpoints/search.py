"""
Search endpoints.

- GET  /investors/search       — Ranked full-text search
- POST /investors/search/save  — Save a named filter set
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from compass.api.deps import get_current_user
from compass.core.config import settings
from compass.db.session import get_db
from compass.models.investor import Investor
from compass.models.saved_search import SavedSearch
from compass.repositories.investor_repo import InvestorRepository
from compass.repositories.saved_search_repo import SavedSearchRepository
from compass.schemas.auth import CurrentUser
from compass.schemas.common import DataResponse, ValidationErrorResponse
from compass.schemas.investor import InvestorSummary
from compass.schemas.search import SavedSearchCreate, SavedSearchResponse
from compass.services.filters import parse_int
from compass.services.search_service import SearchService

router = APIRouter()


def _get_search_service(db: AsyncSession = Depends(get_db)) -> SearchService:
    """Build a SearchService wired to the current request's DB session."""
    return SearchService(InvestorRepository(Investor, db), SavedSearchRepository(SavedSearch, db))


@router.get(
    "/search",
    response_model=DataResponse[List[InvestorSummary]],
    summary="Search investors",
    description=(
        "Full-text search over name, description and investment thesis.  "
        "Supports quoted phrases, ``or`` and ``-exclusion``.  An empty ``q`` "
        "returns no results."
    ),
)
async def search_investors(
    q: Optional[str] = Query(None, description="Search text"),
    limit: Optional[str] = Query(None, description="Maximum results (1-100, default 10)"),
    service: SearchService = Depends(_get_search_service),
) -> DataResponse[List[InvestorSummary]]:
    size = parse_int(limit)
    results = await service.search(q or "", size if size is not None else settings.SEARCH_RESULT_LIMIT)
    return DataResponse(data=results)


@router.post(
    "/search/save",
    response_model=DataResponse[SavedSearchResponse],
    status_code=201,
    summary="Save a search",
    description="When ``is_default`` is true, the caller's previous default is cleared.",
    responses={400: {"model": ValidationErrorResponse, "description": "Validation error"}},
)
async def save_search(
    search: SavedSearchCreate,
    user: CurrentUser = Depends(get_current_user),
    service: SearchService = Depends(_get_search_service),
) -> DataResponse[SavedSearchResponse]:
    saved = await service.save_search(search, user.id)
    return DataResponse(data=SavedSearchResponse.model_validate(saved))
