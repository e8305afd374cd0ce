"""
Investor API endpoints.

- GET    /investors       — List investors (filtered, sorted, paginated)
- POST   /investors       — Create an investor
- GET    /investors/{id}  — Investor with contacts, engagements, documents, notes
- PUT    /investors/{id}  — Partial update
- DELETE /investors/{id}  — Delete (related rows cascade)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from compass.api.deps import get_current_user
from compass.db.session import get_db
from compass.models.investor import Investor
from compass.repositories.investor_repo import InvestorRepository
from compass.schemas.auth import CurrentUser
from compass.schemas.common import (
    DataResponse,
    ErrorResponse,
    MessageResponse,
    ValidationErrorResponse,
)
from compass.schemas.investor import (
    InvestorCreate,
    InvestorDetail,
    InvestorPage,
    InvestorResponse,
    InvestorUpdate,
)
from compass.services.filters import parse_investor_query
from compass.services.investor_service import InvestorService

router = APIRouter()


# ── Dependency injection ──


def _get_investor_service(db: AsyncSession = Depends(get_db)) -> InvestorService:
    """Build an InvestorService wired to the current request's DB session."""
    return InvestorService(InvestorRepository(Investor, db))


# ── Endpoints ──


@router.get(
    "",
    response_model=InvestorPage,
    summary="List investors",
    description=(
        "Filters: ``search``, ``type``, ``engagement_status``, ``regions``, "
        "``sectors``, ``stage_focus``, ``tags`` (comma-separated; array filters "
        "require every value), ``investment_size_min``, ``investment_size_max``, "
        "``is_active``.  Paging with ``page`` / ``limit``; ordering with "
        "``sortBy`` / ``sortOrder``.  Malformed values are ignored."
    ),
)
async def list_investors(
    request: Request,
    service: InvestorService = Depends(_get_investor_service),
) -> InvestorPage:
    query = parse_investor_query(request.query_params)
    return await service.list_investors(query)


@router.post(
    "",
    response_model=DataResponse[InvestorResponse],
    status_code=201,
    summary="Create an investor",
    responses={400: {"model": ValidationErrorResponse, "description": "Validation error"}},
)
async def create_investor(
    investor: InvestorCreate,
    user: CurrentUser = Depends(get_current_user),
    service: InvestorService = Depends(_get_investor_service),
) -> DataResponse[InvestorResponse]:
    created = await service.create_investor(investor, user.id)
    return DataResponse(data=InvestorResponse.model_validate(created))


@router.get(
    "/{investor_id}",
    response_model=DataResponse[InvestorDetail],
    summary="Get an investor",
    responses={404: {"model": ErrorResponse, "description": "Investor not found"}},
)
async def get_investor(
    investor_id: UUID,
    service: InvestorService = Depends(_get_investor_service),
) -> DataResponse[InvestorDetail]:
    investor = await service.get_investor(investor_id)
    return DataResponse(data=InvestorDetail.model_validate(investor))


@router.put(
    "/{investor_id}",
    response_model=DataResponse[InvestorResponse],
    summary="Update an investor",
    description="Only the fields present in the body are changed.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Investor not found"},
    },
)
async def update_investor(
    investor_id: UUID,
    investor: InvestorUpdate,
    service: InvestorService = Depends(_get_investor_service),
) -> DataResponse[InvestorResponse]:
    updated = await service.update_investor(investor_id, investor)
    return DataResponse(data=InvestorResponse.model_validate(updated))


@router.delete(
    "/{investor_id}",
    response_model=MessageResponse,
    summary="Delete an investor",
    responses={404: {"model": ErrorResponse, "description": "Investor not found"}},
)
async def delete_investor(
    investor_id: UUID,
    service: InvestorService = Depends(_get_investor_service),
) -> MessageResponse:
    await service.delete_investor(investor_id)
    return MessageResponse(message="Investor deleted successfully")
