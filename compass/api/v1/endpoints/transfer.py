"""
Bulk import / export endpoints.

- GET  /investors/export           — CSV attachment or ``{"data": [...]}``
- POST /investors/import           — Import ``{"data": [row, ...]}``
- POST /investors/import/csv       — Import a raw ``text/csv`` body
- GET  /investors/import/template  — Download the CSV import template
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from compass.api.deps import get_current_user
from compass.core.exceptions import ValidationException
from compass.db.session import get_db
from compass.models.contact import InvestorContact
from compass.models.investor import Investor
from compass.repositories.contact_repo import ContactRepository
from compass.repositories.investor_repo import InvestorRepository
from compass.schemas.auth import CurrentUser
from compass.schemas.common import DataResponse, ErrorResponse
from compass.schemas.transfer import ExportFormat, ImportResult
from compass.services.export_service import ExportService, export_filename, parse_export_format
from compass.services.filters import parse_id_list
from compass.services.import_service import ImportService
from compass.services.tabular import IMPORT_TEMPLATE_CSV, IMPORT_TEMPLATE_FILENAME

router = APIRouter()

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Dependency injection ──


def _get_import_service(db: AsyncSession = Depends(get_db)) -> ImportService:
    return ImportService(InvestorRepository(Investor, db), ContactRepository(InvestorContact, db))


def _get_export_service(db: AsyncSession = Depends(get_db)) -> ExportService:
    return ExportService(InvestorRepository(Investor, db))


# ── Endpoints ──


@router.get(
    "/export",
    response_model=None,
    summary="Export investors",
    description=(
        "``format=csv`` (default) returns an attachment with one row per "
        "investor; ``format=json`` returns the investors with their contacts.  "
        "``ids`` restricts the export to a comma-separated list of investor ids."
    ),
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse, "description": "Unknown format"},
    },
)
async def export_investors(
    format: Optional[str] = Query(None, description="csv or json"),
    ids: Optional[str] = Query(None, description="Comma-separated investor ids"),
    service: ExportService = Depends(_get_export_service),
):
    fmt = parse_export_format(format)
    exported = await service.export(fmt, parse_id_list(ids))
    if fmt is ExportFormat.CSV:
        return _attachment(exported, export_filename())
    return DataResponse(data=exported)


@router.post(
    "/import",
    response_model=ImportResult,
    summary="Import investors",
    description=(
        "Body: ``{\"data\": [row, ...]}``.  Each row is validated and inserted "
        "on its own; failures are reported per row and do not stop the batch."
    ),
    responses={400: {"model": ErrorResponse, "description": "Body is not {data: [...]}"}},
)
async def import_investors(
    payload: Any = Body(None),
    user: CurrentUser = Depends(get_current_user),
    service: ImportService = Depends(_get_import_service),
) -> ImportResult:
    rows = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise ValidationException("Invalid import data")
    return await service.import_rows(rows, user.id)


@router.post(
    "/import/csv",
    response_model=ImportResult,
    summary="Import investors from CSV",
    description=(
        "Body: raw CSV text with a header row.  Headers are matched "
        "case-insensitively, with spaces read as underscores "
        "(``Investment Size Min`` → ``investment_size_min``)."
    ),
    responses={400: {"model": ErrorResponse, "description": "Body is not UTF-8 text"}},
)
async def import_investors_csv(
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    service: ImportService = Depends(_get_import_service),
) -> ImportResult:
    try:
        text = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise ValidationException("CSV body must be UTF-8 text") from None
    return await service.import_csv(text, user.id)


@router.get(
    "/import/template",
    response_class=Response,
    summary="Download the CSV import template",
    responses={200: {"content": {"text/csv": {}}}},
)
async def import_template() -> Response:
    return _attachment(IMPORT_TEMPLATE_CSV, IMPORT_TEMPLATE_FILENAME)
