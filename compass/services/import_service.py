"""
Import service: bulk investor import.

Rows are processed one at a time, in order:

1. validate and normalise the row (``validate_import_row``);
2. insert the investor in its own transaction;
3. if the row names a contact, insert it as the investor's primary contact.

A failed row is recorded in the :class:`ImportResult` and the batch moves
on; rows already imported stay imported.  A failed contact insert does not
undo its investor: it is reported as a warning instead.
"""

import logging
import re
from typing import Any, Mapping, Optional, Sequence, Union
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from compass.core.exceptions import store_error_message
from compass.models.contact import InvestorContact
from compass.models.investor import EngagementStatus, Investor, InvestorStage, InvestorType
from compass.repositories.contact_repo import ContactRepository
from compass.repositories.investor_repo import InvestorRepository
from compass.schemas.transfer import (
    ImportResult,
    ImportRowError,
    ImportWarning,
    InvestorImportRow,
    ParsedContact,
    ParsedImportRow,
)
from compass.services.filters import split_csv_param
from compass.services.tabular import parse_import_csv

logger = logging.getLogger(__name__)

MISSING_FIELD_MESSAGE = "Required field is missing"
INVALID_TYPE_MESSAGE = "Invalid type. Must be one of: " + ", ".join(t.value for t in InvestorType)
INVALID_STATUS_MESSAGE = "Invalid engagement status. Must be one of: " + ", ".join(
    s.value for s in EngagementStatus
)
INVALID_STAGE_MESSAGE = "Invalid stage focus. Must be one of: " + ", ".join(
    s.value for s in InvestorStage
)
DEFAULT_CONTACT_NAME = "Primary Contact"

_NON_DIGITS = re.compile(r"[^0-9]")


def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _whole_number(value: Optional[str]) -> Optional[int]:
    """Keep only the digits: ``"$1,000,000"`` → ``1000000``; nothing left → ``None``."""
    digits = _NON_DIGITS.sub("", value or "")
    return int(digits) if digits else None


def _row_data(raw: Any) -> Any:
    return dict(raw) if isinstance(raw, Mapping) else raw


def validate_import_row(raw: Any, row_number: int) -> Union[ParsedImportRow, ImportRowError]:
    """
    Validate one raw row.

    Returns a :class:`ParsedImportRow` on success or the first
    :class:`ImportRowError` found.  ``name`` is checked before ``type``.
    """

    def fail(field: str, message: str) -> ImportRowError:
        return ImportRowError(row=row_number, field=field, message=message, data=_row_data(raw))

    if not isinstance(raw, Mapping):
        return fail("general", "Row must be an object")
    try:
        row = InvestorImportRow.model_validate({str(k): v for k, v in raw.items()})
    except ValidationError as exc:
        return fail("general", str(exc))

    name = _text(row.name)
    if name is None:
        return fail("name", MISSING_FIELD_MESSAGE)
    type_text = _text(row.type)
    if type_text is None:
        return fail("type", MISSING_FIELD_MESSAGE)
    try:
        investor_type = InvestorType(type_text.lower())
    except ValueError:
        return fail("type", INVALID_TYPE_MESSAGE)

    stages = []
    for segment in split_csv_param(row.stage_focus):
        try:
            stage = InvestorStage(segment.lower()).value
        except ValueError:
            return fail("stage_focus", INVALID_STAGE_MESSAGE)
        if stage not in stages:
            stages.append(stage)

    status = EngagementStatus.NOT_CONTACTED
    status_text = _text(row.engagement_status)
    if status_text is not None:
        try:
            status = EngagementStatus(status_text.lower())
        except ValueError:
            return fail("engagement_status", INVALID_STATUS_MESSAGE)

    contact = None
    contact_name = _text(row.contact_name)
    contact_email = _text(row.contact_email)
    if contact_name or contact_email:
        contact = ParsedContact(
            name=contact_name or DEFAULT_CONTACT_NAME,
            email=contact_email,
            phone=_text(row.contact_phone),
            title=_text(row.contact_title),
        )

    return ParsedImportRow(
        row=row_number,
        name=name,
        type=investor_type,
        website=_text(row.website),
        description=_text(row.description),
        investment_size_min=_whole_number(row.investment_size_min),
        investment_size_max=_whole_number(row.investment_size_max),
        regions=split_csv_param(row.regions),
        sectors=split_csv_param(row.sectors),
        stage_focus=stages,
        tags=split_csv_param(row.tags),
        engagement_status=status,
        founded_year=_whole_number(row.founded_year),
        aum=_whole_number(row.aum),
        investment_thesis=_text(row.investment_thesis),
        logo_url=_text(row.logo_url),
        contact=contact,
    )


class ImportService:
    """Runs the row-by-row import pipeline."""

    def __init__(self, investor_repo: InvestorRepository, contact_repo: ContactRepository):
        self._investors = investor_repo
        self._contacts = contact_repo

    async def _rollback(self) -> None:
        await self._investors.db.rollback()

    async def import_csv(self, text: str, user_id: UUID) -> ImportResult:
        """Parse CSV text (header row first) and import its rows."""
        return await self.import_rows(parse_import_csv(text), user_id)

    async def import_rows(self, rows: Sequence[Any], user_id: UUID) -> ImportResult:
        """
        Import ``rows`` and report the outcome of each.

        Row numbers are spreadsheet-style: the first data row is row 2.
        ``success`` is true only if no row failed.
        """
        result = ImportResult()

        for index, raw in enumerate(rows):
            row_number = index + 2
            outcome = validate_import_row(raw, row_number)
            if isinstance(outcome, ImportRowError):
                result.record_failure(outcome)
                continue

            investor = await self._insert_investor(outcome, user_id, raw, result)
            if investor is None:
                continue
            result.imported += 1

            if outcome.contact is not None:
                await self._insert_contact(investor, outcome, result)

        result.success = result.failed == 0
        logger.info(
            "Import finished: %d imported, %d failed, %d warnings",
            result.imported,
            result.failed,
            len(result.warnings),
            extra={"user_id": str(user_id)},
        )
        return result

    async def _insert_investor(
        self, parsed: ParsedImportRow, user_id: UUID, raw: Any, result: ImportResult
    ) -> Optional[Investor]:
        investor = Investor(
            **parsed.model_dump(exclude={"row", "contact"}),
            created_by=user_id,
        )
        try:
            return await self._investors.create(investor)
        except SQLAlchemyError as exc:
            await self._rollback()
            message = store_error_message(exc)
            logger.warning("Import row %d rejected by the database: %s", parsed.row, message)
        except Exception as exc:
            await self._rollback()
            message = str(exc)
            logger.exception("Import row %d failed", parsed.row)

        result.record_failure(
            ImportRowError(row=parsed.row, field="general", message=message, data=_row_data(raw))
        )
        return None

    async def _insert_contact(
        self, investor: Investor, parsed: ParsedImportRow, result: ImportResult
    ) -> None:
        contact = parsed.contact
        try:
            await self._contacts.create(
                InvestorContact(
                    investor_id=investor.id,
                    name=contact.name,
                    email=contact.email,
                    phone=contact.phone,
                    title=contact.title,
                    is_primary=True,
                )
            )
        except Exception as exc:
            await self._rollback()
            message = store_error_message(exc)
            logger.warning("Contact for import row %d not saved: %s", parsed.row, message)
            result.warnings.append(ImportWarning(row=parsed.row, field="contact", message=message))
