"""
Export service: bulk investor export as CSV or JSON.
"""

import logging
from datetime import date
from typing import List, Optional, Union
from uuid import UUID

from compass.core.exceptions import ValidationException
from compass.repositories.investor_repo import InvestorRepository
from compass.schemas.investor import InvestorWithContacts
from compass.schemas.transfer import ExportFormat
from compass.services.tabular import render_investors_csv

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid format. Use csv or json"


def parse_export_format(value: Optional[str]) -> ExportFormat:
    """Case-insensitive ``csv`` / ``json``; absent means CSV."""
    if value is None:
        return ExportFormat.CSV
    try:
        return ExportFormat(value.strip().lower())
    except ValueError:
        raise ValidationException(INVALID_FORMAT_MESSAGE) from None


def export_filename(today: Optional[date] = None) -> str:
    return f"investors_{(today or date.today()).isoformat()}.csv"


class ExportService:
    """Loads investors for export and renders them as CSV or JSON."""

    def __init__(self, investor_repo: InvestorRepository):
        self._repo = investor_repo

    async def export(
        self, fmt: ExportFormat, ids: Optional[List[UUID]] = None
    ) -> Union[str, List[InvestorWithContacts]]:
        """
        Export the selected investors (all of them when ``ids`` is None).

        Returns CSV text for :attr:`ExportFormat.CSV`, otherwise the list of
        investors with their contacts.
        """
        investors = await self._repo.list_for_export(ids)
        logger.info("Exporting %d investors as %s", len(investors), fmt.value)
        if fmt is ExportFormat.CSV:
            return render_investors_csv(investors)
        return [InvestorWithContacts.model_validate(investor) for investor in investors]
