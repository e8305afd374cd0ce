"""
Unit tests for ExportService and export format parsing.

Tests cover:
- Format parsing: default, case-insensitivity, rejection
- CSV and JSON output
- Id restriction passed through to the repository
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from compass.core.exceptions import ValidationException
from compass.schemas.investor import InvestorWithContacts
from compass.schemas.transfer import ExportFormat
from compass.services.export_service import (
    ExportService,
    export_filename,
    parse_export_format,
)

from .conftest import INVESTOR_ID, INVESTOR_ID_2, make_contact, make_investor


class TestParseExportFormat:
    def test_default_is_csv(self):
        assert parse_export_format(None) is ExportFormat.CSV

    def test_case_insensitive(self):
        assert parse_export_format("JSON") is ExportFormat.JSON
        assert parse_export_format("Csv") is ExportFormat.CSV

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationException) as exc_info:
            parse_export_format("xml")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid format. Use csv or json"


def test_export_filename():
    assert export_filename(date(2026, 3, 2)) == "investors_2026-03-02.csv"


class TestExportService:
    @pytest.fixture(autouse=True)
    def _setup(self):
        self.repo = AsyncMock()
        self.service = ExportService(self.repo)

    @pytest.mark.asyncio
    async def test_csv_export(self):
        self.repo.list_for_export.return_value = [make_investor()]

        text = await self.service.export(ExportFormat.CSV)

        lines = text.splitlines()
        assert lines[0].startswith("Name,Type,Website")
        assert lines[1].startswith("Acme Ventures,equity,")
        self.repo.list_for_export.assert_awaited_once_with(None)

    @pytest.mark.asyncio
    async def test_json_export_includes_contacts(self):
        investor = make_investor()
        investor.contacts = [make_contact()]
        self.repo.list_for_export.return_value = [investor]

        exported = await self.service.export(ExportFormat.JSON, [INVESTOR_ID])

        assert len(exported) == 1
        assert isinstance(exported[0], InvestorWithContacts)
        assert exported[0].contacts[0].name == "John Smith"
        self.repo.list_for_export.assert_awaited_once_with([INVESTOR_ID])

    @pytest.mark.asyncio
    async def test_export_restricted_to_ids(self):
        self.repo.list_for_export.return_value = [
            make_investor(id=INVESTOR_ID),
            make_investor(id=INVESTOR_ID_2, name="Global Impact Fund"),
        ]

        exported = await self.service.export(ExportFormat.JSON, [INVESTOR_ID, INVESTOR_ID_2])

        assert {i.id for i in exported} == {INVESTOR_ID, INVESTOR_ID_2}
