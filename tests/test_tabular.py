"""
Unit tests for CSV encoding / decoding (compass.services.tabular).

Tests cover:
- Export header and row layout
- Quoting of commas, quotes and newlines
- Contact selection (primary first)
- Header normalisation and CSV parsing for import
- Export → import round trip
"""

import csv
import io
import uuid

from compass.models.investor import EngagementStatus
from compass.services.import_service import validate_import_row
from compass.services.tabular import (
    EXPORT_HEADERS,
    IMPORT_TEMPLATE_CSV,
    normalize_header,
    parse_import_csv,
    render_investors_csv,
)

from .conftest import make_contact, make_investor


def _read(text: str):
    return list(csv.reader(io.StringIO(text)))


class TestRenderInvestorsCsv:
    def test_header_only_for_no_investors(self):
        assert _read(render_investors_csv([])) == [EXPORT_HEADERS]
        assert len(EXPORT_HEADERS) == 16

    def test_row_layout(self):
        investor = make_investor(founded_year=2010, aum=0)
        investor.contacts = [make_contact()]

        header, row = _read(render_investors_csv([investor]))

        record = dict(zip(header, row))
        assert record["Name"] == "Acme Ventures"
        assert record["Type"] == "equity"
        assert record["Investment Size Min"] == "500000"
        assert record["Regions"] == "North America, Europe"
        assert record["Stage Focus"] == "seed, series_a"
        assert record["Engagement Status"] == "not_contacted"
        assert record["Founded Year"] == "2010"
        assert record["AUM"] == "0"
        assert record["Contact Name"] == "John Smith"
        assert record["Contact Title"] == "Partner"

    def test_nulls_become_empty_cells(self):
        investor = make_investor(website=None, description=None, investment_size_min=None)

        _, row = _read(render_investors_csv([investor]))

        record = dict(zip(EXPORT_HEADERS, row))
        assert record["Website"] == ""
        assert record["Investment Size Min"] == ""
        assert record["Contact Name"] == ""

    def test_commas_quotes_and_newlines_are_quoted(self):
        investor = make_investor(description='Says "hi",\nthen leaves')

        text = render_investors_csv([investor])

        assert '"Says ""hi"",\nthen leaves"' in text
        _, row = _read(text)
        assert row[3] == 'Says "hi",\nthen leaves'

    def test_primary_contact_preferred(self):
        investor = make_investor()
        investor.contacts = [
            make_contact(id=uuid.uuid4(), name="Assistant", is_primary=False),
            make_contact(id=uuid.uuid4(), name="Partner Person", is_primary=True),
        ]

        _, row = _read(render_investors_csv([investor]))

        assert row[EXPORT_HEADERS.index("Contact Name")] == "Partner Person"


class TestParseImportCsv:
    def test_normalize_header(self):
        assert normalize_header(" Investment Size Min ") == "investment_size_min"
        assert normalize_header("Contact\tEmail") == "contact_email"
        assert normalize_header("AUM") == "aum"

    def test_template_rows(self):
        rows = parse_import_csv(IMPORT_TEMPLATE_CSV)

        assert len(rows) == 2
        assert rows[0]["name"] == "Acme Ventures"
        assert rows[0]["regions"] == "North America,Europe"
        assert rows[1]["sectors"] == "Healthcare,Education,Agriculture"
        assert rows[1]["contact_title"] == "Director"

    def test_bom_and_blank_lines(self):
        rows = parse_import_csv("\ufeffName,Type\n\nAcme,equity\n\n")
        assert rows == [{"name": "Acme", "type": "equity"}]

    def test_short_rows_leave_columns_out(self):
        rows = parse_import_csv("Name,Type,Website\nAcme,equity\n")
        assert rows == [{"name": "Acme", "type": "equity"}]

    def test_empty_input(self):
        assert parse_import_csv("") == []


class TestRoundTrip:
    def test_exported_csv_imports_back_to_equivalent_investor(self):
        investor = make_investor(
            engagement_status=EngagementStatus.IN_DISCUSSION,
            founded_year=2012,
            aum=75000000,
        )
        investor.contacts = [make_contact()]

        (row,) = parse_import_csv(render_investors_csv([investor]))
        parsed = validate_import_row(row, 2)

        assert parsed.name == investor.name
        assert parsed.type == investor.type
        assert parsed.website == investor.website
        assert parsed.description == investor.description
        assert parsed.investment_size_min == investor.investment_size_min
        assert parsed.investment_size_max == investor.investment_size_max
        assert parsed.regions == investor.regions
        assert parsed.sectors == investor.sectors
        assert parsed.stage_focus == investor.stage_focus
        assert parsed.engagement_status == investor.engagement_status
        assert parsed.founded_year == 2012
        assert parsed.aum == 75000000
        assert parsed.contact.name == "John Smith"
        assert parsed.contact.email == "john@acmeventures.com"
