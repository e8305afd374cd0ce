"""
CSV encoding and decoding for investor import / export.

Uses the standard ``csv`` module in both directions, so cells containing
commas, quotes or newlines are quoted and embedded quotes doubled.
"""

import csv
import io
import re
from typing import Any, Dict, Iterable, List, Optional

from compass.models.contact import InvestorContact
from compass.models.investor import Investor

EXPORT_HEADERS = [
    "Name",
    "Type",
    "Website",
    "Description",
    "Investment Size Min",
    "Investment Size Max",
    "Regions",
    "Sectors",
    "Stage Focus",
    "Engagement Status",
    "Founded Year",
    "AUM",
    "Contact Name",
    "Contact Email",
    "Contact Phone",
    "Contact Title",
]

IMPORT_TEMPLATE_FILENAME = "investor_import_template.csv"

IMPORT_TEMPLATE_CSV = (
    "Name,Type,Website,Description,Investment Size Min,Investment Size Max,"
    "Regions,Sectors,Stage Focus,Contact Name,Contact Email,Contact Phone,Contact Title\n"
    'Acme Ventures,equity,https://acmeventures.com,"Leading early-stage investor",'
    '500000,5000000,"North America,Europe","FinTech,SaaS","seed,series_a",'
    "John Smith,john@acmeventures.com,+1234567890,Partner\n"
    'Global Impact Fund,grant,https://globalimpact.org,"Social impact focused fund",'
    '100000,1000000,Global,"Healthcare,Education,Agriculture",seed,'
    "Jane Doe,jane@globalimpact.org,+9876543210,Director\n"
)

_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """``"Investment Size Min"`` → ``"investment_size_min"``."""
    return _WHITESPACE.sub("_", header.strip().lower())


def parse_import_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into one dict per data row, keyed by normalised header.

    A leading byte-order mark is dropped and fully blank lines are skipped.
    Short rows leave the missing columns out; extra cells are discarded.
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    headers: Optional[List[str]] = None
    rows: List[Dict[str, str]] = []
    for record in reader:
        if not any(cell.strip() for cell in record):
            continue
        if headers is None:
            headers = [normalize_header(h) for h in record]
            continue
        rows.append({key: value for key, value in zip(headers, record) if key})
    return rows


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _joined(values: Optional[Iterable[str]]) -> str:
    return ", ".join(values or [])


def export_contact(investor: Investor) -> Optional[InvestorContact]:
    """The contact shown in the export row: a primary one if any, else the first."""
    contacts = list(investor.contacts or [])
    if not contacts:
        return None
    return next((c for c in contacts if c.is_primary), contacts[0])


def investor_to_row(investor: Investor) -> List[str]:
    contact = export_contact(investor)
    return [
        _cell(investor.name),
        _cell(investor.type),
        _cell(investor.website),
        _cell(investor.description),
        _cell(investor.investment_size_min),
        _cell(investor.investment_size_max),
        _joined(investor.regions),
        _joined(investor.sectors),
        _joined(investor.stage_focus),
        _cell(investor.engagement_status),
        _cell(investor.founded_year),
        _cell(investor.aum),
        _cell(contact.name if contact else None),
        _cell(contact.email if contact else None),
        _cell(contact.phone if contact else None),
        _cell(contact.title if contact else None),
    ]


def render_investors_csv(investors: Iterable[Investor]) -> str:
    """Render investors as CSV text with the fixed export header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for investor in investors:
        writer.writerow(investor_to_row(investor))
    return buffer.getvalue()
