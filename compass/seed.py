"""
Seed script: loads the CSV import template rows for development / demo.

Usage:
    python -m compass.seed

The rows go through the regular import pipeline, so the seed also
exercises row validation and contact creation.  Skipped when investors
already exist.
"""

import asyncio
import logging
import uuid

from sqlalchemy import select

from compass.core.logging import setup_logging
from compass.db.session import AsyncSessionLocal
from compass.main import create_tables
from compass.models.contact import InvestorContact
from compass.models.investor import Investor
from compass.repositories.contact_repo import ContactRepository
from compass.repositories.investor_repo import InvestorRepository
from compass.services.import_service import ImportService
from compass.services.tabular import IMPORT_TEMPLATE_CSV

logger = logging.getLogger(__name__)

SEED_USER_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")


async def seed() -> None:
    """Create tables and import the template rows if the database is empty."""
    if not await create_tables():
        return

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Investor.id).limit(1))
        if result.first() is not None:
            logger.info("Database already contains investors, skipping seed")
            return

        service = ImportService(
            InvestorRepository(Investor, session), ContactRepository(InvestorContact, session)
        )
        outcome = await service.import_csv(IMPORT_TEMPLATE_CSV, SEED_USER_ID)
        logger.info("Seeded %d investors (%d failed)", outcome.imported, outcome.failed)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
