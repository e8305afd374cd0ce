"""
Investor repository: data-access layer for the ``investors`` table.

Translates a typed ``InvestorListQuery`` into SQL predicates, and runs the
paginated list, export and full-text search queries.

Array containment is dialect-specific: PostgreSQL uses ``@>`` on the
``VARCHAR[]`` columns; SQLite stores the lists as JSON arrays, so each
requested value needs an exact (case-sensitive) match in ``json_each``.
"""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload
from sqlalchemy.sql.elements import ColumnElement

from compass.models.investor import TS_CONFIG, Investor, search_document
from compass.repositories.base import BaseRepository
from compass.schemas.filters import InvestorFilters, InvestorListQuery

_ARRAY_FILTERS = ("regions", "sectors", "stage_focus", "tags")


def _array_contains_all(
    column: InstrumentedAttribute, values: Sequence[str], dialect_name: str
) -> ColumnElement:
    if dialect_name == "postgresql":
        return column.contains(list(values))
    clauses = []
    for value in values:
        element = func.json_each(column).table_valued("value")
        clauses.append(select(element.c.value).where(element.c.value == value).exists())
    return and_(*clauses)


def build_filter_clauses(filters: InvestorFilters, dialect_name: str) -> List[ColumnElement]:
    """
    Build the WHERE clauses for an investor list query.

    Investment size filters use range-overlap semantics: a requested
    minimum is compared with the investor's *maximum* and vice versa, so
    ``investment_size_min=N`` keeps investors that can write a cheque of
    at least ``N``.
    """
    clauses: List[ColumnElement] = []

    if filters.search:
        clauses.append(
            or_(
                Investor.name.icontains(filters.search, autoescape=True),
                Investor.description.icontains(filters.search, autoescape=True),
            )
        )
    if filters.type:
        clauses.append(Investor.type.in_(filters.type))
    if filters.engagement_status:
        clauses.append(Investor.engagement_status.in_(filters.engagement_status))

    for field in _ARRAY_FILTERS:
        values = [getattr(v, "value", v) for v in getattr(filters, field)]
        if values:
            clauses.append(_array_contains_all(getattr(Investor, field), values, dialect_name))

    if filters.investment_size_min is not None:
        clauses.append(Investor.investment_size_max >= filters.investment_size_min)
    if filters.investment_size_max is not None:
        clauses.append(Investor.investment_size_min <= filters.investment_size_max)
    if filters.is_active is not None:
        clauses.append(Investor.is_active == filters.is_active)

    return clauses


class InvestorRepository(BaseRepository[Investor]):
    """Concrete repository for :class:`Investor` entities."""

    async def list_filtered(self, query: InvestorListQuery) -> Tuple[List[Investor], int]:
        """
        Return one page of investors matching ``query`` and the total count.

        A secondary order on ``id`` keeps pages stable when the sort column
        has ties.
        """
        clauses = build_filter_clauses(query.filters, self.dialect_name)

        count_stmt = select(func.count()).select_from(Investor).where(*clauses)
        total = (await self.db.execute(count_stmt)).scalar_one()

        sort_column = getattr(Investor, query.sort_by)
        order = sort_column.asc() if query.sort_order == "asc" else sort_column.desc()
        stmt = (
            select(Investor)
            .where(*clauses)
            .order_by(order, Investor.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def get_with_relations(self, investor_id: UUID) -> Optional[Investor]:
        """Fetch one investor with contacts, engagements, documents and notes loaded."""
        stmt = (
            select(Investor)
            .where(Investor.id == investor_id)
            .options(
                selectinload(Investor.contacts),
                selectinload(Investor.engagement_history),
                selectinload(Investor.documents),
                selectinload(Investor.notes),
            )
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_for_export(self, ids: Optional[List[UUID]] = None) -> List[Investor]:
        """
        Return investors with their contacts, ordered by name.

        ``ids=None`` exports everything; an empty list exports nothing.
        """
        if ids is not None and not ids:
            return []
        stmt = select(Investor).options(selectinload(Investor.contacts)).order_by(
            Investor.name, Investor.id
        )
        if ids is not None:
            stmt = stmt.where(Investor.id.in_(ids))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def search(self, q: str, limit: int) -> List[Investor]:
        """
        Full-text search over name, description and thesis.

        PostgreSQL parses ``q`` with ``websearch_to_tsquery`` (quoted
        phrases, ``or``, ``-exclusion``) and ranks by ``ts_rank``.  Other
        dialects fall back to a substring match ordered by name.
        """
        if self.dialect_name == "postgresql":
            document = search_document()
            ts_query = func.websearch_to_tsquery(TS_CONFIG, q)
            stmt = (
                select(Investor)
                .where(document.op("@@")(ts_query))
                .order_by(func.ts_rank(document, ts_query).desc(), Investor.name)
                .limit(limit)
            )
        else:
            stmt = (
                select(Investor)
                .where(
                    or_(
                        Investor.name.icontains(q, autoescape=True),
                        Investor.description.icontains(q, autoescape=True),
                    )
                )
                .order_by(Investor.name)
                .limit(limit)
            )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
