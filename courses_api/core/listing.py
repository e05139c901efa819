"""
Shared building blocks of the paginated list endpoints.

A list endpoint resolves its page, builds its filter conditions, picks a
sort column from a closed allow-list, then runs the page query and the
count query concurrently against the store.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.sql import ColumnElement, Select
from starlette.concurrency import run_in_threadpool

from courses_api.core.database import Database
from courses_api.core.pagination import PageRequest

logger = logging.getLogger(__name__)

SortKeyT = TypeVar("SortKeyT", bound=Enum)


# ============ Sort Resolver ============

def resolve_sort(
    token: Optional[str],
    choices: Type[SortKeyT],
    default: SortKeyT,
) -> SortKeyT:
    """Map a client sort token onto an allow-listed key, falling back to default."""
    if not token:
        return default
    try:
        return choices(token.strip().lower())
    except ValueError:
        return default


# ============ Filter Builder ============

def build_filters(
    search_column: Optional[ColumnElement] = None,
    search: Optional[str] = None,
    exact: Sequence[Tuple[ColumnElement, Optional[int]]] = (),
) -> List[ColumnElement]:
    """
    Build the AND-ed conditions of a listing.

    search is a case-insensitive substring match against search_column;
    LIKE wildcards in it match literally. exact pairs columns with ids and only
    positive ids produce a condition. Every value is a bound parameter.
    """
    conditions = []

    if search and search_column is not None:
        conditions.append(search_column.icontains(search, autoescape=True))

    for column, value in exact:
        if value is not None and value > 0:
            conditions.append(column == value)

    return conditions


# ============ Query Executor ============

@dataclass
class ListQuery:
    """A listing: columns/joins to select, the table to count, conditions and order."""
    statement: Select
    count_from: Any
    conditions: List[ColumnElement] = field(default_factory=list)
    order_by: Sequence[ColumnElement] = ()

    def page_statement(self, page: PageRequest) -> Select:
        return (
            self.statement.where(*self.conditions)
            .order_by(*self.order_by)
            .limit(page.limit)
            .offset(page.offset)
        )

    def count_statement(self) -> Select:
        return select(func.count()).select_from(self.count_from).where(*self.conditions)


@dataclass
class ListResult:
    rows: List[Dict[str, Any]]
    total_items: int
    extras: List[int] = field(default_factory=list)


def _fetch_rows(database: Database, statement: Select) -> List[Dict[str, Any]]:
    with database.session() as session:
        return [dict(row) for row in session.execute(statement).mappings()]


def _fetch_scalar(database: Database, statement: Select) -> int:
    with database.session() as session:
        return session.execute(statement).scalar_one()


async def execute_list_query(
    database: Database,
    query: ListQuery,
    page: PageRequest,
    extra_counts: Sequence[Select] = (),
) -> ListResult:
    """
    Run the page query, the count query and any extra scalar queries concurrently.

    Each query gets its own session on the thread pool. Any failure fails
    the whole listing.
    """
    rows, total_items, *extras = await asyncio.gather(
        run_in_threadpool(_fetch_rows, database, query.page_statement(page)),
        run_in_threadpool(_fetch_scalar, database, query.count_statement()),
        *(run_in_threadpool(_fetch_scalar, database, statement) for statement in extra_counts),
    )
    logger.debug(f"Listed {len(rows)} of {total_items} rows (page {page.page}, limit {page.limit})")
    return ListResult(rows=rows, total_items=total_items, extras=list(extras))
