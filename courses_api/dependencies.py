from fastapi import Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm import Session
from typing import Iterator, Optional

from courses_api.config import Settings
from courses_api.core.database import MAX_ID, Database
from courses_api.core.pagination import InvalidPagination, PageRequest, resolve_pagination


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with"""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Store handle attached to the running application"""
    return request.app.state.database


def get_db_session(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Session scoped to a single request"""
    with database.session() as session:
        yield session


def get_pagination_params(
    page: int = Query(1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Items per page"),
    settings: Settings = Depends(get_app_settings),
) -> PageRequest:
    """Get pagination parameters"""
    if limit is None:
        limit = settings.DEFAULT_PAGE_SIZE

    try:
        return resolve_pagination(page, limit, max_limit=settings.MAX_PAGE_SIZE)
    except InvalidPagination as e:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("query", e.field),
            "msg": str(e),
            "input": page if e.field == "page" else limit,
        }])


def parse_id(value: str) -> int:
    """Convert a validated digit-only path segment into an id.

    Returns 0 for values no row could have, which never matches.
    """
    number = int(value)
    return number if number <= MAX_ID else 0
