from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session
from typing import Optional, Union

from courses_api.core.database import Database
from courses_api.core.listing import ListQuery, build_filters, execute_list_query, resolve_sort
from courses_api.core.pagination import PageRequest, page_metadata
from courses_api.core.timestamps import with_epoch_timestamps
from courses_api.dependencies import get_database, get_db_session, get_pagination_params, parse_id
from courses_api.models.user import User
from courses_api.schemas.user import (
    UserBatchCreatedResponse, UserCreatedResponse, UserCreatePayload,
    UserDetailResponse, UserListResponse, UserSortField
)
from courses_api.services.records import get_by_id, insert_records, serialize
from courses_api.utils.exceptions import NotFoundError

router = APIRouter()

USER_FIELDS = ("id", "first_name", "last_name", "email", "created_at", "updated_at")

SORT_COLUMNS = {
    UserSortField.ID: User.id,
    UserSortField.FIRST_NAME: User.first_name,
}


@router.get("", response_model=UserListResponse)
async def list_users(
    pagination: PageRequest = Depends(get_pagination_params),
    search: Optional[str] = None,
    order_by: Optional[str] = Query(None, alias="orderBy"),
    orderby: Optional[str] = Query(None, include_in_schema=False),
    database: Database = Depends(get_database),
):
    """List users, paginated, searchable by first name"""
    sort = resolve_sort(orderby or order_by, UserSortField, UserSortField.ID)

    query = ListQuery(
        statement=select(*(getattr(User, name) for name in USER_FIELDS)),
        count_from=User,
        conditions=build_filters(search_column=User.first_name, search=search),
        order_by=(SORT_COLUMNS[sort], User.id),
    )

    result = await execute_list_query(database, query, pagination)

    return {
        "users": [with_epoch_timestamps(row) for row in result.rows],
        **page_metadata(pagination, result.total_items),
    }


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    responses={404: {"description": "User not found"}},
)
def get_user(
    user_id: str = Path(..., pattern=r"^\d+$", description="Numeric user id"),
    session: Session = Depends(get_db_session),
):
    """Get a user by id"""
    user = get_by_id(session, User, parse_id(user_id))

    if user is None:
        raise NotFoundError()

    return {"user": serialize(user, USER_FIELDS)}


@router.post(
    "",
    response_model=Union[UserCreatedResponse, UserBatchCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_users(
    payload: UserCreatePayload = Body(...),
    session: Session = Depends(get_db_session),
):
    """Create a user, or several users from an array"""
    if isinstance(payload, list):
        created = insert_records(
            session,
            User,
            [user.model_dump() for user in payload],
            conflict_message="Failed to create users: an email already exists",
        )
        return UserBatchCreatedResponse(
            data={
                "users": [serialize(user, USER_FIELDS) for user in created],
                "total": len(created),
            }
        )

    [user] = insert_records(
        session,
        User,
        [payload.model_dump()],
        conflict_message="Failed to create user: email already exists",
    )
    return UserCreatedResponse(data=serialize(user, USER_FIELDS))
