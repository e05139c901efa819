from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session
from typing import Any, Dict, Mapping, Optional, Union

from courses_api.core.database import MAX_ID, Database
from courses_api.core.listing import ListQuery, build_filters, execute_list_query
from courses_api.core.pagination import PageRequest, page_metadata
from courses_api.core.timestamps import with_epoch_timestamps
from courses_api.dependencies import get_database, get_db_session, get_pagination_params, parse_id
from courses_api.models.course import Course
from courses_api.models.enrollment import Enrollment
from courses_api.models.user import User
from courses_api.schemas.enrollment import (
    EnrollmentBatchCreatedResponse, EnrollmentCreatedResponse, EnrollmentCreatePayload,
    EnrollmentDetailResponse, EnrollmentListResponse
)
from courses_api.services.records import insert_records, serialize
from courses_api.utils.exceptions import NotFoundError

router = APIRouter()

ENROLLMENT_FIELDS = ("user_id", "course_id", "created_at", "updated_at")


def _joined_enrollments():
    # Inner joins: an enrollment is only listed with both its user and course
    return (
        select(
            Enrollment.user_id,
            Enrollment.course_id,
            User.first_name.label("user_first_name"),
            User.last_name.label("user_last_name"),
            Course.title.label("course_title"),
            Enrollment.created_at,
            Enrollment.updated_at,
        )
        .select_from(Enrollment)
        .join(User, Enrollment.user_id == User.id)
        .join(Course, Enrollment.course_id == Course.id)
    )


def _enrollment_detail(row: Mapping[str, Any]) -> Dict[str, Any]:
    data = with_epoch_timestamps(row)
    first_name = data.pop("user_first_name")
    last_name = data.pop("user_last_name")
    data["user_name"] = f"{first_name} {last_name}"
    return data


@router.get("", response_model=EnrollmentListResponse)
async def list_enrollments(
    pagination: PageRequest = Depends(get_pagination_params),
    user_id: Optional[int] = Query(None, le=MAX_ID, description="Only enrollments of this user"),
    course_id: Optional[int] = Query(None, le=MAX_ID, description="Only enrollments in this course"),
    database: Database = Depends(get_database),
):
    """List enrollments with user and course names, paginated"""
    query = ListQuery(
        statement=_joined_enrollments(),
        count_from=Enrollment,
        conditions=build_filters(
            exact=[(Enrollment.user_id, user_id), (Enrollment.course_id, course_id)]
        ),
        order_by=(Enrollment.id,),
    )

    result = await execute_list_query(database, query, pagination)

    return {
        "enrollments": [_enrollment_detail(row) for row in result.rows],
        **page_metadata(pagination, result.total_items),
    }


@router.get(
    "/{user_id}/{course_id}",
    response_model=EnrollmentDetailResponse,
    responses={404: {"description": "Enrollment not found"}},
)
def get_enrollment(
    user_id: str = Path(..., pattern=r"^\d+$", description="Numeric user id"),
    course_id: str = Path(..., pattern=r"^\d+$", description="Numeric course id"),
    session: Session = Depends(get_db_session),
):
    """Get the enrollment of a user in a course"""
    statement = _joined_enrollments().where(
        Enrollment.user_id == parse_id(user_id),
        Enrollment.course_id == parse_id(course_id),
    )
    row = session.execute(statement).mappings().first()

    if row is None:
        raise NotFoundError()

    return {"enrollment": _enrollment_detail(row)}


@router.post(
    "",
    response_model=Union[EnrollmentCreatedResponse, EnrollmentBatchCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_enrollments(
    payload: EnrollmentCreatePayload = Body(...),
    session: Session = Depends(get_db_session),
):
    """Enroll a user in a course, or create several enrollments from an array"""
    if isinstance(payload, list):
        created = insert_records(
            session,
            Enrollment,
            [enrollment.model_dump() for enrollment in payload],
            conflict_message="Failed to create enrollments: duplicate enrollment or unknown user/course",
        )
        return EnrollmentBatchCreatedResponse(
            data={
                "enrollments": [serialize(e, ENROLLMENT_FIELDS) for e in created],
                "total": len(created),
            }
        )

    [enrollment] = insert_records(
        session,
        Enrollment,
        [payload.model_dump()],
        conflict_message="Failed to create enrollment: duplicate enrollment or unknown user/course",
    )
    return EnrollmentCreatedResponse(data=serialize(enrollment, ENROLLMENT_FIELDS))
