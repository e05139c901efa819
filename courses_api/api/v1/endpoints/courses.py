from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from typing import Optional, Union

from courses_api.core.database import Database
from courses_api.core.listing import ListQuery, build_filters, execute_list_query, resolve_sort
from courses_api.core.pagination import PageRequest, page_metadata
from courses_api.core.timestamps import with_epoch_timestamps
from courses_api.dependencies import get_database, get_db_session, get_pagination_params, parse_id
from courses_api.models.course import Course
from courses_api.models.enrollment import Enrollment
from courses_api.schemas.course import (
    CourseBatchCreatedResponse, CourseCreatedResponse, CourseCreatePayload,
    CourseDetailResponse, CourseListResponse, CourseSortField
)
from courses_api.services.records import get_by_id, insert_records, serialize
from courses_api.utils.exceptions import NotFoundError

router = APIRouter()

COURSE_FIELDS = ("id", "title", "description", "created_at", "updated_at")

SORT_COLUMNS = {
    CourseSortField.ID: Course.id,
    CourseSortField.TITLE: Course.title,
}


@router.get("", response_model=CourseListResponse)
async def list_courses(
    pagination: PageRequest = Depends(get_pagination_params),
    search: Optional[str] = None,
    order_by: Optional[str] = Query(None, alias="orderBy"),
    orderby: Optional[str] = Query(None, include_in_schema=False),
    database: Database = Depends(get_database),
):
    """List courses with their enrollment counts, paginated"""
    sort = resolve_sort(orderby or order_by, CourseSortField, CourseSortField.ID)

    # Left join so courses without enrollments still appear, once
    query = ListQuery(
        statement=(
            select(
                Course.id,
                Course.title,
                Course.description,
                func.count(Enrollment.course_id).label("enrollments"),
                Course.created_at,
                Course.updated_at,
            )
            .outerjoin(Enrollment, Enrollment.course_id == Course.id)
            .group_by(Course.id)
        ),
        count_from=Course,
        conditions=build_filters(search_column=Course.title, search=search),
        order_by=(SORT_COLUMNS[sort], Course.id),
    )

    result = await execute_list_query(
        database,
        query,
        pagination,
        extra_counts=[select(func.count()).select_from(Enrollment)],
    )

    return {
        "courses": [with_epoch_timestamps(row) for row in result.rows],
        "totalEnrollments": result.extras[0],
        **page_metadata(pagination, result.total_items),
    }


@router.get(
    "/{course_id}",
    response_model=CourseDetailResponse,
    responses={404: {"description": "Course not found"}},
)
def get_course(
    course_id: str = Path(..., pattern=r"^\d+$", description="Numeric course id"),
    session: Session = Depends(get_db_session),
):
    """Get a course by id"""
    course = get_by_id(session, Course, parse_id(course_id))

    if course is None:
        raise NotFoundError()

    return {"course": serialize(course, COURSE_FIELDS)}


@router.post(
    "",
    response_model=Union[CourseCreatedResponse, CourseBatchCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_courses(
    payload: CourseCreatePayload = Body(...),
    session: Session = Depends(get_db_session),
):
    """Create a course, or several courses from an array"""
    if isinstance(payload, list):
        created = insert_records(
            session,
            Course,
            [course.model_dump() for course in payload],
            conflict_message="Failed to create courses: a title already exists",
        )
        return CourseBatchCreatedResponse(
            data={
                "courses": [serialize(course, COURSE_FIELDS) for course in created],
                "total": len(created),
            }
        )

    [course] = insert_records(
        session,
        Course,
        [payload.model_dump()],
        conflict_message="Failed to create course: title already exists",
    )
    return CourseCreatedResponse(data=serialize(course, COURSE_FIELDS))
