from pydantic import BaseModel, Field
from typing import Annotated, List, Union

from courses_api.core.database import MAX_ID
from courses_api.schemas.common import PaginatedResponse

MAX_ENROLLMENTS_PER_BATCH = 100

PositiveId = Annotated[int, Field(gt=0, le=MAX_ID, strict=True)]


class EnrollmentCreate(BaseModel):
    user_id: PositiveId
    course_id: PositiveId


EnrollmentBatchCreate = Annotated[
    List[EnrollmentCreate],
    Field(min_length=1, max_length=MAX_ENROLLMENTS_PER_BATCH),
]

# A single enrollment object or an array of them
EnrollmentCreatePayload = Union[EnrollmentCreate, EnrollmentBatchCreate]


class EnrollmentRead(BaseModel):
    user_id: int
    course_id: int
    created_at: int
    updated_at: int


class EnrollmentDetail(EnrollmentRead):
    """Enrollment with the display fields of its user and course"""
    user_name: str
    course_title: str


class EnrollmentListResponse(PaginatedResponse):
    enrollments: List[EnrollmentDetail]


class EnrollmentDetailResponse(BaseModel):
    enrollment: EnrollmentDetail


class EnrollmentBatchData(BaseModel):
    enrollments: List[EnrollmentRead]
    total: int


class EnrollmentCreatedResponse(BaseModel):
    success: bool = True
    data: EnrollmentRead


class EnrollmentBatchCreatedResponse(BaseModel):
    success: bool = True
    data: EnrollmentBatchData
