from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Annotated, List, Optional, Union

from courses_api.schemas.common import PaginatedResponse

MAX_COURSES_PER_BATCH = 50


class CourseSortField(str, Enum):
    ID = "id"
    TITLE = "title"


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("description")
    @classmethod
    def empty_description_is_null(cls, value: Optional[str]) -> Optional[str]:
        return value or None


CourseBatchCreate = Annotated[
    List[CourseCreate],
    Field(min_length=1, max_length=MAX_COURSES_PER_BATCH),
]

# A single course object or an array of them
CourseCreatePayload = Union[CourseCreate, CourseBatchCreate]


class CourseResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    created_at: int
    updated_at: int


class CourseListItem(CourseResponse):
    enrollments: int


class CourseListResponse(PaginatedResponse):
    courses: List[CourseListItem]
    totalEnrollments: int


class CourseDetailResponse(BaseModel):
    course: CourseResponse


class CourseBatchData(BaseModel):
    courses: List[CourseResponse]
    total: int


class CourseCreatedResponse(BaseModel):
    success: bool = True
    data: CourseResponse


class CourseBatchCreatedResponse(BaseModel):
    success: bool = True
    data: CourseBatchData
