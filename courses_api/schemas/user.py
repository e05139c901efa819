from enum import Enum
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Annotated, List, Union

from courses_api.schemas.common import PaginatedResponse

MAX_USERS_PER_BATCH = 50


class UserSortField(str, Enum):
    ID = "id"
    FIRST_NAME = "first_name"


class UserCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def email_length(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("Email must be at most 100 characters")
        return value


UserBatchCreate = Annotated[
    List[UserCreate],
    Field(min_length=1, max_length=MAX_USERS_PER_BATCH),
]

# A single user object or an array of them
UserCreatePayload = Union[UserCreate, UserBatchCreate]


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    created_at: int
    updated_at: int


class UserListResponse(PaginatedResponse):
    users: List[UserResponse]


class UserDetailResponse(BaseModel):
    user: UserResponse


class UserBatchData(BaseModel):
    users: List[UserResponse]
    total: int


class UserCreatedResponse(BaseModel):
    success: bool = True
    data: UserResponse


class UserBatchCreatedResponse(BaseModel):
    success: bool = True
    data: UserBatchData
