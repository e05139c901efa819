"""API endpoints package."""

from . import (
    courses,
    enrollments,
    users,
)

__all__ = [
    "courses",
    "enrollments",
    "users",
]
