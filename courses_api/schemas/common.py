from pydantic import BaseModel


class PaginatedResponse(BaseModel):
    """Pagination metadata shared by every list response"""
    currentPage: int
    perPage: int
    totalItems: int
    totalPages: int
