"""Shared pydantic configuration for API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from portfolio_api.domain.entities import Pagination


class APIModel(BaseModel):
    """Base model exposing camelCase names on the wire.

    Incoming payloads may use either the camelCase alias or the field name.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(APIModel):
    success: bool = True


class ErrorResponse(APIModel):
    success: bool = False
    error: str


class PaginationRead(APIModel):
    total: int
    page: int
    limit: int
    pages: int
    has_more: bool

    @classmethod
    def from_domain(cls, pagination: Pagination) -> "PaginationRead":
        return cls(
            total=pagination.total,
            page=pagination.page,
            limit=pagination.limit,
            pages=pagination.pages,
            has_more=pagination.has_more,
        )

    @classmethod
    def empty(cls, *, page: int, limit: int) -> "PaginationRead":
        return cls.from_domain(Pagination(total=0, page=page, limit=limit))


__all__ = ["APIModel", "ErrorResponse", "PaginationRead", "SuccessResponse"]
