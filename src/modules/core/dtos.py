"""Shared DTOs for paginated queries.

- ``PaginationDTO``: page window requested by the caller.
- ``PageMetaDTO``: metadata describing the window that was returned.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class PaginationDTO(BaseModel):
    """Immutable page request; both values are 1-based and positive."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class PageMetaDTO(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total: int
    page: int
    last_page: int = Field(alias="lastPage")

    @classmethod
    def build(cls, total: int, pagination: PaginationDTO) -> PageMetaDTO:
        return cls(
            total=total,
            page=pagination.page,
            last_page=math.ceil(total / pagination.limit),
        )
