"""Pydantic models for the REST API."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from boardtables.tables import Table

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class TablesRequest(BaseModel):
    """Request model for generating board tables."""

    organization: str = Field(..., min_length=1, max_length=255)
    project_name: str = Field(default="", max_length=255)
    api_key: str | None = Field(default=None, repr=False)
    cutoff: datetime | None = None
    add_notes_column: bool = False
    request_id: str | None = Field(default=None, max_length=64)


class TableResponse(BaseModel):
    """Response model for one column table."""

    title: str
    headings: list[str]
    rows: list[list[str]]


class TablesResponse(BaseModel):
    """Response model for a generated set of tables."""

    request_id: str
    project_name: str
    cutoff: datetime
    tables: list[TableResponse]


def table_to_response(table: Table) -> TableResponse:
    """Convert a Table to TableResponse."""
    return TableResponse(
        title=table.title,
        headings=list(table.headings),
        rows=[list(row) for row in table.rows],
    )
