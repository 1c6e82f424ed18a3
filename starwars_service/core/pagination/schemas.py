"""Relay connection schemas.

Plain pydantic models for the Connection / Edge / PageInfo triple. The
GraphQL layer maps them onto its own strawberry types; keeping the models
here lets the paginator be tested without a schema.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Navigation metadata for one page.

    Attributes:
        has_previous_page: Whether matching items exist before this page
        has_next_page: Whether matching items exist after this page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
        total_count: Size of the whole collection, when requested
    """

    has_previous_page: bool = Field(description="Whether previous items exist")
    has_next_page: bool = Field(description="Whether more items exist")
    start_cursor: str | None = Field(default=None, description="Cursor of the first item")
    end_cursor: str | None = Field(default=None, description="Cursor of the last item")
    total_count: int | None = Field(default=None, description="Total count (optional)")


class Edge(BaseModel, Generic[T]):
    """One item of a page together with its cursor."""

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(BaseModel, Generic[T]):
    """A page of items in the Relay connection shape.

    Client navigation:
        # First page
        droids(first: 10)

        # Next page, using endCursor of the previous response
        droids(first: 10, after: "eyJrIjoiZGF0ZXRpbWUi...")

        # Previous page, using startCursor
        droids(last: 10, before: "eyJrIjoiZGF0ZXRpbWUi...")
    """

    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(description="Pagination metadata")

    @property
    def nodes(self) -> list[T]:
        return [edge.node for edge in self.edges]


__all__ = ["Connection", "Edge", "PageInfo"]
