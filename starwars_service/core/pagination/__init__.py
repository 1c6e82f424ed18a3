"""Cursor-based pagination."""

from __future__ import annotations

from starwars_service.core.pagination.cursor import CursorCodec, CursorData, CursorPosition
from starwars_service.core.pagination.paginator import Page, Paginator, paginate
from starwars_service.core.pagination.schemas import Connection, Edge, PageInfo

__all__ = [
    "Connection",
    "CursorCodec",
    "CursorData",
    "CursorPosition",
    "Edge",
    "Page",
    "PageInfo",
    "Paginator",
    "paginate",
]
