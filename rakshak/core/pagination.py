"""Limit/offset paging for list endpoints, capped by API_MAX_PAGE_SIZE."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Query, Response
from sqlalchemy.orm import Query as OrmQuery


DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_PAGE_SIZE = 200


def get_max_page_size() -> int:
    try:
        val = int(os.getenv("API_MAX_PAGE_SIZE", str(DEFAULT_MAX_PAGE_SIZE)))
    except ValueError:
        return DEFAULT_MAX_PAGE_SIZE
    return val if val >= 1 else DEFAULT_MAX_PAGE_SIZE


@dataclass(frozen=True)
class PageParams:
    limit: int
    offset: int


def page_params(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    offset: int = Query(0, ge=0),
) -> PageParams:
    return PageParams(limit=min(limit, get_max_page_size()), offset=offset)


def paginate(query: OrmQuery, page: PageParams, response: Optional[Response] = None) -> tuple[list[Any], int]:
    """Apply ``page`` to an ordered query; returns (rows, total before paging)."""
    total = query.order_by(None).count()
    rows = query.offset(page.offset).limit(page.limit).all()
    if response is not None:
        response.headers["X-Total-Count"] = str(total)
        response.headers["X-Limit"] = str(page.limit)
        response.headers["X-Offset"] = str(page.offset)
    return rows, total
