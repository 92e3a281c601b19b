"""
Standard API response helpers.

Single items are wrapped as ``{success, data, message?, errors?}``.
Collections use the paged envelope with navigation links::

    {data, page, pageSize, totalCount, totalPages,
     hasPreviousPage, hasNextPage,
     links: {self, first, last, previous, next}}
"""
from __future__ import annotations

import math
from urllib.parse import urlencode
from typing import Any, Optional, Dict

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Create a standard success response."""
    response: Dict[str, Any] = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    return response


def error_response(message: str, errors: Optional[list] = None) -> Dict[str, Any]:
    """Create a standard error response.

    ``errors`` carries field-level or underlying messages; it is left
    out entirely when empty.
    """
    response: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        response["errors"] = errors
    return response


def normalize_page_args(page: Any, page_size: Any) -> tuple[int, int]:
    """Coerce pagination arguments into a usable ``(page, page_size)``.

    Non-numeric values fall back to the defaults, ``page`` below 1
    becomes 1 and a ``page_size`` outside ``1..MAX_PAGE_SIZE`` becomes
    ``DEFAULT_PAGE_SIZE``.
    """
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    try:
        page_size = int(page_size)
    except (TypeError, ValueError):
        page_size = DEFAULT_PAGE_SIZE
    if page < 1:
        page = 1
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size


def paginated_response(
    items: list,
    total: int,
    page: int,
    page_size: int,
    base_path: str,
    extra_params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create a paged collection response with navigation links.

    ``extra_params`` (for example a category filter) are carried over
    into every link, URL-encoded, so following them keeps the same
    query.
    """
    total_pages = math.ceil(total / page_size) if page_size > 0 else 0
    extras = [(key, value) for key, value in (extra_params or {}).items() if value is not None]

    def link(target: int) -> str:
        query = urlencode([("page", target), ("pageSize", page_size)] + extras)
        return f"{base_path}?{query}"

    return {
        "data": items,
        "page": page,
        "pageSize": page_size,
        "totalCount": total,
        "totalPages": total_pages,
        "hasPreviousPage": page > 1,
        "hasNextPage": page < total_pages,
        "links": {
            "self": link(page),
            "first": link(1),
            "last": link(max(total_pages, 1)),
            "previous": link(page - 1) if page > 1 else None,
            "next": link(page + 1) if page < total_pages else None,
        },
    }
