"""
Cursor pagination over OKX history endpoints.

Pages are requested strictly one after another: each request carries the
cursor of the previous page's last record as ``after``. Records are returned
raw, in venue order; callers normalize them.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .constants import DEFAULT_PAGE_SIZE, DEFAULT_PAGINATION_CALLS
from .errors import BadRequest

logger = logging.getLogger(__name__)

PageFetcher = Callable[[Dict[str, Any]], Awaitable[List[Dict[str, Any]]]]


async def paginate(
    fetch_page: PageFetcher,
    cursor_field: str,
    limit: Optional[int] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_pages: int = DEFAULT_PAGINATION_CALLS,
) -> List[Dict[str, Any]]:
    """
    Collect records across pages.

    Args:
        fetch_page: Coroutine taking the page params (``limit`` and, after the
            first page, ``after``) and returning the page's records
        cursor_field: Record field holding the cursor, e.g. ``ordId`` or ``billId``
        limit: Maximum number of records to return; ``None`` for no limit
        page_size: Records requested per page
        max_pages: Maximum number of requests

    Returns:
        Concatenated raw records, at most ``limit`` of them

    Raises:
        BadRequest: For non-positive sizes
    """
    if page_size < 1 or max_pages < 1:
        raise BadRequest("page_size and max_pages must be positive")
    if limit is not None and limit < 1:
        raise BadRequest(f"limit must be positive, got {limit}")

    records: List[Dict[str, Any]] = []
    cursor: Optional[str] = None

    for page_number in range(1, max_pages + 1):
        remaining = None if limit is None else limit - len(records)
        request_size = page_size if remaining is None else min(page_size, remaining)
        params: Dict[str, Any] = {"limit": str(request_size)}
        if cursor is not None:
            params["after"] = cursor

        page = await fetch_page(params)
        logger.debug(f"Page {page_number}: {len(page)} records (after={cursor})")

        if not page:
            break
        records.extend(page)

        if limit is not None and len(records) >= limit:
            break
        if len(page) < request_size:
            break

        next_cursor = page[-1].get(cursor_field)
        if next_cursor in (None, "") or next_cursor == cursor:
            logger.warning(f"Stopping pagination: no usable cursor in field {cursor_field!r}")
            break
        cursor = str(next_cursor)
    else:
        logger.debug(f"Pagination stopped after {max_pages} pages")

    if limit is not None:
        return records[:limit]
    return records
