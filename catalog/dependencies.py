from typing import Annotated

from fastapi import HTTPException, Path, Query, Request

from catalog.config import settings
from catalog.security import Principal

# Largest value a signed 64-bit INTEGER column or OFFSET can hold.
MAX_SQL_INT = 2**63 - 1

ProductId = Annotated[
    int,
    Path(ge=1, le=MAX_SQL_INT, description="Store-assigned product identity."),
]


class PaginationParams:
    """
    Reusable FastAPI dependency that parses and validates pagination /
    sorting query parameters.

    Usage in a router::

        @router.get("")
        async def list_products(pagination: PaginationParams = Depends()):
            ...

    Attributes
    ----------
    page:
        1-based page number (minimum 1; bounded so the SQL OFFSET fits in
        a 64-bit integer).
    page_size:
        Number of items per page (``size`` on the query string), clamped to
        ``settings.MAX_PAGE_SIZE`` regardless of the value supplied.
    sort_by:
        Column name to sort by.  The repository falls back to ``id`` for
        anything it does not recognise.
    sort_order:
        ``"asc"`` or ``"desc"`` (enforced by the regex pattern).
    """

    def __init__(
        self,
        page: int = Query(
            1,
            ge=1,
            le=MAX_SQL_INT // settings.MAX_PAGE_SIZE + 1,
            description="Page number (1-based).",
        ),
        size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            description="Number of items returned per page.",
        ),
        sort_by: str = Query(
            "id",
            description="Column name to sort results by (id, name or price).",
        ),
        sort_order: str = Query(
            "asc",
            pattern="^(asc|desc)$",
            description="Sort direction: 'asc' or 'desc'.",
        ),
    ) -> None:
        self.page = page
        self.page_size = min(size, settings.MAX_PAGE_SIZE)
        self.sort_by = sort_by
        self.sort_order = sort_order


def current_principal(request: Request) -> Principal:
    """Return the principal authenticated by ``BasicAuthMiddleware``."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": f'Basic realm="{settings.AUTH_REALM}"'},
        )
    return principal
