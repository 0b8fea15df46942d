from typing import Any, Callable, Dict, Optional

from sqlalchemy import func
from sqlmodel import Session, select

MAX_PAGE_SIZE = 100


def paginate(
    *,
    session: Session,
    query,
    page: int = 1,
    limit: int = 10,
    serialize: Optional[Callable[[Any], Any]] = None,
) -> Dict[str, Any]:
    """
    Run ``query`` for one page of results.

    Out-of-range ``page`` and ``limit`` values are clamped rather than
    rejected so listing links never 400. ``serialize`` is applied to every
    row of the page.
    """
    page = max(page, 1)
    limit = min(limit, MAX_PAGE_SIZE) if limit >= 1 else 10

    total = session.exec(
        select(func.count()).select_from(query.subquery())
    ).one()

    rows = session.exec(
        query.offset((page - 1) * limit).limit(limit)
    ).all()

    return {
        "total_items": total,
        "total_pages": (total + limit - 1) // limit,
        "current_page": page,
        "limit": limit,
        "has_next": page * limit < total,
        "results": [serialize(row) for row in rows] if serialize else list(rows),
    }
