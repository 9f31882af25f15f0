from sqlalchemy import func
from sqlmodel import select

from app.config import settings


def paginate(
    *,
    session,
    query,
    page: int = 1,
    limit: int | None = None,
):
    """Run ``query`` for one page and return ``(results, meta)``."""
    if page < 1:
        page = 1

    if not limit or limit < 1:
        limit = settings.default_page_size

    offset = (page - 1) * limit

    total = session.exec(
        select(func.count()).select_from(query.subquery())
    ).one()

    results = session.exec(
        query.offset(offset).limit(limit)
    ).all()

    meta = {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": (total + limit - 1) // limit,
    }
    return results, meta
