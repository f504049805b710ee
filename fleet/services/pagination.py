# fleet/services/pagination.py
"""Fixed-size page slicing shared by every list endpoint."""

import math
from sqlalchemy.orm import Query
from fleet.config import settings


def last_page_for(total: int, per_page: int) -> int:
    """An empty result still has one (empty) page."""
    return max(1, math.ceil(total / per_page))


def paginate(query: Query, page: int = 1, per_page: int = settings.PAGE_SIZE) -> dict:
    total = query.count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return {
        "data": items,
        "current_page": page,
        "last_page": last_page_for(total, per_page),
        "per_page": per_page,
        "total": total,
    }
