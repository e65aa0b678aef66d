"""
Paginated, filtered listing shared by every list endpoint.

A listing is an equality query over one collection, bounded by ``page`` and
``limit``, reported back as::

    {"items": [...], "total": n, "totalPages": ceil(n / limit), "currentPage": page}

Items come back in storage order; no sort is applied.
"""

from database import serialize
from errors import BadRequest


def pagination_args(args, default_limit):
    """Read ``page`` and ``limit`` from a query-string mapping.

    Raises BadRequest for non-integers, ``page < 1`` or ``limit < 1``.
    """
    try:
        page = int(args.get("page", 1))
        limit = int(args.get("limit", default_limit))
    except (TypeError, ValueError):
        raise BadRequest("Invalid pagination parameters")
    if page < 1 or limit < 1:
        raise BadRequest("Invalid pagination parameters")
    return page, limit


def compose_filter(filters):
    """Equality query from ``{field: value}``; None and empty values are skipped."""
    return {field: value for field, value in (filters or {}).items() if value not in (None, "")}


def paginate(collection, filters=None, page=1, limit=6):
    if page < 1 or limit < 1:
        raise BadRequest("Invalid pagination parameters")

    query = compose_filter(filters)
    skip = (page - 1) * limit
    items = [serialize(doc) for doc in collection.find(query).skip(skip).limit(limit)]
    total = collection.count_documents(query)
    total_pages = (total + limit - 1) // limit

    return {
        "items": items,
        "total": total,
        "totalPages": total_pages,
        "currentPage": page,
    }
