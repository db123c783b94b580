# utils/pagination.py
import math


def parse_pagination(args, default_limit=10, max_limit=100):
    """Read page/limit from query args, clamping bad values instead of failing."""
    try:
        page = int(args.get('page', 1))
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(args.get('limit', default_limit))
    except (TypeError, ValueError):
        limit = default_limit

    page = max(1, page)
    limit = min(max_limit, max(1, limit))
    return page, limit, (page - 1) * limit


def paginate(queryset, page, limit):
    """Apply skip/limit to a mongoengine queryset and wrap the page with its metadata."""
    total_items = queryset.count()
    items = list(queryset.skip((page - 1) * limit).limit(limit))
    return items, pagination_meta(total_items, page, limit)


def pagination_meta(total_items, page, limit):
    total_pages = math.ceil(total_items / limit) if limit else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalItems": total_items,
        "itemsPerPage": limit,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }
