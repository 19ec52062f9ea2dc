"""
PATH: public/pagination.py

PAGINATION (page/limit + page-number window)

page_window(current, total_pages) returns the page numbers a paginator shows,
with None standing for an ellipsis:

- total_pages <= 7       -> [1..N]
- current <= 4           -> [1, 2, 3, 4, 5, None, N]
- current >= N - 3       -> [1, None, N-4 .. N]
- otherwise              -> [1, None, c-1, c, c+1, None, N]

WindowedPagination is the project-wide DRF paginator:
- ?page=<int>   (>= 1, default 1)
- ?limit=<int>  (clamped to [1, 50], default 10)
- response: {"results": [...], "pagination": {page, limit, total, totalPages, pages}}
"""

from __future__ import annotations

import math
from typing import Optional

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
WINDOW_THRESHOLD = 7


def page_window(current: int, total_pages: int) -> list[Optional[int]]:
    if total_pages <= 0:
        return []

    if total_pages <= WINDOW_THRESHOLD:
        return list(range(1, total_pages + 1))

    if current <= 4:
        return [1, 2, 3, 4, 5, None, total_pages]

    if current >= total_pages - 3:
        return [1, None] + list(range(total_pages - 4, total_pages + 1))

    return [1, None, current - 1, current, current + 1, None, total_pages]


def _to_int(raw, default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def parse_page(raw) -> int:
    return max(1, _to_int(raw or 1, 1))


def parse_limit(raw, *, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE) -> int:
    return min(maximum, max(1, _to_int(raw or default, default)))


def total_pages_for(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def pagination_meta(*, page: int, limit: int, total: int) -> dict:
    total_pages = total_pages_for(total, limit)
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "pages": page_window(page, total_pages),
    }


def paginate_queryset(queryset, *, page: int, limit: int):
    """
    Slice a queryset with page/limit (no 404 on out-of-range pages).
    Returns (rows, meta).
    """
    total = queryset.count()
    offset = (page - 1) * limit
    rows = list(queryset[offset : offset + limit])
    return rows, pagination_meta(page=page, limit=limit, total=total)


class WindowedPagination(PageNumberPagination):
    page_query_param = "page"
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = MAX_PAGE_SIZE
    results_key = "results"

    def paginate_queryset(self, queryset, request, view=None):
        self.page_number = parse_page(request.query_params.get(self.page_query_param))
        self.limit = parse_limit(request.query_params.get(self.page_size_query_param))
        rows, self.meta = paginate_queryset(queryset, page=self.page_number, limit=self.limit)
        self.request = request
        return rows

    def get_paginated_response(self, data):
        return Response({self.results_key: data, "pagination": self.meta})

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                self.results_key: schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                        "pages": {"type": "array", "items": {"type": "integer", "nullable": True}},
                    },
                },
            },
        }
