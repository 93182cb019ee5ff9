"""
Client-side filtering and pagination over an already fetched item list.
"""

import math
from typing import Any, Dict, List, NamedTuple, Sequence

ALL = 'All'
ITEMS_PER_PAGE = 8


class Page(NamedTuple):
    items: List[Dict[str, Any]]
    page: int
    per_page: int
    total: int
    total_pages: int
    start_index: int
    end_index: int
    empty_rows: int

    def to_dict(self):
        return {
            'page': self.page,
            'per_page': self.per_page,
            'total': self.total,
            'pages': self.total_pages,
            'start_index': self.start_index,
            'end_index': self.end_index,
            'empty_rows': self.empty_rows,
            'has_prev': self.page > 1,
            'has_next': self.page < self.total_pages,
        }


def _matches(value, wanted) -> bool:
    return not wanted or wanted == ALL or value == wanted


def filter_items(items: Sequence[Dict[str, Any]], search: str = '', category: str = ALL,
                 condition: str = ALL, status: str = ALL) -> List[Dict[str, Any]]:
    """Case-insensitive search over name, category and notes, plus exact facet filters"""
    term = (search or '').strip().lower()
    result = []
    for item in items:
        if term:
            haystack = (item.get(field) or '' for field in ('name', 'category', 'notes'))
            if not any(term in text.lower() for text in haystack):
                continue
        if not _matches(item.get('category'), category):
            continue
        if not _matches(item.get('condition'), condition):
            continue
        if not _matches(item.get('status'), status):
            continue
        result.append(item)
    return result


def paginate(items: Sequence[Dict[str, Any]], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Page:
    """
    Slice one page out of ``items``.

    The page number is clamped into range, so asking for page 0 or a page past
    the end returns the first or last page. ``start_index`` and ``end_index``
    are 1-based for "Showing X to Y of Z"; both are 0 when there is nothing.
    """
    if per_page < 1:
        raise ValueError("per_page must be at least 1")

    total = len(items)
    total_pages = math.ceil(total / per_page)
    page = min(max(page, 1), max(total_pages, 1))

    offset = (page - 1) * per_page
    current = list(items[offset:offset + per_page])

    return Page(
        items=current,
        page=page,
        per_page=per_page,
        total=total,
        total_pages=total_pages,
        start_index=offset + 1 if current else 0,
        end_index=offset + len(current),
        empty_rows=per_page - len(current),
    )
