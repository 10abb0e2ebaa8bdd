"""Query helpers for list endpoints: criteria, ordering, pages and full walks.

Filters, ordering, offset and limit are handed to the protean query so the
provider does the work; nothing here loads a table to filter it in memory.
"""

import json
from dataclasses import dataclass

from protean.utils.query import Q

from shared import settings


@dataclass
class Listing:
    """One page of records and the number of records matching overall."""

    items: list
    total: int


def order_key(field: str, order: str = "desc") -> str:
    return f"-{field}" if order == "desc" else field


def fetch_page(query, order_by, offset: int = 0, limit: int = settings.DEFAULT_PAGE_LIMIT) -> Listing:
    result = query.order_by(order_by).offset(offset).limit(limit).all()
    return Listing(items=result.items, total=result.total)


def each_record(query, batch_size: int | None = None):
    """Yield every record matching ``query``, a batch at a time, in id order."""
    batch_size = batch_size or settings.QUERY_BATCH_SIZE
    offset = 0
    while True:
        batch = query.order_by("id").offset(offset).limit(batch_size).all().items
        yield from batch
        if len(batch) < batch_size:
            return
        offset += batch_size


def text_search(search: str | None, *fields: str) -> Q | None:
    """Case-insensitive substring match of ``search`` against any of ``fields``."""
    if not search or not search.strip():
        return None

    needle = search.strip()
    criteria = None
    for field in fields:
        clause = Q(**{f"{field}__isnull": False, f"{field}__icontains": needle})
        criteria = clause if criteria is None else criteria | clause
    return criteria


def json_list_contains(field: str, value: str) -> Q:
    """Match records whose JSON-array ``field`` holds ``value``, ignoring case."""
    return Q(**{f"{field}__icontains": json.dumps(value)})


def sort_records(records, field: str, order: str = "desc"):
    """Order records already in hand, such as the children of one aggregate."""

    def key(record):
        value = getattr(record, field)
        # None sorts first ascending, last descending
        return (0, "") if value is None else (1, value)

    return sorted(records, key=key, reverse=order == "desc")
