"""``page``/``limit`` query parameters and the pagination block of list responses."""

import math
from dataclasses import dataclass

from fastapi import Query

from shared import settings


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "totalPages": math.ceil(total / self.limit) if total else 0,
        }


def page_params(
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, description="Page size, clamped to the allowed maximum"),
) -> PageParams:
    """Out-of-range values are clamped rather than rejected."""
    return PageParams(
        page=max(1, page),
        limit=min(settings.MAX_PAGE_LIMIT, max(1, limit)),
    )
