"""
Offset/limit pagination for list endpoints.

`Pages.from_request` reads `page` and `per_page` from the query string; bad
or missing values fall back to the defaults instead of failing the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from starlette.requests import Request

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

PAGE_VAR = "page"
PAGE_SIZE_VAR = "per_page"


def _parse_int(value: str | None, default: int) -> int:
    raw = (value or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Pages:
    page: int
    per_page: int
    page_count: int
    total_count: int
    items: list[Any] = field(default_factory=list)

    @classmethod
    def new(cls, page: int, per_page: int, total: int) -> Pages:
        if per_page <= 0:
            per_page = DEFAULT_PAGE_SIZE
        if per_page > MAX_PAGE_SIZE:
            per_page = MAX_PAGE_SIZE

        # -1 means the total is unknown.
        page_count = -1
        if total >= 0:
            page_count = (total + per_page - 1) // per_page
            if page > page_count:
                page = page_count
        if page < 1:
            page = 1

        return cls(page=page, per_page=per_page, page_count=page_count, total_count=total)

    @classmethod
    def from_request(cls, request: Request, total: int) -> Pages:
        page = _parse_int(request.query_params.get(PAGE_VAR), 1)
        per_page = _parse_int(request.query_params.get(PAGE_SIZE_VAR), DEFAULT_PAGE_SIZE)
        return cls.new(page, per_page, total)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    def link_header(self, base_url: str) -> str:
        """
        Build an RFC 5988 Link header value (first/prev/next/last).
        """

        def link(page: int, rel: str) -> str:
            query = urlencode({PAGE_VAR: page, PAGE_SIZE_VAR: self.per_page})
            return f'<{base_url}?{query}>; rel="{rel}"'

        links: list[str] = []
        if self.page > 1:
            links.append(link(1, "first"))
            links.append(link(self.page - 1, "prev"))
        if self.page_count >= 0 and self.page < self.page_count:
            links.append(link(self.page + 1, "next"))
            links.append(link(self.page_count, "last"))
        elif self.page_count < 0:
            links.append(link(self.page + 1, "next"))
        return ", ".join(links)

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "per_page": self.per_page,
            "page_count": self.page_count,
            "total_count": self.total_count,
            "items": self.items,
        }
