import math
from dataclasses import dataclass, field
from typing import Any, Callable

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def to_dict(self, serialize: Callable[[Any], dict]) -> dict:
        return {
            "items": [serialize(item) for item in self.items],
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "pages": self.pages,
        }


def clamp_paging(page: int | None, page_size: int | None) -> tuple[int, int]:
    page = max(int(page or 1), 1)
    page_size = min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE)
    return page, page_size


def paginate(query, page: int | None = None, page_size: int | None = None) -> Page:
    """Runs a count plus a limit/offset slice of `query`."""
    page, page_size = clamp_paging(page, page_size)
    total = query.count()
    rows = query.limit(page_size).offset((page - 1) * page_size).all()
    return Page(items=rows, page=page, page_size=page_size, total=total)
