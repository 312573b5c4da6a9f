"""Pagination — pure normalization of page parameters and page metadata.

Invariants:
    - page >= 1 (values < 1 become 1)
    - 1 <= page_size <= MAX_PAGE_SIZE (values < 1 become DEFAULT_PAGE_SIZE)
    - total_pages == ceil(total_items / page_size)
"""

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class PageMeta:
    current_page: int
    page_size: int
    total_pages: int
    total_items: int


def normalize_page_params(page: int | None, page_size: int | None) -> PageParams:
    """Apply defaulting and clamping to caller-supplied page parameters."""
    if page is None or page < 1:
        page = DEFAULT_PAGE
    if page_size is None or page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    if page_size > MAX_PAGE_SIZE:
        page_size = MAX_PAGE_SIZE
    return PageParams(page=page, page_size=page_size)


def count_pages(total_items: int, page_size: int) -> int:
    return math.ceil(total_items / page_size)


def build_page_meta(params: PageParams, total_items: int) -> PageMeta:
    return PageMeta(
        current_page=params.page,
        page_size=params.page_size,
        total_pages=count_pages(total_items, params.page_size),
        total_items=total_items,
    )
