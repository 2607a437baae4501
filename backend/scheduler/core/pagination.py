"""Pagination — 1-based page requests translated to 0-based offsets.

Invariants:
    - page >= 1 and size >= 1 at the boundary, rejected otherwise
    - offset = (page - 1) * size
    - total_pages is 0 for an empty result set
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page number and a fixed page size."""
    page: int
    size: int

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    @property
    def index(self) -> int:
        """0-based page index used by the store."""
        return self.page - 1

    @property
    def offset(self) -> int:
        return self.index * self.size


@dataclass
class Page(Generic[T]):
    """A bounded, ordered slice of a larger ordered result set."""
    items: list[T] = field(default_factory=list)
    page: int = 1
    size: int = 10
    total_items: int = 0

    @property
    def total_pages(self) -> int:
        if self.total_items == 0:
            return 0
        return math.ceil(self.total_items / self.size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
