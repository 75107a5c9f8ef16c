from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Generic, Literal, Sequence, TypeVar

T = TypeVar("T")

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Per-call paging and ordering configuration."""

    page: int = 1
    per_page: int = 10
    order: SortOrder = "asc"

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")
        if self.order not in ("asc", "desc"):
            raise ValueError("order must be 'asc' or 'desc'")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(slots=True)
class Page(Generic[T]):
    """A slice of a result set together with length-aware page metadata."""

    data: list[T]
    current_page: int
    per_page: int
    total: int
    last_page: int = field(init=False)
    from_: int | None = field(init=False)
    to: int | None = field(init=False)

    def __post_init__(self) -> None:
        self.last_page = max(1, math.ceil(self.total / self.per_page))
        if self.data:
            self.from_ = (self.current_page - 1) * self.per_page + 1
            self.to = self.from_ + len(self.data) - 1
        else:
            self.from_ = None
            self.to = None

    @classmethod
    def empty(cls, options: QueryOptions) -> "Page[T]":
        return cls(data=[], current_page=options.page, per_page=options.per_page, total=0)


def paginate(items: Sequence[T], options: QueryOptions) -> Page[T]:
    """Slice an already materialized, already ordered sequence."""
    window = list(items[options.offset : options.offset + options.per_page])
    return Page(
        data=window,
        current_page=options.page,
        per_page=options.per_page,
        total=len(items),
    )
