"""Fixed-size, 1-indexed offset pagination."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T] = field(default_factory=list)
    total_results: int = 0
    total_pages: int = 0


PAGE_SIZE = 25


def page_offset(page: int) -> int:
    """Row offset for a 1-indexed page; pages below 1 read as the first page."""
    return (max(page, 1) - 1) * PAGE_SIZE


def total_pages(total_results: int) -> int:
    return math.ceil(total_results / PAGE_SIZE)
