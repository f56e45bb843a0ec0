"""Pagination helpers shared by every record table."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, TypeVar, Union

import pandas as pd

from config import DEFAULT_PAGE_SIZE

MAX_VISIBLE_PAGES = 5
ELLIPSIS = "..."

Rows = TypeVar("Rows", pd.DataFrame, Sequence)


class EllipsisToken(str):
    """Non-clickable gap marker in a page window.

    Compares equal to ``"..."``; ``key`` is unique per position so two gaps in
    the same window never share a widget key.
    """

    position: int

    def __new__(cls, position: int) -> "EllipsisToken":
        token = super().__new__(cls, ELLIPSIS)
        token.position = position
        return token

    @property
    def key(self) -> str:
        return f"ellipsis-{self.position}"


PageToken = Union[int, EllipsisToken]


def compute_total_pages(total_items: int, items_per_page: int) -> int:
    """Return the number of pages, or 0 for an empty dataset."""
    if items_per_page <= 0:
        return 0
    return math.ceil(total_items / items_per_page)


def clamp_page_number(page_number: int, total_pages: int) -> int:
    """Clamp page number to valid bounds."""
    return min(max(page_number, 1), max(total_pages, 1))


def page_slice(page_number: int, page_size: int) -> Tuple[int, int]:
    """Return start/end row offsets for the selected page."""
    start = (page_number - 1) * page_size
    end = start + page_size
    return start, end


def item_range(current_page: int, total_items: int, items_per_page: int) -> Tuple[int, int]:
    """Return the 1-based first and last item numbers shown on a page."""
    end_index = min(current_page * items_per_page, total_items)
    if total_items == 0:
        return 0, end_index
    return (current_page - 1) * items_per_page + 1, end_index


def range_label(current_page: int, total_items: int, items_per_page: int) -> str:
    """Build the "Showing X to Y of Z entries" caption."""
    start, end = item_range(current_page, total_items, items_per_page)
    return f"Showing {start} to {end} of {total_items} entries"


def page_tokens(current_page: int, total_pages: int) -> List[PageToken]:
    """Return the page numbers and gap markers to render, in order."""
    if total_pages <= MAX_VISIBLE_PAGES:
        return list(range(1, total_pages + 1))

    if current_page <= 3:
        numbers: List[object] = [1, 2, 3, 4, None, total_pages]
    elif current_page >= total_pages - 2:
        numbers = [1, None, *range(total_pages - 3, total_pages + 1)]
    else:
        numbers = [
            1,
            None,
            current_page - 1,
            current_page,
            current_page + 1,
            None,
            total_pages,
        ]

    return [
        EllipsisToken(position) if number is None else number
        for position, number in enumerate(numbers)
    ]


def has_previous_page(current_page: int) -> bool:
    return current_page != 1


def has_next_page(current_page: int, total_pages: int) -> bool:
    return not (current_page == total_pages or total_pages == 0)


@dataclass
class PaginationState:
    """Page position owned by one table; lives in Streamlit session state."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    signature: tuple = field(default_factory=tuple)

    def set_page(self, page: int) -> None:
        self.page = page

    def set_page_size(self, page_size: int) -> None:
        self.page_size = page_size
        self.page = 1


def paginate(rows: Rows, state: PaginationState, signature: tuple = ()) -> Rows:
    """Return the rows for the current page of ``state``.

    The page resets to 1 whenever ``signature`` (filters, search term) or the
    page size differs from the previous call, and is pulled back onto the last
    page when the dataset has shrunk below it.
    """
    if state.page_size <= 0:
        raise ValueError(f"Page size must be positive, got {state.page_size}.")

    current_signature = (state.page_size, tuple(signature))
    if current_signature != state.signature:
        state.signature = current_signature
        state.page = 1

    total_pages = compute_total_pages(len(rows), state.page_size)
    state.page = clamp_page_number(state.page, total_pages)

    start, end = page_slice(state.page, state.page_size)
    if isinstance(rows, pd.DataFrame):
        return rows.iloc[start:end]
    return rows[start:end]
