"""Pagination control rendered under each record table."""

from __future__ import annotations

from typing import Callable

import streamlit as st

from config import PAGE_SIZE_OPTIONS
from utils.pagination import (
    ELLIPSIS,
    EllipsisToken,
    compute_total_pages,
    has_next_page,
    has_previous_page,
    page_tokens,
    range_label,
)


def render_pager(
    current_page: int,
    total_items: int,
    items_per_page: int,
    on_page_change: Callable[[int], None],
    on_items_per_page_change: Callable[[int], None],
    key: str = "pager",
) -> None:
    """Render range caption, page-size menu and page buttons.

    The control keeps no state of its own: clicks are forwarded to the two
    callbacks, and the caller owns the current page and page size.
    """
    total_pages = compute_total_pages(total_items, items_per_page)
    tokens = page_tokens(current_page, total_pages)
    size_key = f"{key}_page_size"

    def handle_size_change() -> None:
        on_items_per_page_change(int(st.session_state[size_key]))

    info_col, size_col, nav_col = st.columns([3, 1, 4], vertical_alignment="center")
    with info_col:
        st.caption(range_label(current_page, total_items, items_per_page))
    with size_col:
        st.selectbox(
            "Rows per page",
            options=PAGE_SIZE_OPTIONS,
            index=PAGE_SIZE_OPTIONS.index(items_per_page) if items_per_page in PAGE_SIZE_OPTIONS else 0,
            key=size_key,
            on_change=handle_size_change,
            format_func=lambda size: f"{size} per page",
            label_visibility="collapsed",
        )

    with nav_col:
        slots = st.columns(len(tokens) + 2)
        with slots[0]:
            st.button(
                "‹",
                key=f"{key}_previous",
                help="Previous page",
                disabled=not has_previous_page(current_page),
                on_click=on_page_change,
                args=(current_page - 1,),
            )
        for slot, token in zip(slots[1:-1], tokens):
            with slot:
                if isinstance(token, EllipsisToken):
                    st.button(ELLIPSIS, key=f"{key}_{token.key}", disabled=True)
                    continue
                st.button(
                    str(token),
                    key=f"{key}_page_{token}",
                    type="primary" if token == current_page else "secondary",
                    on_click=on_page_change,
                    args=(token,),
                )
        with slots[-1]:
            st.button(
                "›",
                key=f"{key}_next",
                help="Next page",
                disabled=not has_next_page(current_page, total_pages),
                on_click=on_page_change,
                args=(current_page + 1,),
            )
