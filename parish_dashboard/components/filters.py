"""Search box and filter dropdowns above a record table."""

from __future__ import annotations

from typing import Dict, List, Tuple

import streamlit as st

from config import ALL_OPTION
from components.table import column_label


def render_filters(options: Dict[str, List[str]], columns: List[str], key: str) -> Tuple[str, Dict[str, str]]:
    """Render the search box plus one dropdown per filter column."""
    slots = st.columns([2, *([1] * len(columns))])

    with slots[0]:
        search_term = st.text_input(
            "Search",
            key=f"{key}_search",
            placeholder="Search records",
        )

    selected_filters: Dict[str, str] = {}
    for slot, column in zip(slots[1:], columns):
        with slot:
            selected_filters[column] = st.selectbox(
                column_label(column),
                options=[ALL_OPTION, *options.get(column, [])],
                key=f"{key}_filter_{column}",
            )
    return search_term, selected_filters
