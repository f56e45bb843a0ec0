"""Read-only record table with display formatting and row selection."""

from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from config import RECORD_TYPES
from utils.helpers import format_currency, format_date, format_status, to_bool


def column_label(column: str) -> str:
    return column.replace("_", " ").title()


def format_records(page_df: pd.DataFrame, record_type: str) -> pd.DataFrame:
    """Return a display copy: dates spelled out, amounts in pesos, status badges."""
    definition = RECORD_TYPES[record_type]
    display_columns = [column for column in definition["columns"] if column in page_df.columns]
    display_df = page_df[display_columns].copy()

    for column in definition.get("date_columns", []):
        if column in display_df.columns:
            display_df[column] = display_df[column].apply(format_date)
    for column in definition.get("amount_columns", []):
        if column in display_df.columns:
            display_df[column] = display_df[column].apply(format_currency)
    for column in definition.get("flag_columns", []):
        if column in display_df.columns:
            display_df[column] = display_df[column].apply(lambda value: "Yes" if to_bool(value) else "No")
    if "status" in display_df.columns:
        display_df["status"] = display_df["status"].apply(format_status)

    return display_df.rename(columns=column_label).reset_index(drop=True)


def render_records_table(page_df: pd.DataFrame, record_type: str, key: str) -> Optional[str]:
    """Render one page of records and return the id of the selected row, if any."""
    if page_df.empty:
        st.info("No records found.")
        return None

    page_df = page_df.reset_index(drop=True)
    event = st.dataframe(
        format_records(page_df, record_type),
        key=key,
        hide_index=True,
        width="stretch",
        on_select="rerun",
        selection_mode="single-row",
    )

    selected_rows = list(event.selection.rows) if event is not None else []
    if not selected_rows or selected_rows[0] >= len(page_df):
        return None
    return str(page_df.loc[selected_rows[0], "record_id"])
