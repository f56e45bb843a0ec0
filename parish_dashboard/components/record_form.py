"""Create/edit/delete form for a single record."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import streamlit as st

from components.table import column_label
from config import RECORD_TYPES
from utils.helpers import to_bool

LONG_TEXT_COLUMNS = {"address", "details", "purpose"}


def render_record_form(
    record_type: str,
    record: Optional[Dict[str, str]],
    key: str,
) -> Tuple[Optional[str], Dict[str, str]]:
    """Render the form and return ("save" | "delete" | None, submitted values)."""
    definition = RECORD_TYPES[record_type]
    choices = definition.get("choices", {})
    flag_columns = definition.get("flag_columns", [])
    readonly_columns = definition.get("readonly_columns", [])
    required = set(definition.get("required", []))
    record = record or {}
    form_key = f"{key}_{record.get('record_id', 'new')}"

    st.markdown("### Edit Record" if record else "### New Record")
    values: Dict[str, str] = {}
    with st.form(form_key, clear_on_submit=not record):
        for column in definition["columns"]:
            if column in readonly_columns:
                continue
            label = column_label(column) + (" *" if column in required else "")
            current = record.get(column, "")
            if column in choices:
                options = choices[column]
                values[column] = st.selectbox(
                    label,
                    options=options,
                    index=options.index(current) if current in options else 0,
                    key=f"{form_key}_{column}",
                )
            elif column in flag_columns:
                values[column] = "true" if st.checkbox(label, value=to_bool(current), key=f"{form_key}_{column}") else "false"
            elif column in LONG_TEXT_COLUMNS:
                values[column] = st.text_area(label, value=current, height=90, key=f"{form_key}_{column}")
            else:
                values[column] = st.text_input(label, value=current, key=f"{form_key}_{column}")

        save_clicked = st.form_submit_button("Save", type="primary")
        delete_clicked = st.form_submit_button("Delete") if record else False

    if delete_clicked:
        return "delete", {}
    if save_clicked:
        return "save", values
    return None, values
