"""Per-record workflow buttons for certificate requests and payments."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import streamlit as st

from services.certificate_service import can_transition
from utils.helpers import format_currency, to_bool


def render_certificate_actions(record: Dict[str, str], key: str) -> Tuple[Optional[str], str]:
    """Return the chosen action ("approve", "reject", "complete", "download") and its argument."""
    status = record.get("status", "") or "pending"
    st.markdown("#### Certificate Workflow")
    st.caption(f"Current status: {status}")

    reason = st.text_input("Rejection reason", key=f"{key}_reason")
    certificate_file = st.text_input(
        "Certificate file",
        value=record.get("certificate_file", ""),
        key=f"{key}_file",
    )

    approve_col, reject_col, complete_col, download_col = st.columns(4)
    with approve_col:
        if st.button("Approve", key=f"{key}_approve", disabled=not can_transition(status, "approved")):
            return "approve", ""
    with reject_col:
        if st.button("Reject", key=f"{key}_reject", disabled=not can_transition(status, "rejected")):
            return "reject", reason
    with complete_col:
        if st.button("Complete", key=f"{key}_complete", disabled=not can_transition(status, "completed")):
            return "complete", certificate_file
    with download_col:
        downloadable = status == "completed" and not to_bool(record.get("downloaded"))
        if st.button("Mark downloaded", key=f"{key}_download", disabled=not downloadable):
            return "download", ""
    return None, ""


def render_void_panel(record: Dict[str, str], key: str) -> Tuple[bool, str]:
    """Render the void control for a payment; returns (clicked, reason)."""
    st.markdown("#### Void Payment")
    st.caption(f"Amount: {format_currency(record.get('amount'))}")
    reason = st.text_input("Reason for voiding", key=f"{key}_void_reason")
    clicked = st.button(
        "Void payment",
        key=f"{key}_void",
        disabled=record.get("status") == "voided",
    )
    return clicked, reason
