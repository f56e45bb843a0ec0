"""Streamlit app entrypoint for the Parish Records Dashboard."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd
import streamlit as st

from components.filters import render_filters
from components.navbar import render_navbar
from components.pager import render_pager
from components.record_form import render_record_form
from components.table import render_records_table
from components.workflow_actions import render_certificate_actions, render_void_panel
from config import ASSETS_DIR, AUDIT_LOG_FILE, DATA_DIR, LOG_LEVEL, RECORD_TYPES
from services import (
    audit_service,
    certificate_service,
    data_loader,
    filter_service,
    payment_service,
    record_service,
)
from services.event_bus import EventBus, Topic
from utils.helpers import format_currency, format_status, get_current_username
from utils.pagination import PaginationState, paginate

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("parish.app")

st.set_page_config(page_title="Parish Records Dashboard", layout="wide")

AUDIT_PAGE = "audit_log"
SERVICE_ERRORS = (ValueError, KeyError, TimeoutError, FileNotFoundError)


def load_css() -> None:
    """Load app-level CSS styling from the assets directory."""
    css_path = ASSETS_DIR / "styles.css"
    if css_path.exists():
        with css_path.open("r", encoding="utf-8") as css_file:
            st.markdown(f"<style>{css_file.read()}</style>", unsafe_allow_html=True)


def queue_notification(level: str, message: str) -> None:
    """Queue a UI notification for display on the next render pass."""
    st.session_state["notifications"].append((level, message))


def handle_payment_updated(topic: Topic, payload: dict) -> None:
    queue_notification("info", f"Payment records updated ({payload.get('action', 'change')}).")


def handle_record_changed(topic: Topic, payload: dict) -> None:
    logger.info("%s %s on %s", payload.get("action"), payload.get("record_id"), payload.get("record_type"))


def init_session_state() -> None:
    """Initialize required session-state variables."""
    st.session_state.setdefault("user_name", get_current_username())
    st.session_state.setdefault("notifications", [])
    st.session_state.setdefault("pagination", {})
    st.session_state.setdefault("viewed_payment", None)

    if "event_bus" not in st.session_state:
        bus = EventBus()
        bus.subscribe(Topic.RECORD_CHANGED, handle_record_changed)
        bus.subscribe(Topic.PAYMENT_UPDATED, handle_payment_updated)
        st.session_state["event_bus"] = bus


def show_notifications() -> None:
    """Render queued status messages then clear the queue."""
    notifications: List[Tuple[str, str]] = st.session_state.get("notifications", [])
    if not notifications:
        return

    with st.container(border=True):
        st.markdown("### Status")
        for level, message in notifications:
            if level == "success":
                st.success(message)
            elif level == "warning":
                st.warning(message)
            else:
                st.info(message)

    st.session_state["notifications"] = []


def get_pagination(table_key: str) -> PaginationState:
    """Return the page state owned by one table, creating it on first use."""
    return st.session_state["pagination"].setdefault(table_key, PaginationState())


def render_paginated_table(
    dataframe: pd.DataFrame,
    record_type: str,
    table_key: str,
    signature: tuple = (),
) -> Optional[str]:
    """Render one page of ``dataframe`` with its pager; returns the selected record id."""
    state = get_pagination(table_key)
    page_df = paginate(dataframe, state, signature)
    selected_id = render_records_table(page_df, record_type, key=f"{table_key}_table")
    render_pager(
        state.page,
        len(dataframe),
        state.page_size,
        on_page_change=state.set_page,
        on_items_per_page_change=state.set_page_size,
        key=f"{table_key}_pager",
    )
    return selected_id


def render_audit_table(audit_df: pd.DataFrame, table_key: str) -> None:
    """Render audit events with their own pager."""
    state = get_pagination(table_key)
    page_df = paginate(audit_df, state)
    if page_df.empty:
        st.info("No changes recorded yet.")
    else:
        st.dataframe(
            page_df[["change_timestamp", "record_type", "action", "changed_by", "record_id"]],
            hide_index=True,
            width="stretch",
        )
    render_pager(
        state.page,
        len(audit_df),
        state.page_size,
        on_page_change=state.set_page,
        on_items_per_page_change=state.set_page_size,
        key=f"{table_key}_pager",
    )


def render_summary(records_df: pd.DataFrame, record_type: str) -> None:
    """Render headline counts for the page, plus collected totals for payments."""
    metrics: List[Tuple[str, str]] = [("Total", str(len(records_df)))]
    if record_type == "payments":
        metrics.append(("Collected", format_currency(payment_service.total_collected(records_df))))
        for payment_type, total in payment_service.summarize_payments(records_df).items():
            metrics.append((payment_type.replace("_", " ").title(), format_currency(total)))
    else:
        status_counts = records_df["status"].astype(str).value_counts()
        for status in RECORD_TYPES[record_type].get("choices", {}).get("status", []):
            metrics.append((format_status(status), str(int(status_counts.get(status, 0)))))

    for column, (label, value) in zip(st.columns(len(metrics)), metrics):
        with column:
            st.metric(label, value)


def process_form(record_type: str, record_id: Optional[str], action: Optional[str], values: Dict[str, str]) -> bool:
    """Persist a submitted form; returns True when the store changed."""
    if action is None:
        return False

    bus: EventBus = st.session_state["event_bus"]
    user_name = st.session_state["user_name"]
    try:
        if action == "delete" and record_id is not None:
            record_service.remove_record(DATA_DIR, AUDIT_LOG_FILE, record_type, record_id, user_name, bus=bus)
            queue_notification("success", "Record deleted.")
        else:
            record_service.save_record(
                DATA_DIR, AUDIT_LOG_FILE, record_type, values, user_name, record_id=record_id, bus=bus
            )
            queue_notification("success", "Record saved.")
    except SERVICE_ERRORS as exc:
        st.error(str(exc))
        return False
    return True


def process_certificate_action(record_id: str, action: Optional[str], argument: str) -> bool:
    """Run one certificate workflow step; returns True when the request changed."""
    if action is None:
        return False

    bus: EventBus = st.session_state["event_bus"]
    user_name = st.session_state["user_name"]
    try:
        if action == "approve":
            certificate_service.approve_request(DATA_DIR, AUDIT_LOG_FILE, record_id, user_name, bus=bus)
        elif action == "reject":
            certificate_service.reject_request(DATA_DIR, AUDIT_LOG_FILE, record_id, argument, user_name, bus=bus)
        elif action == "complete":
            certificate_service.complete_request(DATA_DIR, AUDIT_LOG_FILE, record_id, argument, user_name, bus=bus)
        elif action == "download":
            certificate_service.mark_downloaded(DATA_DIR, AUDIT_LOG_FILE, record_id, user_name, bus=bus)
    except SERVICE_ERRORS as exc:
        st.error(str(exc))
        return False

    queue_notification("success", f"Certificate request updated ({action}).")
    return True


def process_void(record_id: str, reason: str) -> bool:
    try:
        payment_service.void_payment(
            DATA_DIR,
            AUDIT_LOG_FILE,
            record_id,
            reason,
            st.session_state["user_name"],
            bus=st.session_state["event_bus"],
        )
    except SERVICE_ERRORS as exc:
        st.error(str(exc))
        return False
    return True


def render_record_page(record_type: str) -> None:
    """Render summary, filters, paginated table and editor for one record type."""
    definition = RECORD_TYPES[record_type]
    store_file = data_loader.store_path(DATA_DIR, record_type)
    records_df = data_loader.load_records(store_file, record_type)

    render_summary(records_df, record_type)

    filter_columns = definition.get("filter_columns", [])
    filter_options = filter_service.get_filter_options(records_df, filter_columns)
    search_term, selected_filters = render_filters(filter_options, filter_columns, key=record_type)

    filtered_df = filter_service.apply_search(records_df, search_term, definition.get("search_columns", []))
    filtered_df = filter_service.apply_filters(filtered_df, selected_filters)
    filtered_df = filtered_df.sort_values(by="updated_at", ascending=False, kind="mergesort")

    st.markdown(f"### {definition['label']}")
    st.caption(f"Total Records: {len(filtered_df)}/{len(records_df)}")

    selected_id = render_paginated_table(
        filtered_df,
        record_type,
        table_key=record_type,
        signature=filter_service.filters_signature(search_term, selected_filters),
    )
    selected_record = data_loader.find_record(records_df, selected_id) if selected_id else None

    if record_type == "payments" and selected_id and st.session_state["viewed_payment"] != selected_id:
        st.session_state["viewed_payment"] = selected_id
        payment_service.view_payment(records_df, selected_id, bus=st.session_state["event_bus"])

    st.markdown("---")
    form_col, action_col = st.columns(2)
    with form_col:
        action, values = render_record_form(record_type, selected_record, key=f"{record_type}_form")
    changed = process_form(record_type, selected_id, action, values)

    if selected_record is not None and record_type == "certificate_requests":
        with action_col:
            workflow_action, argument = render_certificate_actions(selected_record, key=f"cert_{selected_id}")
        changed = process_certificate_action(selected_id, workflow_action, argument) or changed
    elif selected_record is not None and record_type == "payments":
        with action_col:
            void_clicked, reason = render_void_panel(selected_record, key=f"pay_{selected_id}")
        if void_clicked:
            changed = process_void(selected_id, reason) or changed

    with st.expander("Recent changes"):
        render_audit_table(
            audit_service.load_audit_log(AUDIT_LOG_FILE, record_type),
            table_key=f"{record_type}_audit",
        )

    if changed:
        st.session_state.pop(f"{record_type}_table", None)
        st.rerun()


def main() -> None:
    """Render and run the Parish Records Dashboard."""
    load_css()
    init_session_state()

    try:
        data_loader.ensure_data_files(DATA_DIR, AUDIT_LOG_FILE)
    except OSError as exc:  # pragma: no cover - streamlit runtime guard
        st.error(f"Application initialization failed: {exc}")
        st.stop()

    page_labels = {record_type: definition["label"] for record_type, definition in RECORD_TYPES.items()}
    page_labels[AUDIT_PAGE] = "Audit Log"
    page = st.sidebar.radio(
        "Records",
        options=list(page_labels),
        format_func=page_labels.get,
        key="active_page",
    )

    render_navbar(st.session_state["user_name"], page_labels[page])
    show_notifications()

    try:
        if page == AUDIT_PAGE:
            render_audit_table(audit_service.load_audit_log(AUDIT_LOG_FILE), table_key=AUDIT_PAGE)
        else:
            render_record_page(page)
    except FileNotFoundError as exc:
        st.error(str(exc))
        st.stop()


if __name__ == "__main__":
    main()
