import logging
import os

import pyodbc
import streamlit as st
from streamlit_searchbox import st_searchbox

from config import AUDIT_LOG_FILE, DATA_DIR, RECORD_TYPES
from services import data_loader, filter_service, record_service

logger = logging.getLogger("parish.certificate_entry")

ERROR_MESSAGE = (
    "An unexpected error occurred while submitting the certificate request. Please try again later."
)

REQUIRED_MESSAGE = "Please fill in all required fields before submitting."

CERTIFICATE_TYPES = RECORD_TYPES["certificate_requests"]["choices"]["certificate_type"]

PURPOSES = [
    "School",
    "Employment",
    "Travel",
    "Marriage preparation",
    "Personal records",
]

SELECT_PLACEHOLDER = "Select..."


def get_connection():
    host = os.getenv("MSSQL_HOST")
    port = os.getenv("MSSQL_PORT", "1433")
    database = os.getenv("MSSQL_DATABASE")
    user = os.getenv("MSSQL_USER")
    password = os.getenv("MSSQL_PASSWORD")
    driver = os.getenv("MSSQL_DRIVER", "ODBC Driver 18 for SQL Server")

    if not all([host, database, user, password]):
        raise RuntimeError("Missing database connection configuration")

    conn_str = (
        "DRIVER={" + driver + "};"
        f"SERVER={host},{port};"
        f"DATABASE={database};"
        f"UID={user};"
        f"PWD={password};"
        "TrustServerCertificate=yes;"
    )
    return pyodbc.connect(conn_str)


def search_member_directory(term, limit=20):
    if not term:
        return []
    search_sql = """
        SELECT TOP (?)
            id,
            name,
            email
        FROM members
        WHERE name LIKE ? OR email LIKE ?
        ORDER BY name
    """
    like_term = f"%{term}%"
    try:
        with get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(search_sql, limit, like_term, like_term)
            rows = cursor.fetchall()
    except (RuntimeError, pyodbc.Error) as exc:
        logger.info("Member directory unavailable, using local store: %s", exc)
        rows = []

    return [
        {"id": str(row[0]), "name": row[1], "email": row[2]}
        for row in rows
    ]


def search_local_members(term, limit=20):
    store_file = data_loader.store_path(DATA_DIR, "members")
    if not store_file.exists():
        return []
    members_df = data_loader.load_records(store_file, "members")
    matches = filter_service.apply_search(members_df, term, ["name", "email"])
    return [
        {"id": row["record_id"], "name": row["name"], "email": row["email"]}
        for _, row in matches.head(limit).iterrows()
    ]


def search_requester(searchterm, limit=20):
    if not searchterm or len(searchterm.strip()) < 2:
        return []
    results = search_member_directory(searchterm.strip(), limit=limit)
    if not results:
        results = search_local_members(searchterm.strip(), limit=limit)
    return [
        (
            f'{entry["name"]} ({entry["email"]})',
            entry,
        )
        for entry in results
    ]


def is_missing_required(fields):
    return any(
        value is None or value == "" or value == SELECT_PLACEHOLDER for value in fields
    )


def main():
    st.set_page_config(page_title="Certificate Request", layout="centered")

    if "last_request_id" not in st.session_state:
        st.session_state.last_request_id = None

    if st.session_state.last_request_id is not None:
        st.success(
            f"Certificate request submitted. Your request ID is: {st.session_state.last_request_id}."
        )

    st.title("Certificate Request")
    st.caption("Fields marked with * are required.")

    st.markdown("Requester *")
    requester = st_searchbox(
        search_requester,
        placeholder="Search member name or email",
        key="requester_search",
        default=None,
        debounce=200,
    )

    with st.form("certificate_request_form", clear_on_submit=False):
        st.markdown("Certificate Type *")
        certificate_type = st.selectbox(
            "Certificate Type",
            options=[SELECT_PLACEHOLDER, *CERTIFICATE_TYPES],
            format_func=lambda value: value if value == SELECT_PLACEHOLDER else value.title(),
            help="Select the sacrament record to certify",
            label_visibility="collapsed",
        )
        st.markdown("Purpose *")
        purpose = st.selectbox(
            "Purpose",
            options=[SELECT_PLACEHOLDER, *PURPOSES],
            help="Why the certificate is needed",
            label_visibility="collapsed",
        )
        details = st.text_area(
            "Additional Details (optional)",
            help="Names, dates or parish details that help locate the record",
        )

        submitted = st.form_submit_button("Submit Request")

    if not submitted:
        return

    requester_name = (
        None
        if not isinstance(requester, dict)
        else str(requester.get("name", "")).strip()
    )
    if is_missing_required([requester_name, certificate_type, purpose]):
        st.error(REQUIRED_MESSAGE)
        return

    payload = {
        "requester_name": requester_name,
        "certificate_type": certificate_type,
        "purpose": purpose,
        "details": details.strip() if details else "",
        "status": "pending",
    }

    try:
        data_loader.ensure_data_files(DATA_DIR, AUDIT_LOG_FILE)
        new_id, _ = record_service.save_record(
            DATA_DIR,
            AUDIT_LOG_FILE,
            "certificate_requests",
            payload,
            requester_name,
        )
    except (ValueError, TimeoutError, OSError):
        logger.exception("Certificate request could not be saved")
        st.error(ERROR_MESSAGE)
        return

    st.session_state.last_request_id = new_id
    st.rerun()


if __name__ == "__main__":
    main()
