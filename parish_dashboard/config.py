"""Application configuration constants."""

import os
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.getenv("PARISH_DATA_DIR", str(APP_DIR / "data")))
ASSETS_DIR = APP_DIR / "assets"

AUDIT_LOG_FILE = DATA_DIR / "audit_log.csv"

LOG_LEVEL = os.getenv("PARISH_LOG_LEVEL", "INFO").upper()

DATE_FORMAT = "%Y-%m-%d"
CURRENCY_SYMBOL = "₱"
DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = [10, 25, 50, 100]
ALL_OPTION = "All"

RECORD_META_COLUMNS = ["record_id", "created_at", "updated_at", "changed_by"]

AUDIT_COLUMNS = [
    "audit_id",
    "record_type",
    "record_id",
    "action",
    "changed_by",
    "change_timestamp",
    "old_values",
    "new_values",
]

SACRAMENT_STATUSES = ["pending", "approved", "completed", "cancelled"]

RECORD_TYPES = {
    "members": {
        "label": "Members",
        "file": "members.csv",
        "columns": ["name", "email", "phone", "address", "ministry", "date_joined", "status"],
        "required": ["name", "email", "phone"],
        "date_columns": ["date_joined"],
        "choices": {"status": ["Active", "Inactive"]},
        "filter_columns": ["ministry", "status"],
        "search_columns": ["name", "email"],
    },
    "priests": {
        "label": "Priests",
        "file": "priests.csv",
        "columns": ["name", "email", "phone", "ordained_date", "specialty", "status"],
        "required": ["name", "email"],
        "date_columns": ["ordained_date"],
        "choices": {"status": ["active", "inactive"]},
        "filter_columns": ["specialty", "status"],
        "search_columns": ["name", "email", "specialty"],
    },
    "baptisms": {
        "label": "Baptism Records",
        "file": "baptism_records.csv",
        "columns": [
            "child_name",
            "child_birthdate",
            "father_name",
            "mother_name",
            "baptism_date",
            "godfather_name",
            "godmother_name",
            "officiant",
            "certificate_no",
            "status",
        ],
        "required": ["child_name", "baptism_date", "certificate_no"],
        "date_columns": ["child_birthdate", "baptism_date"],
        "choices": {"status": SACRAMENT_STATUSES},
        "filter_columns": ["officiant", "status"],
        "search_columns": ["child_name", "father_name", "mother_name", "certificate_no"],
    },
    "marriages": {
        "label": "Marriage Records",
        "file": "marriage_records.csv",
        "columns": [
            "groom_name",
            "bride_name",
            "marriage_date",
            "marriage_location",
            "officiant",
            "certificate_no",
            "status",
        ],
        "required": ["groom_name", "bride_name", "marriage_date", "certificate_no"],
        "date_columns": ["marriage_date"],
        "choices": {"status": SACRAMENT_STATUSES},
        "filter_columns": ["marriage_location", "status"],
        "search_columns": ["groom_name", "bride_name", "certificate_no"],
    },
    "confirmations": {
        "label": "Confirmation Records",
        "file": "confirmation_records.csv",
        "columns": [
            "confirmand_name",
            "confirmation_date",
            "sponsor_name",
            "officiant",
            "certificate_no",
            "status",
        ],
        "required": ["confirmand_name", "confirmation_date"],
        "date_columns": ["confirmation_date"],
        "choices": {"status": SACRAMENT_STATUSES},
        "filter_columns": ["officiant", "status"],
        "search_columns": ["confirmand_name", "sponsor_name", "certificate_no"],
    },
    "appointments": {
        "label": "Appointments",
        "file": "appointments.csv",
        "columns": [
            "type",
            "client_name",
            "contact_number",
            "appointment_date",
            "appointment_time",
            "event_fee",
            "is_paid",
            "status",
        ],
        "required": ["type", "client_name", "contact_number", "appointment_date"],
        "date_columns": ["appointment_date"],
        "time_columns": ["appointment_time"],
        "amount_columns": ["event_fee"],
        "flag_columns": ["is_paid"],
        "choices": {
            "type": ["Wedding", "Baptism", "Funeral", "Mass Intention", "Blessing", "Other"],
            "status": ["Pending", "Confirmed", "Completed", "Cancelled"],
        },
        "filter_columns": ["type", "status"],
        "search_columns": ["client_name", "contact_number"],
    },
    "service_requests": {
        "label": "Service Requests",
        "file": "service_requests.csv",
        "columns": [
            "request_type",
            "requestor_name",
            "contact_number",
            "preferred_date",
            "assigned_priest",
            "priority",
            "details",
            "status",
        ],
        "required": ["request_type", "requestor_name", "contact_number", "details"],
        "date_columns": ["preferred_date"],
        "choices": {
            "priority": ["normal", "urgent"],
            "status": ["pending", "approved", "scheduled", "completed", "cancelled"],
        },
        "filter_columns": ["request_type", "priority", "status"],
        "search_columns": ["requestor_name", "details", "assigned_priest"],
    },
    "certificate_requests": {
        "label": "Certificate Requests",
        "file": "certificate_requests.csv",
        "columns": [
            "requester_name",
            "certificate_type",
            "purpose",
            "details",
            "status",
            "approved_at",
            "rejection_reason",
            "certificate_file",
            "downloaded",
            "downloaded_at",
        ],
        "required": ["requester_name", "certificate_type", "purpose"],
        "flag_columns": ["downloaded"],
        "choices": {
            "certificate_type": ["baptism", "marriage", "confirmation", "death"],
            "status": ["pending", "processing", "approved", "rejected", "completed"],
        },
        "filter_columns": ["certificate_type", "status"],
        "search_columns": ["requester_name", "purpose"],
        "readonly_columns": [
            "status",
            "approved_at",
            "rejection_reason",
            "certificate_file",
            "downloaded",
            "downloaded_at",
        ],
    },
    "payments": {
        "label": "Payments",
        "file": "payment_records.csv",
        "columns": [
            "payer_name",
            "payment_type",
            "service_name",
            "amount",
            "payment_method",
            "reference_number",
            "payment_date",
            "status",
            "void_reason",
        ],
        "required": ["payer_name", "payment_type", "amount", "payment_method", "payment_date"],
        "date_columns": ["payment_date"],
        "amount_columns": ["amount"],
        "choices": {
            "payment_type": ["sacrament_fee", "donation", "event_fee", "certificate_fee"],
            "payment_method": ["cash", "gcash", "bank_transfer"],
            "status": ["paid", "unpaid", "voided"],
        },
        "filter_columns": ["payment_type", "payment_method", "status"],
        "search_columns": ["payer_name", "reference_number", "service_name"],
        "readonly_columns": ["status", "void_reason"],
    },
}

STATUS_BADGES = {
    "active": "🟢",
    "approved": "🟢",
    "confirmed": "🟢",
    "paid": "🟢",
    "completed": "🔵",
    "scheduled": "🔵",
    "pending": "🟠",
    "processing": "🟠",
    "unpaid": "🟠",
    "rejected": "🔴",
    "cancelled": "🔴",
    "voided": "⚫",
    "inactive": "⚪",
}
