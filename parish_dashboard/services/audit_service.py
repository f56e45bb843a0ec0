"""Audit trail persistence for record changes."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from uuid import uuid4

import pandas as pd

from config import AUDIT_COLUMNS
from utils.helpers import atomic_write_dataframe, file_lock, iso_now, read_csv_or_empty

logger = logging.getLogger(__name__)


def ensure_audit_file(audit_file: Path) -> None:
    """Create the audit file with the expected schema if missing."""
    if audit_file.exists():
        return
    empty_df = pd.DataFrame(columns=AUDIT_COLUMNS)
    atomic_write_dataframe(empty_df, audit_file)


def append_audit_entry(
    audit_file: Path,
    record_type: str,
    record_id: str,
    action: str,
    changed_by: str,
    old_values: dict,
    new_values: dict,
) -> str:
    """Append one audit event with old/new payloads and return its id."""
    ensure_audit_file(audit_file)

    audit_id = str(uuid4())
    with file_lock(audit_file):
        audit_df = read_csv_or_empty(audit_file, AUDIT_COLUMNS)
        new_row = {
            "audit_id": audit_id,
            "record_type": record_type,
            "record_id": str(record_id),
            "action": action,
            "changed_by": changed_by,
            "change_timestamp": iso_now(),
            "old_values": json.dumps(old_values, ensure_ascii=True),
            "new_values": json.dumps(new_values, ensure_ascii=True),
        }
        updated_df = pd.concat([audit_df, pd.DataFrame([new_row])], ignore_index=True)
        atomic_write_dataframe(updated_df[AUDIT_COLUMNS], audit_file)

    logger.debug("Audited %s on %s %s", action, record_type, record_id)
    return audit_id


def load_audit_log(audit_file: Path, record_type: str | None = None) -> pd.DataFrame:
    """Load audit events newest first, optionally for one record type."""
    audit_df = read_csv_or_empty(audit_file, AUDIT_COLUMNS)
    if record_type is not None:
        audit_df = audit_df[audit_df["record_type"] == record_type]
    # ISO timestamps sort lexicographically; the index breaks ties by append order.
    return (
        audit_df.reset_index()
        .sort_values(["change_timestamp", "index"], ascending=False)
        .drop(columns="index")
        .reset_index(drop=True)
    )
