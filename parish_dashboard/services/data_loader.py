"""CSV record stores for every record type shown on the dashboard."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
from uuid import uuid4

import pandas as pd

from config import AUDIT_COLUMNS, RECORD_META_COLUMNS, RECORD_TYPES
from services import validation_service
from utils.helpers import atomic_write_dataframe, file_lock, iso_now, read_csv_or_empty

logger = logging.getLogger(__name__)


def get_record_type(record_type: str) -> dict:
    """Return the configured definition for a record type."""
    try:
        return RECORD_TYPES[record_type]
    except KeyError:
        raise KeyError(f"Unknown record type: {record_type}") from None


def store_columns(record_type: str) -> List[str]:
    """Return the CSV column order: id, record fields, then bookkeeping."""
    definition = get_record_type(record_type)
    return ["record_id", *definition["columns"], *RECORD_META_COLUMNS[1:]]


def store_path(data_dir: Path, record_type: str) -> Path:
    return data_dir / get_record_type(record_type)["file"]


def ensure_data_files(data_dir: Path, audit_file: Path) -> None:
    """Ensure data directory and one CSV per record type exist."""
    data_dir.mkdir(parents=True, exist_ok=True)

    for record_type in RECORD_TYPES:
        path = store_path(data_dir, record_type)
        if not path.exists():
            logger.info("Creating empty %s store at %s", record_type, path)
            atomic_write_dataframe(pd.DataFrame(columns=store_columns(record_type)), path)

    if not audit_file.exists():
        atomic_write_dataframe(pd.DataFrame(columns=AUDIT_COLUMNS), audit_file)


def load_records(store_file: Path, record_type: str) -> pd.DataFrame:
    """Load a record store with the configured schema."""
    if not store_file.exists():
        raise FileNotFoundError(f"Missing required file: {store_file}")
    return read_csv_or_empty(store_file, store_columns(record_type))


def find_record(dataframe: pd.DataFrame, record_id: str) -> Dict[str, str]:
    """Return one record as a dict; unknown ids raise KeyError."""
    matches = dataframe[dataframe["record_id"].astype(str) == str(record_id)]
    if matches.empty:
        raise KeyError(f"Record not found: {record_id}")
    return {column: str(value) for column, value in matches.iloc[0].items()}


def _validated(record_type: str, values: Dict[str, object]) -> Dict[str, str]:
    valid, error_message, normalized_values = validation_service.validate_record_payload(record_type, values)
    if not valid:
        raise ValueError(error_message or "Invalid record payload.")
    return normalized_values


def _with_default_status(record_type: str, values: Dict[str, object]) -> Dict[str, object]:
    statuses = get_record_type(record_type).get("choices", {}).get("status")
    if statuses and not str(values.get("status", "") or "").strip():
        return {**values, "status": statuses[0]}
    return values


def _guard_readonly(record_type: str, old_values: Dict[str, str], new_values: Dict[str, str]) -> None:
    """Refuse changes to columns that only a workflow step may set."""
    readonly_columns = get_record_type(record_type).get("readonly_columns", [])
    changed = [column for column in readonly_columns if new_values.get(column, "") != old_values.get(column, "")]
    if changed:
        raise ValueError(f"{', '.join(changed)} can only be changed through the {record_type} workflow.")


def create_record(
    store_file: Path,
    record_type: str,
    values: Dict[str, object],
    changed_by: str,
) -> Tuple[str, Dict[str, str]]:
    """Validate and append a new record; returns its id and stored values.

    Workflow-owned columns must be left at their initial values.
    """
    readonly_columns = get_record_type(record_type).get("readonly_columns", [])
    normalized_values = _validated(record_type, _with_default_status(record_type, values))
    if readonly_columns:
        editable = {column: value for column, value in values.items() if column not in readonly_columns}
        initial_values = _validated(record_type, _with_default_status(record_type, editable))
        _guard_readonly(record_type, initial_values, normalized_values)
    columns = store_columns(record_type)

    with file_lock(store_file):
        records_df = read_csv_or_empty(store_file, columns)
        record_id = str(uuid4())
        timestamp = iso_now()
        new_row = {
            "record_id": record_id,
            **normalized_values,
            "created_at": timestamp,
            "updated_at": timestamp,
            "changed_by": changed_by,
        }
        updated_df = pd.concat([records_df, pd.DataFrame([new_row])], ignore_index=True)
        atomic_write_dataframe(updated_df[columns], store_file)

    logger.info("Created %s record %s", record_type, record_id)
    return record_id, normalized_values


def update_record(
    store_file: Path,
    record_type: str,
    record_id: str,
    values: Dict[str, object],
    changed_by: str,
    precondition: Optional[Callable[[Dict[str, str]], None]] = None,
    allow_readonly: bool = False,
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Apply a partial update to one record; returns old and new field values.

    ``precondition`` receives the stored record while the store lock is held
    and may raise to abort the update. Workflow-owned columns are rejected
    unless ``allow_readonly`` is set.
    """
    definition = get_record_type(record_type)
    columns = store_columns(record_type)

    with file_lock(store_file):
        records_df = read_csv_or_empty(store_file, columns)
        existing = find_record(records_df, record_id)
        if precondition is not None:
            precondition(existing)
        old_values = {column: existing.get(column, "") for column in definition["columns"]}

        merged = {**old_values, **values}
        normalized_values = _validated(record_type, merged)
        if not allow_readonly:
            _guard_readonly(record_type, old_values, normalized_values)

        row_mask = records_df["record_id"].astype(str) == str(record_id)
        for column, value in normalized_values.items():
            records_df.loc[row_mask, column] = value
        records_df.loc[row_mask, "updated_at"] = iso_now()
        records_df.loc[row_mask, "changed_by"] = changed_by
        atomic_write_dataframe(records_df[columns], store_file)

    logger.info("Updated %s record %s", record_type, record_id)
    return old_values, normalized_values


def delete_record(store_file: Path, record_type: str, record_id: str) -> Dict[str, str]:
    """Remove one record and return the values it held."""
    definition = get_record_type(record_type)
    columns = store_columns(record_type)

    with file_lock(store_file):
        records_df = read_csv_or_empty(store_file, columns)
        existing = find_record(records_df, record_id)
        remaining_df = records_df[records_df["record_id"].astype(str) != str(record_id)]
        atomic_write_dataframe(remaining_df[columns], store_file)

    logger.info("Deleted %s record %s", record_type, record_id)
    return {column: existing.get(column, "") for column in definition["columns"]}
