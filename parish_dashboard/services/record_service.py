"""Record changes with their audit entries and change notifications."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from services import audit_service, data_loader
from services.event_bus import EventBus, Topic


def _notify(bus: Optional[EventBus], record_type: str, record_id: str, action: str) -> None:
    if bus is None:
        return
    payload = {"record_type": record_type, "record_id": record_id, "action": action}
    bus.publish(Topic.RECORD_CHANGED, payload)
    if record_type == "payments":
        bus.publish(Topic.PAYMENT_UPDATED, payload)


def save_record(
    data_dir: Path,
    audit_file: Path,
    record_type: str,
    values: Dict[str, object],
    changed_by: str,
    record_id: Optional[str] = None,
    action: Optional[str] = None,
    bus: Optional[EventBus] = None,
    precondition: Optional[Callable[[Dict[str, str]], None]] = None,
) -> Tuple[str, Dict[str, str]]:
    """Create (no ``record_id``) or update a record, then audit and notify.

    Updates named by a workflow ``action`` may set workflow-owned columns;
    plain edits may not. ``precondition`` is checked against the stored
    record under the store lock. Returns the record id and its stored field
    values.
    """
    store_file = data_loader.store_path(data_dir, record_type)
    if record_id is None:
        record_id, new_values = data_loader.create_record(store_file, record_type, values, changed_by)
        old_values: Dict[str, str] = {}
        action = action or "create"
    else:
        old_values, new_values = data_loader.update_record(
            store_file,
            record_type,
            record_id,
            values,
            changed_by,
            precondition=precondition,
            allow_readonly=action not in (None, "update"),
        )
        action = action or "update"

    audit_service.append_audit_entry(
        audit_file, record_type, record_id, action, changed_by, old_values, new_values
    )
    _notify(bus, record_type, record_id, action)
    return record_id, new_values


def remove_record(
    data_dir: Path,
    audit_file: Path,
    record_type: str,
    record_id: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """Delete a record, audit the removal, and notify subscribers."""
    store_file = data_loader.store_path(data_dir, record_type)
    old_values = data_loader.delete_record(store_file, record_type, record_id)
    audit_service.append_audit_entry(
        audit_file, record_type, record_id, "delete", changed_by, old_values, {}
    )
    _notify(bus, record_type, record_id, "delete")
    return old_values
