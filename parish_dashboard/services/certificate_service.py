"""Certificate request approval, rejection, completion and download."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from services import record_service
from services.event_bus import EventBus
from utils.helpers import iso_now, normalize_text, to_bool

RECORD_TYPE = "certificate_requests"

ALLOWED_TRANSITIONS = {
    "pending": {"processing", "approved", "rejected"},
    "processing": {"approved", "rejected"},
    "approved": {"completed", "rejected"},
    "rejected": {"pending"},
    "completed": set(),
}


def can_transition(current_status: str, target_status: str) -> bool:
    return target_status in ALLOWED_TRANSITIONS.get(current_status or "pending", set())


def _transition(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    target_status: str,
    changed_by: str,
    extra_values: Dict[str, str],
    bus: Optional[EventBus],
) -> Dict[str, str]:
    def check_transition(current: Dict[str, str]) -> None:
        current_status = current.get("status", "")
        if not can_transition(current_status, target_status):
            raise ValueError(f"Cannot move a {current_status or 'pending'} request to {target_status}.")

    _, new_values = record_service.save_record(
        data_dir,
        audit_file,
        RECORD_TYPE,
        {"status": target_status, **extra_values},
        changed_by,
        record_id=record_id,
        action=target_status,
        bus=bus,
        precondition=check_transition,
    )
    return new_values


def approve_request(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    return _transition(
        data_dir, audit_file, record_id, "approved", changed_by,
        {"approved_at": iso_now(), "rejection_reason": ""}, bus,
    )


def reject_request(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    reason: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    reason = normalize_text(reason)
    if not reason:
        raise ValueError("A rejection reason is required.")
    return _transition(
        data_dir, audit_file, record_id, "rejected", changed_by, {"rejection_reason": reason}, bus,
    )


def complete_request(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    certificate_file: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """Attach the issued certificate file and mark the request completed."""
    certificate_file = normalize_text(certificate_file)
    if not certificate_file:
        raise ValueError("A certificate file is required to complete the request.")
    return _transition(
        data_dir, audit_file, record_id, "completed", changed_by,
        {"certificate_file": certificate_file, "downloaded": "false", "downloaded_at": ""}, bus,
    )


def mark_downloaded(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """Record the single permitted download of a completed certificate."""

    def check_downloadable(current: Dict[str, str]) -> None:
        if current.get("status") != "completed" or not current.get("certificate_file"):
            raise ValueError("Certificate not available.")
        if to_bool(current.get("downloaded")):
            raise ValueError(f"Certificate has already been downloaded ({current.get('downloaded_at')}).")

    _, new_values = record_service.save_record(
        data_dir,
        audit_file,
        RECORD_TYPE,
        {"downloaded": "true", "downloaded_at": iso_now()},
        changed_by,
        record_id=record_id,
        action="download",
        bus=bus,
        precondition=check_downloadable,
    )
    return new_values
