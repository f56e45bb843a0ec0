"""Tests for the certificate request workflow."""

import pytest

from services import audit_service, certificate_service, record_service
from services.event_bus import Topic


@pytest.fixture
def request_id(data_dir, audit_file):
    record_id, values = record_service.save_record(
        data_dir,
        audit_file,
        "certificate_requests",
        {"requester_name": "John Dela Cruz", "certificate_type": "Baptism", "purpose": "School"},
        "john",
    )
    assert values["status"] == "pending"
    assert values["certificate_type"] == "baptism"
    return record_id


def test_can_transition():
    assert certificate_service.can_transition("pending", "approved")
    assert certificate_service.can_transition("", "rejected")
    assert not certificate_service.can_transition("pending", "completed")
    assert not certificate_service.can_transition("completed", "rejected")


def test_approve_stamps_approval_time(data_dir, audit_file, request_id, bus_events):
    bus, received = bus_events
    values = certificate_service.approve_request(data_dir, audit_file, request_id, "admin", bus=bus)

    assert values["status"] == "approved"
    assert values["approved_at"].endswith("Z")
    assert received[0][0] == Topic.RECORD_CHANGED
    assert received[0][1]["action"] == "approved"


def test_reject_requires_a_reason(data_dir, audit_file, request_id):
    with pytest.raises(ValueError, match="reason"):
        certificate_service.reject_request(data_dir, audit_file, request_id, "  ", "admin")

    values = certificate_service.reject_request(data_dir, audit_file, request_id, "Record not found in book 12", "admin")
    assert values["status"] == "rejected"
    assert values["rejection_reason"] == "Record not found in book 12"


def test_cannot_complete_before_approval(data_dir, audit_file, request_id):
    with pytest.raises(ValueError, match="Cannot move a pending request to completed"):
        certificate_service.complete_request(data_dir, audit_file, request_id, "certificates/1.pdf", "admin")


def test_complete_requires_a_file(data_dir, audit_file, request_id):
    certificate_service.approve_request(data_dir, audit_file, request_id, "admin")
    with pytest.raises(ValueError, match="certificate file"):
        certificate_service.complete_request(data_dir, audit_file, request_id, "", "admin")


def test_download_is_allowed_once(data_dir, audit_file, request_id):
    with pytest.raises(ValueError, match="not available"):
        certificate_service.mark_downloaded(data_dir, audit_file, request_id, "john")

    certificate_service.approve_request(data_dir, audit_file, request_id, "admin")
    certificate_service.complete_request(data_dir, audit_file, request_id, "certificates/1.pdf", "admin")

    values = certificate_service.mark_downloaded(data_dir, audit_file, request_id, "john")
    assert values["downloaded"] == "true"
    assert values["downloaded_at"]

    with pytest.raises(ValueError, match="already been downloaded"):
        certificate_service.mark_downloaded(data_dir, audit_file, request_id, "john")

    actions = audit_service.load_audit_log(audit_file, "certificate_requests")["action"].tolist()
    assert actions == ["download", "completed", "approved", "create"]


def test_unknown_request(data_dir, audit_file):
    with pytest.raises(KeyError):
        certificate_service.approve_request(data_dir, audit_file, "missing", "admin")


def test_plain_edits_cannot_move_the_workflow(data_dir, audit_file, request_id):
    with pytest.raises(ValueError, match="status can only be changed"):
        record_service.save_record(
            data_dir, audit_file, "certificate_requests", {"status": "rejected"}, "admin", record_id=request_id
        )

    certificate_service.approve_request(data_dir, audit_file, request_id, "admin")
    certificate_service.complete_request(data_dir, audit_file, request_id, "certificates/1.pdf", "admin")
    certificate_service.mark_downloaded(data_dir, audit_file, request_id, "john")

    for values in ({"status": "approved"}, {"downloaded": "false"}, {"certificate_file": ""}):
        with pytest.raises(ValueError, match="can only be changed"):
            record_service.save_record(
                data_dir, audit_file, "certificate_requests", values, "admin", record_id=request_id
            )

    with pytest.raises(ValueError, match="Cannot move a completed request to completed"):
        certificate_service.complete_request(data_dir, audit_file, request_id, "certificates/2.pdf", "admin")
    with pytest.raises(ValueError, match="already been downloaded"):
        certificate_service.mark_downloaded(data_dir, audit_file, request_id, "john")

    _, values = record_service.save_record(
        data_dir, audit_file, "certificate_requests", {"purpose": "Employment"}, "admin", record_id=request_id
    )
    assert values["purpose"] == "Employment"
    assert values["status"] == "completed"
    assert values["downloaded"] == "true"
