"""Tests for record changes with audit entries and notifications."""

import json

from services import audit_service, record_service
from services.event_bus import Topic

PAYMENT = {
    "payer_name": "Ana Garcia",
    "payment_type": "donation",
    "amount": "1,500",
    "payment_method": "cash",
    "payment_date": "2025-12-09",
}


def test_create_update_delete_are_each_audited(data_dir, audit_file, bus_events):
    bus, received = bus_events
    record_id, values = record_service.save_record(
        data_dir,
        audit_file,
        "priests",
        {"name": "Fr. Joseph Cruz", "email": "joseph@parish.org"},
        "admin",
        bus=bus,
    )
    assert values["status"] == "active"

    record_service.save_record(
        data_dir, audit_file, "priests", {"specialty": "Youth"}, "admin", record_id=record_id, bus=bus
    )
    record_service.remove_record(data_dir, audit_file, "priests", record_id, "admin", bus=bus)

    audit_log = audit_service.load_audit_log(audit_file, "priests")
    assert audit_log["action"].tolist() == ["delete", "update", "create"]
    assert set(audit_log["record_id"]) == {record_id}

    update_entry = audit_log[audit_log["action"] == "update"].iloc[0]
    assert json.loads(update_entry["old_values"])["specialty"] == ""
    assert json.loads(update_entry["new_values"])["specialty"] == "Youth"

    assert [topic for topic, _ in received] == [Topic.RECORD_CHANGED] * 3
    assert [payload["action"] for _, payload in received] == ["create", "update", "delete"]


def test_payment_changes_announce_payment_updates(data_dir, audit_file, bus_events):
    bus, received = bus_events
    record_id, values = record_service.save_record(data_dir, audit_file, "payments", PAYMENT, "accountant", bus=bus)

    assert values["amount"] == "1500.00"
    assert values["status"] == "paid"
    assert [topic for topic, _ in received] == [Topic.RECORD_CHANGED, Topic.PAYMENT_UPDATED]
    assert received[1][1]["record_id"] == record_id


def test_save_without_bus(data_dir, audit_file):
    record_id, _ = record_service.save_record(
        data_dir,
        audit_file,
        "confirmations",
        {"confirmand_name": "Sarah Jane Reyes", "confirmation_date": "2024-05-15"},
        "secretary",
    )
    assert audit_service.load_audit_log(audit_file)["record_id"].tolist() == [record_id]
