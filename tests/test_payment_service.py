"""Tests for payment summaries and voiding."""

import pandas as pd
import pytest

from services import data_loader, payment_service, record_service
from services.event_bus import Topic


def payments_frame(rows):
    return pd.DataFrame(rows, columns=["record_id", "payment_type", "amount", "status"])


def test_summarize_skips_voided_payments():
    payments = payments_frame(
        [
            ("1", "donation", "100.00", "paid"),
            ("2", "donation", "50.50", "paid"),
            ("3", "sacrament_fee", "300", "paid"),
            ("4", "donation", "1000", "voided"),
        ]
    )

    assert payment_service.summarize_payments(payments) == {"donation": 150.5, "sacrament_fee": 300.0}
    assert payment_service.total_collected(payments) == 450.5


def test_summaries_of_no_payments():
    empty = payments_frame([])
    assert payment_service.summarize_payments(empty) == {}
    assert payment_service.total_collected(empty) == 0.0


def test_view_payment_announces_the_view(bus_events):
    bus, received = bus_events
    payments = payments_frame([("7", "event_fee", "250", "paid")])

    payment = payment_service.view_payment(payments, "7", bus=bus)

    assert payment["amount"] == "250"
    assert received == [(Topic.PAYMENT_VIEWED, {"record_type": "payments", "record_id": "7"})]


@pytest.fixture
def payment_id(data_dir, audit_file):
    record_id, _ = record_service.save_record(
        data_dir,
        audit_file,
        "payments",
        {
            "payer_name": "Carlos Mendoza",
            "payment_type": "sacrament_fee",
            "service_name": "Baptism",
            "amount": "500",
            "payment_method": "gcash",
            "reference_number": "GC-1029",
            "payment_date": "2025-12-10",
        },
        "accountant",
    )
    return record_id


def test_void_payment(data_dir, audit_file, payment_id, bus_events):
    bus, received = bus_events

    with pytest.raises(ValueError, match="reason"):
        payment_service.void_payment(data_dir, audit_file, payment_id, "", "accountant", bus=bus)

    values = payment_service.void_payment(data_dir, audit_file, payment_id, "Duplicate entry", "accountant", bus=bus)
    assert values["status"] == "voided"
    assert values["void_reason"] == "Duplicate entry"
    assert (Topic.PAYMENT_UPDATED, {"record_type": "payments", "record_id": payment_id, "action": "void"}) in received

    payments = data_loader.load_records(data_loader.store_path(data_dir, "payments"), "payments")
    assert payment_service.total_collected(payments) == 0.0

    with pytest.raises(ValueError, match="already voided"):
        payment_service.void_payment(data_dir, audit_file, payment_id, "Again", "accountant")


def test_status_changes_only_through_voiding(data_dir, audit_file, payment_id):
    with pytest.raises(ValueError, match="status can only be changed"):
        record_service.save_record(data_dir, audit_file, "payments", {"status": "voided"}, "accountant", record_id=payment_id)

    payment_service.void_payment(data_dir, audit_file, payment_id, "Duplicate entry", "accountant")

    with pytest.raises(ValueError, match="status can only be changed"):
        record_service.save_record(data_dir, audit_file, "payments", {"status": "paid"}, "accountant", record_id=payment_id)

    payments = data_loader.load_records(data_loader.store_path(data_dir, "payments"), "payments")
    assert data_loader.find_record(payments, payment_id)["status"] == "voided"
