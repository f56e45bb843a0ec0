"""Tests for the per-record-type edit form."""

import pytest

from components import record_form


@pytest.mark.parametrize(
    "record_type, hidden",
    [
        ("certificate_requests", {"status", "rejection_reason", "certificate_file", "downloaded"}),
        ("payments", {"status", "void_reason"}),
    ],
)
def test_workflow_columns_are_not_rendered(fake_st, monkeypatch, record_type, hidden):
    monkeypatch.setattr(record_form, "st", fake_st)
    record = {"record_id": "r-1", "status": "approved"}

    fake_st.form_submit_button.side_effect = [True, False]
    action, values = record_form.render_record_form(record_type, record, key="form")

    assert action == "save"
    assert hidden.isdisjoint(values)
