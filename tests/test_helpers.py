"""Tests for formatting and IO helpers."""

from datetime import date

import pandas as pd
import pytest

from utils import helpers


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1500", "₱1,500.00"),
        ("1234567.5", "₱1,234,567.50"),
        ("-20", "-₱20.00"),
        ("", "₱0.00"),
        ("pending", "pending"),
    ],
)
def test_format_currency(raw, expected):
    assert helpers.format_currency(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-12-09", "December 9, 2025"),
        (date(2024, 6, 20), "June 20, 2024"),
        ("", "N/A"),
        (None, "N/A"),
        ("garbage", "Invalid Date"),
    ],
)
def test_format_date(raw, expected):
    assert helpers.format_date(raw) == expected


def test_format_status():
    assert helpers.format_status("pending") == "🟠 PENDING"
    assert helpers.format_status("Active") == "🟢 ACTIVE"
    assert helpers.format_status("archived") == "ARCHIVED"
    assert helpers.format_status("") == ""


def test_to_bool():
    assert helpers.to_bool("true") is True
    assert helpers.to_bool(" YES ") is True
    assert helpers.to_bool("false") is False
    assert helpers.to_bool("") is False
    assert helpers.to_bool(True) is True


def test_iso_now_is_utc_seconds():
    stamp = helpers.iso_now()
    assert stamp.endswith("Z")
    assert "." not in stamp


def test_atomic_write_and_read_back(tmp_path):
    target = tmp_path / "nested" / "members.csv"
    helpers.atomic_write_dataframe(pd.DataFrame([{"name": "Ana", "phone": "0917"}]), target)

    frame = helpers.read_csv_or_empty(target, ["name", "phone", "ministry"])
    assert frame.to_dict(orient="records") == [{"name": "Ana", "phone": "0917", "ministry": ""}]
    assert not list(target.parent.glob("*.tmp"))


def test_read_missing_csv(tmp_path):
    frame = helpers.read_csv_or_empty(tmp_path / "missing.csv", ["name"])
    assert frame.empty
    assert list(frame.columns) == ["name"]


def test_file_lock_times_out_when_held(tmp_path):
    target = tmp_path / "members.csv"
    with helpers.file_lock(target):
        with pytest.raises(TimeoutError):
            with helpers.file_lock(target, timeout_seconds=0.1):
                pass
    assert not (tmp_path / "members.csv.lock").exists()
