"""Helper utilities for IO, date parsing, display formatting, and user context."""

from __future__ import annotations

import getpass
import logging
import os
import re
import tempfile
import time
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Generator, Optional

import pandas as pd
from dateutil import parser as date_parser

from config import CURRENCY_SYMBOL, STATUS_BADGES

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "y"}
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%m-%d-%Y", "%B %d, %Y", "%b %d, %Y")
YEAR_MONTH_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})$")
YEAR_PATTERN = re.compile(r"^(?P<year>\d{4})$")
LOCK_POLL_SECONDS = 0.05


def get_current_username() -> str:
    """Return the login name recorded in changed_by columns."""
    try:
        return os.getlogin()
    except OSError:
        return getpass.getuser() or "unknown"


def normalize_text(value: object) -> str:
    """Coerce a CSV cell or widget value into a stripped string ("" for nulls)."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def to_bool(value: object) -> bool:
    """Interpret CSV flag cells such as "true", "1" or "yes"."""
    if isinstance(value, bool):
        return value
    return normalize_text(value).lower() in TRUE_VALUES


def _parse_partial_date(raw_value: str) -> Optional[date]:
    match = YEAR_MONTH_PATTERN.match(raw_value)
    if match and 1 <= int(match["month"]) <= 12:
        return date(int(match["year"]), int(match["month"]), 1)
    match = YEAR_PATTERN.match(raw_value)
    if match:
        return date(int(match["year"]), 1, 1)
    return None


def parse_date(value: object) -> Optional[date]:
    """Parse stored or typed dates.

    Accepts date objects, the common numeric layouts, long month names
    ("December 9, 2025"), a bare year or year-month (first day assumed),
    and finally anything dateutil understands.
    """
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw_value = normalize_text(value)
    if not raw_value:
        return None

    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(raw_value, date_format).date()
        except ValueError:
            continue

    partial = _parse_partial_date(raw_value)
    if partial is not None:
        return partial

    try:
        return date_parser.parse(raw_value).date()
    except (ValueError, OverflowError):
        return None


def format_date(value: object) -> str:
    """Render a date as "December 9, 2025"; blanks become "N/A"."""
    if not normalize_text(value):
        return "N/A"
    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date"
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def format_currency(value: object) -> str:
    """Render an amount in pesos with thousands separators, e.g. "₱1,500.00"."""
    raw_value = normalize_text(value).replace(",", "")
    try:
        amount = float(raw_value) if raw_value else 0.0
    except ValueError:
        return raw_value
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"


def format_status(value: object) -> str:
    """Return the badge label for a workflow status."""
    raw_value = normalize_text(value)
    if not raw_value:
        return ""
    badge = STATUS_BADGES.get(raw_value.lower())
    if badge is None:
        return raw_value.upper()
    return f"{badge} {raw_value.upper()}"


def iso_now() -> str:
    """Return current UTC timestamp in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None).isoformat() + "Z"


@contextmanager
def file_lock(file_path: Path, timeout_seconds: float = 10.0) -> Generator[None, None, None]:
    """Hold ``<file>.lock`` for the duration of a store write.

    Raises TimeoutError if another writer keeps the lock past ``timeout_seconds``.
    """
    lock_path = file_path.with_name(file_path.name + ".lock")
    deadline = time.monotonic() + timeout_seconds

    while True:
        try:
            fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
        except FileExistsError:
            if time.monotonic() > deadline:
                logger.warning("Lock wait timed out for %s", file_path)
                raise TimeoutError(f"Could not acquire lock for {file_path}") from None
            time.sleep(LOCK_POLL_SECONDS)
        else:
            break

    try:
        os.write(fd, str(os.getpid()).encode("utf-8"))
        yield
    finally:
        os.close(fd)
        lock_path.unlink(missing_ok=True)


def atomic_write_dataframe(dataframe: pd.DataFrame, target_path: Path) -> None:
    """Write a store to a sibling temp file, then swap it into place."""
    target_path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=target_path.parent, suffix=".tmp")
    os.close(fd)
    try:
        dataframe.to_csv(temp_name, index=False)
        os.replace(temp_name, target_path)
    except OSError:
        Path(temp_name).unlink(missing_ok=True)
        raise


def read_csv_or_empty(file_path: Path, columns: list[str]) -> pd.DataFrame:
    """Load a store as all-string columns, in ``columns`` order.

    A missing file gives an empty frame; columns absent from an older file
    are filled with "".
    """
    if not file_path.exists():
        return pd.DataFrame(columns=columns)
    dataframe = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    return dataframe.reindex(columns=columns, fill_value="").fillna("")
