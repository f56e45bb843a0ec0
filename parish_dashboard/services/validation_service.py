"""Validation logic for record payloads."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

from config import DATE_FORMAT, RECORD_TYPES
from utils.helpers import normalize_text, parse_date, to_bool

MIN_ALLOWED_DATE = date(1900, 1, 1)
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

FieldResult = Tuple[bool, str, str]


def validate_optional_date(value: object, field_name: str) -> FieldResult:
    """Validate optional dates (YYYY-MM-DD, YYYY-MM, or YYYY)."""
    raw_value = normalize_text(value)
    if not raw_value:
        return True, "", ""

    parsed_value: Optional[date] = parse_date(value)
    if parsed_value is None:
        return False, f"{field_name} must be a valid date (YYYY-MM-DD, YYYY-MM, or YYYY).", ""

    if parsed_value < MIN_ALLOWED_DATE:
        return False, f"{field_name} cannot be before {MIN_ALLOWED_DATE.isoformat()}.", ""

    return True, "", parsed_value.strftime(DATE_FORMAT)


def validate_optional_time(value: object, field_name: str) -> FieldResult:
    """Validate optional HH:MM times and zero-pad the hour."""
    raw_value = normalize_text(value)
    if not raw_value:
        return True, "", ""

    match = TIME_PATTERN.fullmatch(raw_value)
    if not match:
        return False, f"{field_name} must be in HH:MM format.", ""

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return False, f"{field_name} must be a valid time of day.", ""
    return True, "", f"{hour:02d}:{minute:02d}"


def validate_amount(value: object, field_name: str) -> FieldResult:
    """Validate a non-negative amount and normalize it to two decimals."""
    raw_value = normalize_text(value).replace(",", "")
    if not raw_value:
        return True, "", ""

    try:
        amount = Decimal(raw_value)
    except InvalidOperation:
        return False, f"{field_name} must be a number.", ""
    if not amount.is_finite():
        return False, f"{field_name} must be a number.", ""
    if amount < 0:
        return False, f"{field_name} cannot be negative.", ""

    try:
        return True, "", str(amount.quantize(Decimal("0.01")))
    except InvalidOperation:
        return False, f"{field_name} is too large.", ""


def validate_email(value: object, field_name: str = "email") -> FieldResult:
    raw_value = normalize_text(value)
    if not raw_value:
        return True, "", ""
    if not EMAIL_PATTERN.fullmatch(raw_value):
        return False, f"{field_name} must be a valid email address.", ""
    return True, "", raw_value.lower()


def validate_choice(value: object, field_name: str, choices: List[str]) -> FieldResult:
    """Match a value against allowed choices, case-insensitively."""
    raw_value = normalize_text(value)
    if not raw_value:
        return True, "", ""

    for choice in choices:
        if choice.lower() == raw_value.lower():
            return True, "", choice
    return False, f"{field_name} must be one of: {', '.join(choices)}.", ""


def validate_record_payload(record_type: str, values: Dict[str, object]) -> Tuple[bool, Optional[str], dict]:
    """Validate a record payload and return normalized values.

    Unknown keys are dropped; every configured column is present in the
    normalized result (empty string when not supplied).
    """
    definition = RECORD_TYPES[record_type]
    date_columns = definition.get("date_columns", [])
    time_columns = definition.get("time_columns", [])
    amount_columns = definition.get("amount_columns", [])
    flag_columns = definition.get("flag_columns", [])
    choices = definition.get("choices", {})

    normalized: Dict[str, str] = {}
    for column in definition["columns"]:
        value = values.get(column, "")
        if column in date_columns:
            valid, error, clean = validate_optional_date(value, column)
        elif column in time_columns:
            valid, error, clean = validate_optional_time(value, column)
        elif column in amount_columns:
            valid, error, clean = validate_amount(value, column)
        elif column in flag_columns:
            valid, error, clean = True, "", "true" if to_bool(value) else "false"
        elif column in choices:
            valid, error, clean = validate_choice(value, column, choices[column])
        elif column == "email":
            valid, error, clean = validate_email(value, column)
        else:
            valid, error, clean = True, "", normalize_text(value)

        if not valid:
            return False, error, {}
        normalized[column] = clean

    missing = [column for column in definition.get("required", []) if not normalized.get(column)]
    if missing:
        return False, f"{', '.join(missing)} is required.", {}

    return True, None, normalized
