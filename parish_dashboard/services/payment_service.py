"""Payment summaries and voiding."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from services import data_loader, record_service
from services.event_bus import EventBus, Topic
from utils.helpers import normalize_text

RECORD_TYPE = "payments"


def _collected(payments_df: pd.DataFrame) -> pd.DataFrame:
    collected = payments_df[payments_df["status"].astype(str).str.lower() != "voided"].copy()
    collected["amount"] = pd.to_numeric(collected["amount"], errors="coerce").fillna(0.0)
    return collected


def summarize_payments(payments_df: pd.DataFrame) -> Dict[str, float]:
    """Total non-voided amounts per payment type."""
    if payments_df.empty:
        return {}
    totals = _collected(payments_df).groupby("payment_type")["amount"].sum()
    return {str(payment_type): round(float(total), 2) for payment_type, total in sorted(totals.items())}


def total_collected(payments_df: pd.DataFrame) -> float:
    if payments_df.empty:
        return 0.0
    return round(float(_collected(payments_df)["amount"].sum()), 2)


def view_payment(
    payments_df: pd.DataFrame,
    record_id: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """Return one payment and announce that it was opened."""
    payment = data_loader.find_record(payments_df, record_id)
    if bus is not None:
        bus.publish(Topic.PAYMENT_VIEWED, {"record_type": RECORD_TYPE, "record_id": record_id})
    return payment


def void_payment(
    data_dir: Path,
    audit_file: Path,
    record_id: str,
    reason: str,
    changed_by: str,
    bus: Optional[EventBus] = None,
) -> Dict[str, str]:
    """Mark a payment voided; voided payments drop out of every total."""
    reason = normalize_text(reason)
    if not reason:
        raise ValueError("A reason is required to void a payment.")

    def check_not_voided(payment: Dict[str, str]) -> None:
        if payment.get("status") == "voided":
            raise ValueError("Payment is already voided.")

    _, new_values = record_service.save_record(
        data_dir,
        audit_file,
        RECORD_TYPE,
        {"status": "voided", "void_reason": reason},
        changed_by,
        record_id=record_id,
        action="void",
        bus=bus,
        precondition=check_not_voided,
    )
    return new_values
