"""Urgency badge shown next to every task.

The badge is always derived from the stored ``status`` and ``due_date`` at read time and
never persisted.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

ON_TRACK = "On Track"
AT_RISK = "At Risk"
OVERDUE = "Overdue"

AT_RISK_WINDOW = timedelta(hours=24)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime; naive values are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_badge(status: str, due_date: Optional[datetime], now: Optional[datetime] = None) -> str:
    if due_date is None:
        return ON_TRACK
    # a finished task is never late, whatever its due date
    if status == "Done":
        return ON_TRACK
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    due = as_utc(due_date)
    if now > due:
        return OVERDUE
    if due - now <= AT_RISK_WINDOW:
        return AT_RISK
    return ON_TRACK
