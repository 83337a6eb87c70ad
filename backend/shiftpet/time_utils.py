from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context


DEFAULT_TIMEZONE = "America/Chicago"


def business_timezone() -> ZoneInfo:
    name = DEFAULT_TIMEZONE
    if has_app_context():
        name = current_app.config.get("BUSINESS_TIMEZONE", DEFAULT_TIMEZONE)
    return ZoneInfo(name)


def business_now() -> datetime:
    """
    Server-side 'now' on the store's wall clock (naive, canonical).

    All pet timestamps and session dates are recorded against this clock so
    that "today" and the morning reset cutoff match the shop floor.
    """
    return datetime.now(business_timezone()).replace(tzinfo=None, microsecond=0)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Serializes a naive business-clock datetime as 'YYYY-MM-DDTHH:MM:SS'."""
    if dt is None:
        return None
    return dt.replace(microsecond=0).isoformat()


def to_iso_date(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    return d.isoformat()
