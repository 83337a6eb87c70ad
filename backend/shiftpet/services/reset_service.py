# Overview: Service-layer operations for the morning reset; encapsulates business logic and database work.

"""
Daily Reset Service

WHY: Every workday starts from the same place: pets at full health with no
happiness, and no sessions or sales on the books for today.

TRIGGERS:
- Automatic: the first login at or after DAILY_RESET_HOUR on a day the
  marker has not been stamped yet
- Manual: an admin forces it at any time

ATOMICITY: stats reset, session and sale deletion and the marker stamp
commit together or not at all. The reset only writes constants and deletes
by date, so running it twice in the same window leaves the same state.
"""

from __future__ import annotations

from datetime import date, datetime

from flask import current_app

from ..errors import StoreError
from ..extensions import db
from ..models import AnimalStats, DailyResetMarker, Sale, WorkSession
from ..time_utils import business_now
from . import pet_rules
from .concurrency import atomic, lock_for_update


def _locked_marker() -> DailyResetMarker | None:
    return lock_for_update(
        db.session.query(DailyResetMarker).filter_by(id=DailyResetMarker.SINGLETON_ID)
    ).first()


def _stamp_marker(marker: DailyResetMarker | None, now: datetime) -> DailyResetMarker:
    if marker is None:
        marker = DailyResetMarker(id=DailyResetMarker.SINGLETON_ID)
        db.session.add(marker)
    marker.reset_date = now.date()
    marker.reset_at = now
    return marker


def apply_reset(now: datetime) -> dict:
    """Reset statements for the caller's open transaction. Returns affected row counts."""
    today = now.date()

    pets = db.session.query(AnimalStats).update(
        {
            AnimalStats.health: pet_rules.MAX_STAT,
            AnimalStats.happiness: pet_rules.MIN_STAT,
            AnimalStats.last_fed: now,
            AnimalStats.last_health_reset: today,
        },
        synchronize_session=False,
    )
    sessions = db.session.query(WorkSession).filter(
        WorkSession.session_date == today
    ).delete(synchronize_session=False)
    sales = db.session.query(Sale).filter(
        Sale.session_date == today
    ).delete(synchronize_session=False)

    return {"pets": pets, "sessions": sessions, "sales": sales}


def run_daily_reset(*, now: datetime | None = None) -> date:
    """Unconditional reset (admin path). Raises StoreError after rolling back."""
    now = now or business_now()

    with atomic("Daily reset"):
        _stamp_marker(_locked_marker(), now)
        counts = apply_reset(now)

    current_app.logger.info(
        "Daily reset for %s: %d pets reset, %d sessions and %d sales cleared",
        now.date().isoformat(), counts["pets"], counts["sessions"], counts["sales"],
    )
    return now.date()


def maybe_auto_reset(*, now: datetime | None = None) -> bool:
    """
    Automatic path, run on every login. Returns True when a reset ran.

    A store failure is recorded and swallowed so the login proceeds on the
    pre-reset data.
    """
    now = now or business_now()
    cutoff = current_app.config.get("DAILY_RESET_HOUR", pet_rules.DEFAULT_RESET_HOUR)

    try:
        with atomic("Automatic daily reset"):
            marker = _locked_marker()
            if not pet_rules.should_auto_reset(
                marker_date=marker.reset_date if marker else None,
                now=now,
                cutoff_hour=cutoff,
            ):
                return False
            _stamp_marker(marker, now)
            counts = apply_reset(now)
    except StoreError:
        current_app.logger.exception("Automatic daily reset failed; login continues with current stats")
        return False

    current_app.logger.info(
        "Automatic daily reset for %s: %d pets reset, %d sessions and %d sales cleared",
        now.date().isoformat(), counts["pets"], counts["sessions"], counts["sales"],
    )
    return True


def get_marker() -> dict:
    marker = db.session.get(DailyResetMarker, DailyResetMarker.SINGLETON_ID)
    if not marker:
        return {"reset_date": None, "reset_at": None}
    return marker.to_dict()
