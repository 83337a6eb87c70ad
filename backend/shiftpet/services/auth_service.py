# Overview: Service-layer operations for employee login; settles the pet's stats for the day.

"""
Auth Service

WHY: Identity is provisioned externally; this service only resolves who is
calling. Login is where the pet's day is settled: the morning reset runs
first, then idle-time decay is applied to the caller's pet.
"""

from __future__ import annotations

from datetime import datetime

from flask import current_app

from ..errors import NotFoundError
from ..extensions import db
from ..models import WorkSession
from ..time_utils import business_now
from . import pet_rules, pet_service, reset_service
from .employee_service import get_employee_by_username
from .concurrency import atomic


def has_session_on(employee_id: int, session_date) -> bool:
    return db.session.query(
        db.session.query(WorkSession.id)
        .filter_by(employee_id=employee_id, session_date=session_date)
        .exists()
    ).scalar()


def login(username: str, *, now: datetime | None = None) -> dict:
    """
    Log an employee in and settle their pet's stats for this visit.

    Steps:
    1. Automatic morning reset (failure is logged, login continues)
    2. Resolve the employee
    3. Create stats on first login, then apply decay against the stored
       last_fed and advance last_health_reset to today
    """
    now = now or business_now()
    reset_performed = reset_service.maybe_auto_reset(now=now)

    with atomic("Login"):
        employee = get_employee_by_username(username)
        if not employee:
            raise NotFoundError("User not found. Please contact your manager to set up your account.")

        stats = pet_service.ensure_stats(employee.id, now=now)
        stats.health = pet_rules.decay_health(
            health=stats.health,
            last_fed=stats.last_fed,
            now=now,
            last_health_reset=stats.last_health_reset,
            has_session_today=has_session_on(employee.id, now.date()),
            per_hour=current_app.config.get("HEALTH_DECAY_PER_HOUR", pet_rules.DEFAULT_DECAY_PER_HOUR),
        )
        stats.last_health_reset = now.date()

        user = employee.to_dict()
        user.update(pet_service.stats_payload(stats))

    return {"user": user, "reset_performed": reset_performed}
