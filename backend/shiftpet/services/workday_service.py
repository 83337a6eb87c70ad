# Overview: Service-layer operations for work sessions; encapsulates business logic and database work.

"""
Workday Service

WHY: A shift is declared once per day with its length; goals scale with
the hours. Declaring again the same day replaces the goals and keeps the
progress already made.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from flask import current_app

from ..errors import NotFoundError
from ..extensions import db
from ..models import WorkSession
from ..time_utils import business_now
from . import pet_rules, pet_service
from .concurrency import atomic, lock_for_update
from .employee_service import get_employee, require_admin


def _session_query(employee_id: int, session_date: date):
    return db.session.query(WorkSession).filter_by(employee_id=employee_id, session_date=session_date)


def locked_session(employee_id: int, session_date: date) -> WorkSession | None:
    return lock_for_update(_session_query(employee_id, session_date)).first()


def start_session(user_id: int, work_hours: Decimal, *, now: datetime | None = None) -> WorkSession:
    now = now or business_now()
    goals = pet_rules.compute_goals(work_hours)

    with atomic("Start work session"):
        employee = get_employee(user_id)
        session = locked_session(employee.id, now.date())
        if session is None:
            session = WorkSession(
                employee_id=employee.id,
                session_date=now.date(),
                current_paid_memberships=0,
                current_credit_cards=0,
                revenue_cents=0,
            )
            db.session.add(session)

        session.work_hours = work_hours
        session.goal_amount_cents = goals.goal_amount_cents
        session.goal_paid_memberships = goals.goal_paid_memberships
        session.goal_credit_cards = goals.goal_credit_cards
        session.goal_met = pet_rules.GoalProgress.of_session(session).goal_met

    current_app.logger.info(
        "Work session for employee %s on %s: %s hours, goals pm=%d cc=%d",
        user_id, now.date().isoformat(), work_hours, goals.goal_paid_memberships, goals.goal_credit_cards,
    )
    return session


def get_today_session(user_id: int, *, now: datetime | None = None) -> dict:
    now = now or business_now()

    with atomic("Load work session"):
        employee = get_employee(user_id)
        session = _session_query(employee.id, now.date()).first()
        if not session:
            raise NotFoundError("No session found for today")
        payload = session.to_dict()
        payload["remaining"] = pet_rules.remaining_goals(session)
    return payload


def update_counts(
    *,
    admin_user_id: int,
    target_user_id: int,
    credit_cards: int | None = None,
    paid_memberships: int | None = None,
    now: datetime | None = None,
) -> dict:
    """
    Admin correction: overwrite today's counters for an employee.

    Happiness and goal_met follow the new counters; health is untouched.
    """
    now = now or business_now()

    with atomic("Update counts"):
        require_admin(admin_user_id)
        employee = get_employee(target_user_id)
        session = locked_session(employee.id, now.date())
        if not session:
            raise NotFoundError(
                "No work session found for today. Employee needs to start their shift first."
            )

        if credit_cards is not None:
            session.current_credit_cards = credit_cards
        if paid_memberships is not None:
            session.current_paid_memberships = paid_memberships

        progress = pet_rules.GoalProgress.of_session(session)
        session.goal_met = progress.goal_met

        stats = pet_service.ensure_stats(employee.id, now=now)
        stats.happiness = progress.happiness

        result = {
            "current_credit_cards": session.current_credit_cards,
            "current_paid_memberships": session.current_paid_memberships,
            "goal_met": bool(session.goal_met),
            "happiness": stats.happiness,
        }

    current_app.logger.info(
        "Admin %s set counts for employee %s: cc=%d pm=%d",
        admin_user_id, target_user_id, result["current_credit_cards"], result["current_paid_memberships"],
    )
    return result
