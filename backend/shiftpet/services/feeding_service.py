# Overview: Service-layer operations for recording sales; the pet is "fed" by every sale.

"""
Feeding Service (Sale Processor)

WHY: A sale is the only thing that raises health. One sale touches three
tables (ledger, session, stats) and all three move together or not at all.

CONCURRENCY: counters, revenue and health are changed with in-place SQL
expressions (col = col + n) so two sales for the same employee can
interleave without losing an update. Happiness and goal_met are derived
from the counters read back after the increment.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import case

from ..errors import NotFoundError
from ..extensions import db
from ..models import AnimalStats, Sale, WorkSession
from ..time_utils import business_now
from . import pet_rules, pet_service
from .concurrency import atomic
from .employee_service import get_employee
from .workday_service import locked_session


def _capped_health(delta: int):
    raised = AnimalStats.health + delta
    return case((raised > pet_rules.MAX_STAT, pet_rules.MAX_STAT), else_=raised)


def record_sale(
    *,
    user_id: int,
    sale: pet_rules.SaleInput,
    overridden_high_value: bool = False,
    now: datetime | None = None,
) -> dict:
    now = now or business_now()
    today = now.date()

    with atomic("Record sale"):
        employee = get_employee(user_id)
        session = locked_session(employee.id, today)
        if not session:
            raise NotFoundError("No work session found for today. Start your shift first.")

        db.session.add(Sale(
            employee_id=employee.id,
            session_date=today,
            revenue_cents=sale.revenue_cents,
            has_credit_card=sale.has_credit_card,
            has_paid_membership=sale.has_paid_membership,
            has_warranty=sale.has_warranty,
            overridden_high_value=overridden_high_value,
            created_at=now,
        ))

        session_changes = {WorkSession.revenue_cents: WorkSession.revenue_cents + sale.revenue_cents}
        if sale.has_credit_card:
            session_changes[WorkSession.current_credit_cards] = WorkSession.current_credit_cards + 1
        if sale.has_paid_membership:
            session_changes[WorkSession.current_paid_memberships] = WorkSession.current_paid_memberships + 1
        db.session.query(WorkSession).filter_by(id=session.id).update(
            session_changes, synchronize_session=False
        )
        db.session.refresh(session)

        outcome = pet_rules.evaluate_sale(sale, pet_rules.GoalProgress.of_session(session))
        session.goal_met = outcome.goal_met

        stats = pet_service.ensure_stats(employee.id, now=now)
        db.session.query(AnimalStats).filter_by(id=stats.id).update(
            {
                AnimalStats.health: _capped_health(outcome.health_delta),
                AnimalStats.happiness: outcome.happiness,
                AnimalStats.last_fed: now,
                AnimalStats.total_revenue_cents: AnimalStats.total_revenue_cents + sale.revenue_cents,
            },
            synchronize_session=False,
        )
        db.session.refresh(stats)

        result = {
            "health": stats.health,
            "happiness": stats.happiness,
            "total_revenue": stats.total_revenue_cents / 100,
            "goal_met": outcome.goal_met,
            "health_delta": outcome.health_delta,
            "message": outcome.message,
            "status": pet_rules.pet_status(stats.health, stats.happiness),
        }

    return result
