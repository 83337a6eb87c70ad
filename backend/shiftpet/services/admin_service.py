# Overview: Service-layer read model for the admin fleet overview.

from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_

from ..extensions import db
from ..models import AnimalStats, Employee, WorkSession
from ..time_utils import business_now, to_iso, to_iso_date
from . import pet_rules
from .concurrency import atomic
from .employee_service import require_admin


def _pet_row(employee: Employee, stats: AnimalStats | None, has_session_today: bool, now: datetime) -> dict:
    # Employees who never logged in have no stats row yet; they show as a fresh pet
    health = stats.health if stats else pet_rules.MAX_STAT
    happiness = stats.happiness if stats else pet_rules.MAX_STAT
    return {
        "id": employee.id,
        "username": employee.username,
        "name": employee.name,
        "is_admin": bool(employee.is_admin),
        "animal_choice": employee.animal_choice.value if employee.animal_choice else None,
        "health": health,
        "happiness": happiness,
        "total_revenue": (stats.total_revenue_cents if stats else 0) / 100,
        "last_fed": to_iso(stats.last_fed if stats else now),
        "last_health_reset": to_iso_date(stats.last_health_reset) if stats else None,
        "has_session_today": has_session_today,
        "status": pet_rules.pet_status(health, happiness),
    }


def overview(admin_user_id: int, *, now: datetime | None = None) -> dict:
    """All pets ordered by employee name, plus fleet averages and today's active count."""
    now = now or business_now()

    with atomic("Load admin overview"):
        require_admin(admin_user_id)

        rows = (
            db.session.query(Employee, AnimalStats, WorkSession.id)
            .outerjoin(AnimalStats, AnimalStats.employee_id == Employee.id)
            .outerjoin(
                WorkSession,
                and_(WorkSession.employee_id == Employee.id, WorkSession.session_date == now.date()),
            )
            .order_by(Employee.name.asc(), Employee.id.asc())
            .all()
        )
        pets = [
            _pet_row(employee, stats, session_id is not None, now)
            for employee, stats, session_id in rows
        ]

    summary = pet_rules.summarize_fleet(pets)
    return {"pets": pets, "summary": summary.to_dict()}
