# Overview: Service-layer operations for pet stats and species; encapsulates database work.

from __future__ import annotations

from datetime import datetime

from ..errors import NotFoundError
from ..extensions import db
from ..models import AnimalStats, PetSpecies
from . import pet_rules
from .concurrency import atomic, lock_for_update
from .employee_service import get_employee


def ensure_stats(employee_id: int, *, now: datetime) -> AnimalStats:
    """Locked stats row for the employee, created at full health/happiness on first use."""
    stats = lock_for_update(
        db.session.query(AnimalStats).filter_by(employee_id=employee_id)
    ).first()
    if stats:
        return stats

    stats = AnimalStats(
        employee_id=employee_id,
        health=pet_rules.MAX_STAT,
        happiness=pet_rules.MAX_STAT,
        total_revenue_cents=0,
        last_fed=now,
        last_health_reset=None,
    )
    db.session.add(stats)
    db.session.flush()
    return stats


def stats_payload(stats: AnimalStats) -> dict:
    payload = stats.to_dict()
    payload["status"] = pet_rules.pet_status(stats.health, stats.happiness)
    return payload


def get_stats(user_id: int) -> dict:
    with atomic("Load stats"):
        employee = get_employee(user_id)
        stats = db.session.query(AnimalStats).filter_by(employee_id=employee.id).first()
        if not stats:
            raise NotFoundError("Animal stats not found")
        return stats_payload(stats)


def change_pet(user_id: int, animal_choice: PetSpecies) -> PetSpecies:
    with atomic("Change pet"):
        employee = get_employee(user_id)
        employee.animal_choice = animal_choice
    return animal_choice
