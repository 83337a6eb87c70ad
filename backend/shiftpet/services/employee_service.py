# Overview: Service-layer lookups for employees and the admin privilege check.

from __future__ import annotations

from ..errors import AuthorizationError, NotFoundError
from ..extensions import db
from ..models import Employee


def get_employee(user_id: int) -> Employee:
    employee = db.session.get(Employee, user_id)
    if not employee:
        raise NotFoundError("User not found")
    return employee


def get_employee_by_username(username: str) -> Employee | None:
    return db.session.query(Employee).filter_by(username=username).first()


def require_admin(user_id: int) -> Employee:
    """Resolve the caller of an admin operation; non-admins are rejected without touching any data."""
    employee = db.session.get(Employee, user_id)
    if not employee:
        raise NotFoundError("Admin user not found")
    if not employee.is_admin:
        raise AuthorizationError("Access denied. Admin privileges required.")
    return employee


def create_employee(*, username: str, name: str, is_admin: bool = False, animal_choice=None) -> Employee:
    employee = Employee(username=username, name=name, is_admin=is_admin)
    if animal_choice is not None:
        employee.animal_choice = animal_choice
    db.session.add(employee)
    db.session.commit()
    return employee
